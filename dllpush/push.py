"""
Push runner for dllpush.

Pushing is delegated to ``docassemble_playground_manager.py``, an external
script that talks to the docassemble playground API. This module runs the
steps around it in order: check the interpreter, hand the chosen key to
the script through a temporary secrets file, run the script, and clean up.
"""

import logging
import os
import subprocess
import sys
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .api import is_empty
from .settings import ApiKey, write_secrets

logger = logging.getLogger(__name__)

SCRIPT_NAME = "docassemble_playground_manager.py"
SCRIPT_ENV_VAR = "DLL_PUSH_SCRIPT"

CHECK_PYTHON_TITLE = "Checking python installation"
CREATE_SECRETS_TITLE = "Creating a temporary `secrets.json`"
RUN_SCRIPT_TITLE = f"Running `{SCRIPT_NAME}`"
CLEANUP_TITLE = "Cleaning up temporary residues"

# Reporter signature: (title, status, output) where status is one of
# "ok", "warning", "debug", "failed"
Reporter = Callable[[str, str, str], None]


class PushError(Exception):
    """A push step failed; the message says which and why."""


def default_python() -> str:
    return "python" if sys.platform == "win32" else "python3"


def default_script_path() -> str:
    """Script location: ``$DLL_PUSH_SCRIPT``, else a python-scripts folder beside the package."""
    override = os.environ.get(SCRIPT_ENV_VAR)
    if override:
        return override
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "python-scripts", SCRIPT_NAME)


@dataclass
class PushRequest:
    """Everything the wizard collected for one push."""

    project: str
    folder: str
    key_name: str
    key: ApiKey
    cwd: str = field(default_factory=os.getcwd)


@dataclass
class PushOutcome:
    """What happened while the push script ran."""

    output: str = ""
    warning_encountered: bool = False
    warning_msg: str = ""
    debug_encountered: bool = False
    debug_msg: str = ""
    script_done_without_expected_error: bool = False
    secrets_removed: bool = False
    python_version: str = ""


def _log_reporter(title: str, status: str, output: str) -> None:
    level = logging.WARNING if status in ("warning", "failed") else logging.INFO
    logger.log(level, "%s [%s] %s", title, status.upper(), output)


class PushRunner:
    """Runs the push steps strictly one after another.

    Example:
        runner = PushRunner(reporter=print_status)
        outcome = runner.run(PushRequest("Demo", "/src/docassemble-Demo",
                                         "dev_api_key", key))
    """

    def __init__(self,
                 python: Optional[str] = None,
                 script_path: Optional[str] = None,
                 reporter: Optional[Reporter] = None):
        """
        Initialize the runner.

        Args:
            python: Interpreter used to run the script
            script_path: Path to the push script
            reporter: Callback receiving one status line per step
        """
        self.python = python or default_python()
        self.script_path = script_path or default_script_path()
        self.reporter = reporter or _log_reporter

    def run(self, request: PushRequest) -> PushOutcome:
        """
        Push ``request.folder`` to ``request.project``.

        Returns:
            PushOutcome describing warnings and output

        Raises:
            PushError: If any step fails
        """
        outcome = PushOutcome()
        self.check_python(outcome)
        secrets_path = self.create_secrets(request)
        self.run_script(request, secrets_path, outcome)

        # An expected script error leaves the file for inspection
        if outcome.script_done_without_expected_error:
            self.remove_secrets(secrets_path, outcome)

        return outcome

    def check_python(self, outcome: PushOutcome) -> None:
        try:
            result = subprocess.run([self.python, "--version"],
                                    capture_output=True, text=True)
        except OSError as e:
            self.reporter(CHECK_PYTHON_TITLE, "failed",
                          "Couldn't run python, make sure it is installed and accessible!")
            raise PushError(f"Python interpreter '{self.python}' not found") from e

        if result.returncode != 0:
            self.reporter(CHECK_PYTHON_TITLE, "failed",
                          "Couldn't run python, make sure it is installed and accessible!")
            raise PushError(f"'{self.python} --version' exited with {result.returncode}")

        # Python 2 printed its version on stderr
        outcome.python_version = (result.stdout or result.stderr).strip()
        self.reporter(CHECK_PYTHON_TITLE, "ok", f"{outcome.python_version} was found")

    def create_secrets(self, request: PushRequest) -> str:
        try:
            path = write_secrets(request.cwd, request.key_name, request.key)
        except OSError as e:
            self.reporter(CREATE_SECRETS_TITLE, "failed", str(e))
            raise PushError(f"Could not write temporary secrets file: {e}") from e

        self.reporter(CREATE_SECRETS_TITLE, "ok", "File created successfully")
        return path

    def build_command(self, request: PushRequest, secrets_path: str) -> List[str]:
        return [
            self.python,
            self.script_path,
            "--secrets_file", secrets_path,
            "--secret", request.key_name,
            "--push",
            "--project", request.project,
            "--package", request.folder,
        ]

    def run_script(self, request: PushRequest, secrets_path: str,
                   outcome: PushOutcome) -> None:
        if not os.path.isfile(self.script_path):
            self.reporter(RUN_SCRIPT_TITLE, "failed", "Failed to run the script")
            raise PushError(f"Push script not found at {self.script_path} "
                            f"(set {SCRIPT_ENV_VAR} to its location)")

        command = self.build_command(request, secrets_path)
        logger.debug("Running %s", " ".join(command[:2]))
        try:
            result = subprocess.run(command, capture_output=True, text=True)
        except OSError as e:
            self.reporter(RUN_SCRIPT_TITLE, "failed", "Failed to run the script")
            raise PushError(f"Failed to run the script: {e}") from e

        if result.returncode != 0:
            self.reporter(RUN_SCRIPT_TITLE, "failed", result.stderr.strip())
            raise PushError(f"{SCRIPT_NAME} exited with {result.returncode}:\n{result.stderr}")

        self._classify_stderr(result.stdout, result.stderr, outcome)
        outcome.script_done_without_expected_error = True

    def _classify_stderr(self, stdout: str, stderr: str, outcome: PushOutcome) -> None:
        """Sort the script's log lines into debug, error, warning or plain output."""
        if is_empty(stderr):
            outcome.output = stdout
            self.reporter(RUN_SCRIPT_TITLE, "ok", stdout.strip())
            return

        if "DEBUG" in stderr:
            outcome.debug_encountered = True
            outcome.debug_msg = stderr
            self.reporter(f"{RUN_SCRIPT_TITLE}[DEBUG]", "debug", "")

        if "ERROR" in stderr:
            self.reporter(f"{RUN_SCRIPT_TITLE}[ERROR]", "failed", stderr.strip())
            raise PushError(stderr.strip())

        if "WARNING" in stderr:
            outcome.warning_encountered = True
            outcome.warning_msg = stderr
            self.reporter(f"{RUN_SCRIPT_TITLE}[WARNING]", "warning", "")
        else:
            # Unrecognised log output, hand it to the user as-is
            outcome.output = stderr
            if not outcome.debug_encountered:
                self.reporter(RUN_SCRIPT_TITLE, "ok", stderr.strip())

    def remove_secrets(self, secrets_path: str, outcome: PushOutcome) -> None:
        try:
            os.remove(secrets_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            self.reporter(CLEANUP_TITLE, "failed", str(e))
            raise PushError(f"Could not remove {secrets_path}: {e}") from e

        outcome.secrets_removed = True
        self.reporter(CLEANUP_TITLE, "ok", "")
