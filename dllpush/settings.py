"""Project configuration for dllpush.

Each project keeps its API keys and known playground project names in
``dll_config/dll.config.json`` under the working directory. The folder is
added to the project's ``.gitignore`` when the file is first written so
keys are not committed by accident.
"""

import json
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .api import contains_whitespace, is_empty

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = "dll_config"
CONFIG_FILE_NAME = "dll.config.json"
SECRETS_FILE_NAME = "secrets.json"

DEV_API_ROOT = "https://dev.dll.org.au/da/api"
APP_API_ROOT = "https://app.dll.org.au/da/api"
API_ROOTS = [DEV_API_ROOT, APP_API_ROOT]

DEFAULT_KEY_NAME = "dev_api_key"
ADDITIONAL_KEY_NAME = "production_api_key"
TEMPORARY_KEY_NAME = "dll_api_key"

GITIGNORE_HEADER = "# Digital Law Lab Config"
GITIGNORE_RULE = f"{CONFIG_DIR_NAME}/**"

_PROJECT_NAME = re.compile(r"^[A-Za-z0-9-]+$")


class ConfigError(Exception):
    """The configuration file exists but cannot be used."""


@dataclass
class ApiKey:
    """One stored credential for a docassemble server."""

    api_key: str
    api_root: str = DEV_API_ROOT

    def to_dict(self) -> Dict[str, str]:
        return {"api_key": self.api_key, "api_root": self.api_root}


@dataclass
class ProjectConfig:
    """Contents of ``dll.config.json``."""

    api_keys: Dict[str, ApiKey] = field(default_factory=dict)
    playground_projects: List[str] = field(default_factory=list)

    @property
    def api_key_names(self) -> List[str]:
        return list(self.api_keys)

    def to_dict(self) -> dict:
        return {
            "API_keys": {name: key.to_dict() for name, key in self.api_keys.items()},
            "DA_playground_projects": list(self.playground_projects),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ProjectConfig':
        """Build a config from the parsed JSON document.

        Raises:
            ConfigError: If a section is missing or has the wrong shape
        """
        try:
            keys = data["API_keys"]
            projects = data["DA_playground_projects"]
        except (KeyError, TypeError) as e:
            raise ConfigError(f"Missing configuration section: {e}") from e

        if not isinstance(keys, dict) or not isinstance(projects, list):
            raise ConfigError("API_keys must be an object and DA_playground_projects a list")

        api_keys = {}
        for name, entry in keys.items():
            try:
                api_keys[name] = ApiKey(entry["api_key"], entry.get("api_root", DEV_API_ROOT))
            except (KeyError, TypeError, AttributeError) as e:
                raise ConfigError(f"API key '{name}' is malformed") from e

        return cls(api_keys=api_keys, playground_projects=[str(p) for p in projects])


def config_dir(cwd: str) -> str:
    return os.path.join(cwd, CONFIG_DIR_NAME)


def config_path(cwd: str) -> str:
    """Full path of the configuration file for the project at ``cwd``."""
    return os.path.join(config_dir(cwd), CONFIG_FILE_NAME)


def load_config(cwd: str) -> Optional[ProjectConfig]:
    """Read the project's configuration.

    Args:
        cwd: Project directory

    Returns:
        The parsed configuration, or None if there is no config file

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    path = config_path(cwd)
    if not os.path.exists(path):
        return None

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read {path}: {e}") from e

    config = ProjectConfig.from_dict(data)
    logger.debug("Loaded %d API keys and %d projects from %s",
                 len(config.api_keys), len(config.playground_projects), path)
    return config


def save_config(config: ProjectConfig, cwd: str) -> str:
    """Write the configuration and keep it out of version control.

    Args:
        config: Configuration to store
        cwd: Project directory

    Returns:
        Path of the written file
    """
    path = config_path(cwd)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
        f.write("\n")

    ensure_gitignored(cwd)
    logger.info("Saved configuration to %s", path)
    return path


def ensure_gitignored(cwd: str) -> bool:
    """Append the config folder rule to ``.gitignore`` unless present.

    Returns:
        True if the rule was added
    """
    gitignore = os.path.join(cwd, ".gitignore")
    existing = ""
    if os.path.exists(gitignore):
        with open(gitignore, encoding="utf-8") as f:
            existing = f.read()

    if GITIGNORE_RULE in existing.splitlines():
        return False

    with open(gitignore, "a", encoding="utf-8") as f:
        f.write(f"\n{GITIGNORE_HEADER}\n{GITIGNORE_RULE}\n")
    return True


def write_secrets(cwd: str, key_name: str, key: ApiKey) -> str:
    """Write a one-key secrets file for the push script.

    The script only accepts a path to a secrets file, not the key itself.

    Returns:
        Path of the secrets file
    """
    path = os.path.join(config_dir(cwd), SECRETS_FILE_NAME)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump({key_name: key.to_dict()}, f, indent=2)
    return path


# Validators return an error message, or None when the value is acceptable

def validate_project_name(value: Optional[str]) -> Optional[str]:
    if is_empty(value):
        return "Project name cannot be empty"
    if not _PROJECT_NAME.match(value):
        return "Project name must only contain letters, numbers, or hyphens, without any space"
    return None


def validate_api_key(value: Optional[str]) -> Optional[str]:
    if is_empty(value):
        return "API key cannot be empty"
    if contains_whitespace(value):
        return "API key must not contain any whitespace character"
    return None
