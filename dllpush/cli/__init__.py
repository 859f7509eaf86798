"""dll-push CLI: push docassemble packages to a playground."""

from ._helpers import main  # noqa: F401  (entry point)

# Import command modules to register Click commands with the main group.
from . import _push, _ls  # noqa: F401
