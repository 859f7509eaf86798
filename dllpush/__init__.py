"""dllpush - push local docassemble packages to a remote playground.

The interactive wizard collects the API key, playground project and package
folder, then runs the playground manager script. Folder and project-name
prompts are backed by a depth-bounded, exclusion-pruning directory walk:

    from dllpush import TraversalEngine, TraversalOptions
    TraversalEngine().traverse(".", TraversalOptions(depth_limit=2))
"""

__version__ = "0.1.0"

from .config import (
    EntryType,
    TraversalOptions,
    default_exclude_path,
)
from .core import (
    FreshEntry,
    QueuedEntry,
    TraversalState,
    EntryReader,
    DirectoryEntryReader,
    TraversalEngine,
    TraversalResult,
    ResultCache,
)
from .error_policies import (
    ErrorPolicy,
    FailFastPolicy,
    CollectErrorsPolicy,
    LogAndContinuePolicy,
)
from .api import (
    get_directories,
    get_directories_recursive,
    get_current_dirs_once,
    is_empty,
    contains_whitespace,
)

__all__ = [
    "__version__",
    # Config
    "EntryType",
    "TraversalOptions",
    "default_exclude_path",
    # Core
    "FreshEntry",
    "QueuedEntry",
    "TraversalState",
    "EntryReader",
    "DirectoryEntryReader",
    "TraversalEngine",
    "TraversalResult",
    "ResultCache",
    # Errors
    "ErrorPolicy",
    "FailFastPolicy",
    "CollectErrorsPolicy",
    "LogAndContinuePolicy",
    # API
    "get_directories",
    "get_directories_recursive",
    "get_current_dirs_once",
    "is_empty",
    "contains_whitespace",
]
