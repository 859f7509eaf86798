"""Configuration system for dllpush traversals.

This module defines how callers specify what a directory walk should
produce: which entry types to report, how deep to go, which subtrees to
prune, and how the final list is presented.
"""

import os
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, List, Optional


class EntryType(Enum):
    """Which filesystem entries a traversal reports."""
    FILE = "file"            # Files only (directories are walked, not reported)
    DIRECTORY = "directory"  # Directories only
    BOTH = "both"            # Files and directories


# Directory names that are never worth offering as a push target
DEFAULT_EXCLUDED_NAMES = frozenset({"node_modules", ".git", "__pycache__"})

DEFAULT_DEPTH_LIMIT = 3
DEFAULT_ROOT_SENTINEL_LABEL = "."


def default_exclude_path(relative_path: str) -> bool:
    """Prune well-known tool-internal directories.

    Matches any path that contains ``node_modules`` or ``.git`` anywhere
    in it (so ``.github`` and ``.gitignore`` are pruned too), or that has a
    ``__pycache__`` component.

    Args:
        relative_path: Path relative to the traversal root

    Returns:
        True if the path should be pruned
    """
    if "node_modules" in relative_path or ".git" in relative_path:
        return True
    return "__pycache__" in relative_path.split(os.sep)


@dataclass
class TraversalOptions:
    """Complete configuration for one directory traversal.

    Unset fields take the defaults used by the path-autocomplete prompts:
    directories only, three levels deep, tool-internal folders pruned.
    """

    entry_type: EntryType = EntryType.DIRECTORY
    base_name_only: bool = False
    depth_limit: Optional[int] = DEFAULT_DEPTH_LIMIT  # None = unbounded
    exclude_path: Callable[[str], bool] = field(default=default_exclude_path)
    include_root_sentinel: bool = False
    root_sentinel_label: str = DEFAULT_ROOT_SENTINEL_LABEL

    @property
    def include_files(self) -> bool:
        """Whether listings must include files as well as directories."""
        return self.entry_type is not EntryType.DIRECTORY

    @property
    def report_directories(self) -> bool:
        """Whether directory entries are emitted into the result list."""
        return self.entry_type is not EntryType.FILE

    @classmethod
    def create(cls, **kwargs) -> 'TraversalOptions':
        """Build options from keyword arguments, ignoring ``None`` values.

        ``entry_type`` may be given as an :class:`EntryType` or its string
        value (``"file"``, ``"directory"``, ``"both"``). Pass
        ``unbounded=True`` to request an unlimited depth, since a ``None``
        depth limit means "use the default" here.

        Returns:
            TraversalOptions with the given overrides applied
        """
        unbounded = kwargs.pop("unbounded", False)
        overrides = {key: value for key, value in kwargs.items() if value is not None}
        if isinstance(overrides.get("entry_type"), str):
            overrides["entry_type"] = EntryType(overrides["entry_type"].lower())
        options = cls(**overrides)
        if unbounded:
            options.depth_limit = None
        return options

    def with_overrides(self, **kwargs) -> 'TraversalOptions':
        """Return a copy of these options with some fields replaced."""
        return replace(self, **kwargs)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.entry_type, EntryType):
            errors.append(f"entry_type must be an EntryType, got {self.entry_type!r}")

        if self.depth_limit is not None:
            if isinstance(self.depth_limit, bool) or not isinstance(self.depth_limit, int):
                errors.append("depth_limit must be an integer or None")
            elif self.depth_limit < 1:
                errors.append("depth_limit must be at least 1")

        if not callable(self.exclude_path):
            errors.append("exclude_path must be callable")

        if self.include_root_sentinel and not self.root_sentinel_label:
            errors.append("root_sentinel_label cannot be empty when include_root_sentinel is set")

        return errors


def normalize_options(options: Optional[TraversalOptions]) -> TraversalOptions:
    """Fill in defaults and reject inconsistent option sets.

    Args:
        options: Caller supplied options, or None for all defaults

    Returns:
        A validated TraversalOptions instance

    Raises:
        ValueError: If the options fail validation
    """
    if options is None:
        options = TraversalOptions()
    errors = options.validate()
    if errors:
        raise ValueError("Invalid traversal options: " + "; ".join(errors))
    return options
