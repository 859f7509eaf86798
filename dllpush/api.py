"""High-level API for dllpush.

This module provides simple, functional interfaces over the traversal
engine for the common cases the prompts need. These functions wrap the
object-oriented API for ease of use.
"""

import re
from typing import List, Optional

from .config import EntryType, TraversalOptions
from .core.cache import ResultCache
from .core.reader import DirectoryEntryReader, EntryReader
from .core.traverser import PathLike, TraversalEngine

_WHITESPACE = re.compile(r"\s+")


def get_directories(source: PathLike,
                    include_files: bool = False,
                    reader: Optional[EntryReader] = None) -> List[str]:
    """Names of the immediate children of ``source``.

    No subdirectories are traversed.

    Args:
        source: Directory to list
        include_files: Whether files are listed alongside directories
        reader: Reader to use (defaults to a DirectoryEntryReader)

    Returns:
        Child names in listing order; empty for files and unreadable paths

    Example:
        >>> get_directories("/srv/docassemble-Demo")
        ['docassemble', 'tests']
    """
    reader = reader or DirectoryEntryReader()
    return [entry.name for entry in reader.read(str(source), include_files)]


def get_directories_recursive(
    source: PathLike,
    entry_type: Optional[EntryType] = None,
    base_name_only: Optional[bool] = None,
    depth_limit: Optional[int] = None,
    exclude_path=None,
    include_root_sentinel: Optional[bool] = None,
    root_sentinel_label: Optional[str] = None,
    unbounded: bool = False,
    engine: Optional[TraversalEngine] = None,
) -> List[str]:
    """Flattened list of directories (and optionally files) under ``source``.

    Arguments left as None take the TraversalOptions defaults.

    Args:
        source: Root of the walk
        entry_type: Whether to report files, directories or both
        base_name_only: Report ``folderName`` instead of ``src/folderName``
        depth_limit: How many levels to descend (default 3)
        exclude_path: Predicate on relative paths; True prunes the subtree
        include_root_sentinel: Put a label for the root first
        root_sentinel_label: Text of that label (default ".")
        unbounded: Ignore the depth limit and walk the whole tree
        engine: Engine to use (defaults to a fresh TraversalEngine)

    Returns:
        Ordered paths relative to ``source``

    Example:
        >>> get_directories_recursive(".", depth_limit=2)
        ['docassemble', 'tests', 'docassemble/Demo']
    """
    options = TraversalOptions.create(
        entry_type=entry_type,
        base_name_only=base_name_only,
        depth_limit=depth_limit,
        exclude_path=exclude_path,
        include_root_sentinel=include_root_sentinel,
        root_sentinel_label=root_sentinel_label,
        unbounded=unbounded,
    )
    engine = engine or TraversalEngine()
    return engine.traverse(source, options)


def get_current_dirs_once(cache: ResultCache,
                          source: PathLike,
                          options: Optional[TraversalOptions] = None) -> List[str]:
    """Traverse ``source`` through ``cache`` so repeated calls reuse the walk.

    Args:
        cache: Cache owned by the calling prompt session
        source: Root of the walk
        options: Options for the walk if the cache misses

    Returns:
        Ordered paths relative to ``source``
    """
    return cache.get_or_compute(source, options)


def is_empty(value: Optional[str]) -> bool:
    """True for None, the empty string, or whitespace only."""
    return not value or value.strip() == ""


def contains_whitespace(value: str) -> bool:
    """True if ``value`` has any whitespace character in it."""
    return bool(_WHITESPACE.search(value))
