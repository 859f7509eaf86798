"""Core traversal components: entries, reader, engine and result cache."""

from .entry import FreshEntry, QueuedEntry, TraversalState
from .reader import EntryReader, DirectoryEntryReader
from .traverser import TraversalEngine, TraversalResult
from .cache import ResultCache

__all__ = [
    'FreshEntry',
    'QueuedEntry',
    'TraversalState',
    'EntryReader',
    'DirectoryEntryReader',
    'TraversalEngine',
    'TraversalResult',
    'ResultCache',
]
