"""Test fixtures for dllpush consumers.

These fixtures provide controlled access to traversal internals for
testing purposes without exposing implementation details as part of the
public API.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..core.cache import ResultCache
from ..core.entry import FreshEntry
from ..core.reader import DirectoryEntryReader, EntryReader


class RecordingReader(EntryReader):
    """Reader wrapper that records every directory it is asked to list.

    Example:
        reader = RecordingReader()
        TraversalEngine(reader).traverse(root)
        assert reader.calls == 3
        assert reader.was_read(root / "a")
    """

    def __init__(self, base_reader: Optional[EntryReader] = None):
        super().__init__()
        self._reader = base_reader or DirectoryEntryReader()
        self.read_paths: List[str] = []

    def read(self, path: str, include_files: bool = False) -> List[FreshEntry]:
        self.calls += 1
        self.read_paths.append(str(path))
        return self._reader.read(path, include_files)

    def was_read(self, path: Union[str, Path]) -> bool:
        """Check if a specific directory was listed."""
        return str(path) in self.read_paths

    def reset(self) -> None:
        self.calls = 0
        self.read_paths = []


class CacheTestHelper:
    """Public test fixture for cache verification.

    Example:
        suggester = PathSuggester(cwd)
        helper = CacheTestHelper(suggester.cache)
        assert helper.get_summary()['cache_hits'] == 0
    """

    def __init__(self, cache: ResultCache):
        self._cache = cache

    def get_summary(self) -> Dict[str, Any]:
        """Returns high-level cache state for testing.

        Returns:
            Dictionary containing:
            - has_cache: Whether the slot holds a result
            - last_root_path: Root of the held result
            - cache_hits / cache_misses: Lookup counters
        """
        return {
            'has_cache': len(self._cache) > 0,
            'last_root_path': self._cache.last_root_path,
            'cache_hits': self._cache.cache_hits,
            'cache_misses': self._cache.cache_misses,
        }

    def was_path_cached(self, path: Union[str, Path]) -> bool:
        """Check if the slot holds the result for ``path``."""
        return str(path) in self._cache


def create_tree(base_dir: Path, layout: Dict[str, Any]) -> Path:
    """Create a directory structure from a nested dict.

    Dict values create directories; string values create files with that
    content.

    Example:
        create_tree(tmp_path, {"a": {"x": {}, "f1.txt": "1"}, "b": {}})
    """
    for name, content in layout.items():
        target = base_dir / name
        if isinstance(content, dict):
            target.mkdir(parents=True, exist_ok=True)
            create_tree(target, content)
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
    return base_dir
