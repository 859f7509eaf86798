"""
Test suite for ResultCache.

Tests the single-slot behaviour the autocomplete prompts depend on:
1. Repeated queries for one root do not re-read the filesystem
2. A different root replaces the held result
3. Callers cannot corrupt the slot through returned lists
"""

import os

import pytest

from dllpush.config import EntryType, TraversalOptions
from dllpush.core.cache import ResultCache
from dllpush.core.traverser import TraversalEngine
from dllpush.testing import CacheTestHelper, RecordingReader, create_tree


@pytest.fixture
def two_roots(tmp_path):
    first = create_tree(tmp_path / "first", {"a": {}, "b": {}})
    second = create_tree(tmp_path / "second", {"c": {}})
    return first, second


def test_hit_avoids_reread(small_tree):
    reader = RecordingReader()
    cache = ResultCache(TraversalEngine(reader))

    first = cache.get_or_compute(small_tree)
    reads_after_first = reader.calls
    second = cache.get_or_compute(small_tree)

    assert first == second
    assert reader.calls == reads_after_first
    assert cache.cache_hits == 1
    assert cache.cache_misses == 1


def test_hit_ignores_differing_options(small_tree):
    reader = RecordingReader()
    cache = ResultCache(TraversalEngine(reader))

    full = cache.get_or_compute(small_tree, TraversalOptions())
    reads = reader.calls
    names = cache.get_or_compute(small_tree, TraversalOptions(base_name_only=True))

    # Keyed on the root only: the first result is served again
    assert names == full
    assert reader.calls == reads


def test_new_root_evicts_previous(two_roots):
    first, second = two_roots
    reader = RecordingReader()
    cache = ResultCache(TraversalEngine(reader))

    assert cache.get_or_compute(first) == ["a", "b"]
    assert cache.get_or_compute(second) == ["c"]
    assert first not in cache
    assert len(cache) == 1

    reader.reset()
    assert cache.get_or_compute(first) == ["a", "b"]
    assert reader.calls == 3  # root, a, b walked again
    assert cache.cache_misses == 3


def test_last_root_path(two_roots):
    first, second = two_roots
    cache = ResultCache()
    assert cache.last_root_path is None

    cache.get_or_compute(first)
    cache.get_or_compute(second)
    assert cache.last_root_path == os.fspath(second)


def test_returned_list_is_a_copy(small_tree):
    cache = ResultCache()
    result = cache.get_or_compute(small_tree)
    result.append("injected")
    assert "injected" not in cache.get_or_compute(small_tree)


def test_empty_result_is_cached(tmp_path):
    reader = RecordingReader()
    cache = ResultCache(TraversalEngine(reader))

    assert cache.get_or_compute(tmp_path, TraversalOptions(entry_type=EntryType.FILE)) == []
    assert cache.get_or_compute(tmp_path) == []
    assert reader.calls == 1
    assert cache.cache_hits == 1


def test_cache_test_helper_summary(small_tree):
    cache = ResultCache()
    helper = CacheTestHelper(cache)
    assert helper.get_summary()["has_cache"] is False

    cache.get_or_compute(small_tree)
    summary = helper.get_summary()
    assert summary["has_cache"] is True
    assert summary["last_root_path"] == str(small_tree)
    assert helper.was_path_cached(small_tree)
