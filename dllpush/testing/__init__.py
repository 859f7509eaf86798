"""Testing utilities for dllpush consumers."""

from .fixtures import CacheTestHelper, RecordingReader, create_tree

__all__ = ['CacheTestHelper', 'RecordingReader', 'create_tree']
