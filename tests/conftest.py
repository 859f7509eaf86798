"""Shared fixtures for dllpush tests."""

import pytest
from click.testing import CliRunner

from dllpush.testing import RecordingReader, create_tree


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def small_tree(tmp_path):
    """root/{a/{x, y}, b}"""
    root = tmp_path / "root"
    root.mkdir()
    return create_tree(root, {"a": {"x": {}, "y": {}}, "b": {}})


@pytest.fixture
def file_tree(tmp_path):
    """root/{a/{x, y, f1.txt}, b/{f2.txt}}"""
    root = tmp_path / "root"
    root.mkdir()
    return create_tree(root, {
        "a": {"x": {}, "y": {}, "f1.txt": "one"},
        "b": {"f2.txt": "two"},
    })


@pytest.fixture
def recording_reader():
    return RecordingReader()
