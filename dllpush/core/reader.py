"""Directory listing for dllpush traversals.

The reader is the only component that touches the filesystem. It lists
the immediate children of one directory and classifies each as a file or
a directory; the traversal engine decides what to do with them.
"""

import logging
import os
import stat
from abc import ABC, abstractmethod
from typing import List, Optional

from ..error_policies import ErrorPolicy, LogAndContinuePolicy
from .entry import FreshEntry

logger = logging.getLogger(__name__)


class EntryReader(ABC):
    """Abstract source of directory listings.

    Keeping the listing behind this interface lets the traversal run over
    anything that can name children of a path, and lets tests count or
    script the reads a walk performs.
    """

    def __init__(self):
        self.calls = 0

    @abstractmethod
    def read(self, path: str, include_files: bool = False) -> List[FreshEntry]:
        """List the immediate children of ``path``.

        Args:
            path: Absolute (or cwd-relative) path of the directory to list
            include_files: Whether files are returned alongside directories

        Returns:
            Children in deterministic order; empty when there are none
        """


class DirectoryEntryReader(EntryReader):
    """Reader backed by the local filesystem.

    Best-effort by contract: a path that is a regular file has no
    children, and any ``OSError`` is routed through the error policy
    (logged, empty result by default) instead of propagating.
    """

    def __init__(self,
                 follow_symlinks: bool = False,
                 include_hidden: bool = True,
                 error_policy: Optional[ErrorPolicy] = None):
        """Initialize the reader.

        Args:
            follow_symlinks: Whether symlinked entries are classified by their
                target; when False they are skipped entirely
            include_hidden: Whether dot-prefixed entries are returned
            error_policy: Policy applied to listing failures
                (defaults to LogAndContinuePolicy)
        """
        super().__init__()
        self.follow_symlinks = follow_symlinks
        self.include_hidden = include_hidden
        self.error_policy = error_policy or LogAndContinuePolicy()

    def read(self, path: str, include_files: bool = False) -> List[FreshEntry]:
        self.calls += 1
        try:
            if not stat.S_ISDIR(os.stat(path).st_mode):
                return []  # Files have no children

            entries = []
            with os.scandir(path) as it:
                for dirent in it:
                    entry = self._classify(dirent, include_files)
                    if entry is not None:
                        entries.append(entry)
        except OSError as e:
            return self.error_policy.handle(e, 'read', path)

        entries.sort(key=lambda entry: entry.name)
        logger.debug("Listed %d entries in %s", len(entries), path)
        return entries

    def _classify(self, dirent: os.DirEntry, include_files: bool) -> Optional[FreshEntry]:
        """Turn a scandir entry into a FreshEntry, or None to drop it."""
        if not self.include_hidden and dirent.name.startswith('.'):
            return None

        if not self.follow_symlinks and dirent.is_symlink():
            return None

        if dirent.is_dir(follow_symlinks=self.follow_symlinks):
            return FreshEntry(dirent.name, True)

        # Sockets, fifos and devices are neither
        if include_files and dirent.is_file(follow_symlinks=self.follow_symlinks):
            return FreshEntry(dirent.name, False)

        return None
