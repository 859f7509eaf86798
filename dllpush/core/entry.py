"""Entry types flowing through a traversal.

A directory listing produces :class:`FreshEntry` values: a bare name plus
a directory flag, meaningful only next to the directory that was read.
Once an entry is deferred for later descent it becomes a
:class:`QueuedEntry`, which carries its path relative to the traversal
root and the depth it was discovered at, so it can be resumed from
anywhere in the walk.
"""

import os
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Union


@dataclass(frozen=True)
class FreshEntry:
    """One child returned by a directory listing."""

    name: str
    is_directory: bool

    def queued(self, parent_relative_path: str, depth: int) -> 'QueuedEntry':
        """Anchor this entry to the traversal root.

        Args:
            parent_relative_path: Root-relative path of the listed directory
                ("" for the root itself)
            depth: Depth of this entry (root children are depth 1)

        Returns:
            QueuedEntry for this child
        """
        if parent_relative_path:
            relative_path = os.path.join(parent_relative_path, self.name)
        else:
            relative_path = self.name
        return QueuedEntry(relative_path, self.is_directory, depth)


@dataclass(frozen=True)
class QueuedEntry:
    """A node awaiting emission and possibly descent."""

    relative_path: str
    is_directory: bool
    depth: int


Entry = Union[FreshEntry, QueuedEntry]


@dataclass
class TraversalState:
    """Mutable state of a single traversal call.

    Created when a traversal starts and dropped when it returns; nothing in
    here is shared between calls.
    """

    root_path: str
    result_list: List[str] = field(default_factory=list)
    pending_queue: Deque[QueuedEntry] = field(default_factory=deque)
    current_depth: int = 0
    current_path: str = ""

    def absolute(self, relative_path: str) -> str:
        """Resolve a root-relative path against the fixed root."""
        if not relative_path:
            return self.root_path
        return os.path.join(self.root_path, relative_path)
