"""Directory traversal for dllpush.

The engine flattens a filesystem subtree into an ordered list of paths
relative to a fixed root. It is a single work-list loop: siblings of the
branch being descended take priority over older deferred branches, which
gives a depth-first bias within a level and a breadth-first fallback
across levels. Nodes at the depth limit are reported as leaves after
everything that can still be descended.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..config import TraversalOptions, normalize_options
from .entry import FreshEntry, QueuedEntry, TraversalState
from .reader import DirectoryEntryReader, EntryReader

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


@dataclass
class TraversalResult:
    """Outcome of one traversal.

    ``paths`` is what an autocomplete prompt should show: the finalized
    list, or empty if the walk aborted. ``partial_paths`` keeps whatever
    had been collected (finalized the same way) when ``error`` is set.
    """

    paths: List[str] = field(default_factory=list)
    partial_paths: List[str] = field(default_factory=list)
    error: Optional[BaseException] = None

    @property
    def complete(self) -> bool:
        return self.error is None


class TraversalEngine:
    """Depth-bounded, exclusion-pruning walk over one directory tree.

    Example:
        engine = TraversalEngine()
        engine.traverse("/home/user/project", TraversalOptions(depth_limit=2))
    """

    def __init__(self, reader: Optional[EntryReader] = None):
        """Initialize the engine.

        Args:
            reader: Source of directory listings
                (defaults to a DirectoryEntryReader)
        """
        self.reader = reader or DirectoryEntryReader()

    def traverse(self, root_path: PathLike,
                 options: Optional[TraversalOptions] = None) -> List[str]:
        """Walk ``root_path`` and return the flattened path list.

        Any failure during the walk aborts it; the error is logged and an
        empty list is returned. Already collected paths are dropped rather
        than offered as a silently truncated suggestion list; use
        :meth:`run` to get at them.

        Args:
            root_path: Directory to walk; a file yields nothing
            options: Traversal options (defaults apply when None)

        Returns:
            Ordered root-relative paths (or base names), optionally led by
            the root sentinel label

        Raises:
            ValueError: If ``options`` fail validation
        """
        return self.run(root_path, options).paths

    def run(self, root_path: PathLike,
            options: Optional[TraversalOptions] = None) -> TraversalResult:
        """Walk ``root_path`` and report the outcome explicitly.

        Same walk as :meth:`traverse`, but an abort is visible through
        ``TraversalResult.error`` together with the partial list.
        """
        options = normalize_options(options)
        state = TraversalState(root_path=os.fspath(root_path))

        try:
            self._walk(state, options)
        except Exception as e:
            logger.exception("Traversal of %s aborted", state.root_path)
            return TraversalResult(
                paths=[],
                partial_paths=self._finalize(state, options),
                error=e,
            )

        return TraversalResult(paths=self._finalize(state, options))

    def _walk(self, state: TraversalState, options: TraversalOptions) -> None:
        children = self.reader.read(state.root_path, options.include_files)

        while True:
            descendable = self._admit(state, options, children)

            if descendable:
                selected = descendable[0]
                # Remaining siblings go ahead of older deferred branches
                state.pending_queue.extendleft(reversed(descendable[1:]))
            elif state.pending_queue:
                selected = state.pending_queue.popleft()
            else:
                return

            if options.report_directories or not selected.is_directory:
                state.result_list.append(selected.relative_path)

            state.current_depth = selected.depth
            state.current_path = selected.relative_path

            if selected.is_directory and not self._at_limit(selected.depth, options):
                children = self.reader.read(
                    state.absolute(selected.relative_path), options.include_files)
            else:
                children = []

    def _admit(self, state: TraversalState, options: TraversalOptions,
               children: List[FreshEntry]) -> List[QueuedEntry]:
        """Prune and anchor the children of the directory just read.

        Excluded children are dropped before anything can read them.
        Children at the depth limit are deferred to the tail of the queue
        as leaves; the rest are returned as candidates for descent.
        """
        depth = state.current_depth + 1
        descendable = []

        for child in children:
            entry = child.queued(state.current_path, depth)
            if options.exclude_path(entry.relative_path):
                logger.debug("Pruned %s", entry.relative_path)
                continue
            if self._at_limit(depth, options):
                state.pending_queue.append(entry)
            else:
                descendable.append(entry)

        return descendable

    @staticmethod
    def _at_limit(depth: int, options: TraversalOptions) -> bool:
        return options.depth_limit is not None and depth >= options.depth_limit

    @staticmethod
    def _finalize(state: TraversalState, options: TraversalOptions) -> List[str]:
        paths = state.result_list
        if options.base_name_only:
            paths = [os.path.basename(path) for path in paths]
        else:
            paths = list(paths)

        if options.include_root_sentinel:
            paths.insert(0, options.root_sentinel_label)

        return paths
