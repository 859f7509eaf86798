"""
Error handling policies for dllpush directory listings.

A listing that fails (permission denied, entry vanished between
enumeration and stat, path missing) is handed to a policy, which decides
whether the walk degrades around the failed directory or stops.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    Subclasses implement different strategies for handling errors
    raised while listing a directory.
    """

    @abstractmethod
    def handle(self, error: Exception, method_name: str, path: str) -> Any:
        """
        Handle an error raised by a filesystem operation.

        Args:
            error: The exception that was raised
            method_name: Name of the operation that failed (e.g. 'read')
            path: The path being processed when the error occurred

        Returns:
            A sensible default value that allows traversal to continue,
            or re-raises the exception to stop traversal.
        """


class FailFastPolicy(ErrorPolicy):
    """
    Policy that immediately re-raises any error.

    Inside a traversal this turns an unreadable subdirectory into an
    aborted walk.
    """

    def handle(self, error: Exception, method_name: str, path: str) -> Any:
        raise error


class CollectErrorsPolicy(ErrorPolicy):
    """
    Policy that records errors without logging and returns defaults.

    Useful when the caller wants to present the degraded subtrees
    afterwards, e.g. to tell an empty folder from an unreadable one.
    """

    def __init__(self):
        self.errors: List[Dict[str, Any]] = []
        self.skipped_paths: List[str] = []

    def handle(self, error: Exception, method_name: str, path: str) -> Any:
        self.errors.append({
            'path': path,
            'method': method_name,
            'error': error,
            'error_type': type(error).__name__,
            'error_message': str(error),
        })
        if isinstance(error, OSError):
            self.skipped_paths.append(path)
        return _default_for(method_name)

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        return {
            'total_errors': len(self.errors),
            'permission_errors': sum(1 for e in self.errors if e['error_type'] == 'PermissionError'),
            'skipped_paths': len(self.skipped_paths),
            'errors': self.errors,
        }


class LogAndContinuePolicy(CollectErrorsPolicy):
    """
    Policy that logs errors and continues traversal.

    This is the default for directory listings: a single unreadable
    subdirectory is reported once at WARNING level and then treated as
    having no children.
    """

    def handle(self, error: Exception, method_name: str, path: str) -> Any:
        if isinstance(error, PermissionError):
            logger.warning("Skipping inaccessible path '%s': %s", path, error)
        else:
            logger.warning("Error in %s for '%s': %s", method_name, path, error)
        return super().handle(error, method_name, path)


def _default_for(method_name: str) -> Any:
    if method_name in ('read', 'get_children', 'list_children'):
        return []
    return None
