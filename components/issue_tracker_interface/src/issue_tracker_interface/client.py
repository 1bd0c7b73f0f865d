"""Core client contract definitions and factory placeholder."""

from abc import ABC, abstractmethod

from issue_tracker_interface.issue import Issue
from issue_tracker_interface.project import IssueProject

__all__ = ["IssueTrackerClient", "get_client"]


class IssueTrackerClient(ABC):
    """Entry point to one tracker host."""

    @abstractmethod
    def project(self, name: str) -> IssueProject:
        """Get a project."""
        """Args:
            name: The project key on the tracker (e.g. 'PROJ')

        Returns:
            The corresponding IssueProject instance

        """
        raise NotImplementedError

    @abstractmethod
    def get_issue(self, issue_id: str) -> Issue:
        """Get an issue."""
        """Args:
            issue_id: The unique identifier of the issue

        Notes on usage: The returned Issue is a snapshot taken at the time of the call.
        Fetch the issue again to observe changes made since.

        Returns:
            The corresponding Issue instance

        Raises:
            IssueNotFoundError: If no issue with that ID exists

        """
        raise NotImplementedError


def get_client(*, interactive: bool = False) -> IssueTrackerClient:
    """Create instance of client."""
    """
    Args:
        interactive: When True, the implementation can pause, prompt the user for input (login credentials),
                     and wait for input
                     When False, the implementation should rely solely on environment variables or pre-configured credentials

    Returns:
        A concrete IssueTrackerClient instance.

    Raises:
        NotImplementedError: Until replaced by a concrete factory.

    """
    raise NotImplementedError
