"""Issue contract - Core issue representation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

from issue_tracker_interface.comment import Comment
from issue_tracker_interface.link import Link
from issue_tracker_interface.user import HostUser

if TYPE_CHECKING:
    from issue_tracker_interface.project import IssueProject


#the backend status strings collapse onto these three states; many open-like statuses become OPEN
class State(str, Enum):
    OPEN = "open"
    RESOLVED = "resolved"
    CLOSED = "closed"


class Issue(ABC):
    """Abstract base class representing one issue as fetched from a tracker.

    An Issue is a point-in-time snapshot. Mutators write to the tracker
    immediately; reads keep returning the fetched values (labels excepted,
    which are re-fetched after a label mutation).
    """

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------
    @property
    @abstractmethod
    def project(self) -> IssueProject:
        """Return the project the issue belongs to."""
        raise NotImplementedError

    @property
    @abstractmethod
    def id(self) -> str:
        """Return the unique identifier of the issue"""
        raise NotImplementedError

    @property
    @abstractmethod
    def title(self) -> str:
        """Return the title of the issue."""
        raise NotImplementedError

    @property
    @abstractmethod
    def body(self) -> str:
        """Return the body of the issue, or an empty string."""
        raise NotImplementedError

    @property
    @abstractmethod
    def author(self) -> HostUser:
        raise NotImplementedError

    @property
    @abstractmethod
    def status(self) -> str:
        """Return the free-text status as reported by the tracker."""
        raise NotImplementedError

    @property
    @abstractmethod
    def state(self) -> State:
        """Return the normalized state derived from the status."""
        raise NotImplementedError

    @property
    @abstractmethod
    def resolution(self) -> str | None:
        raise NotImplementedError

    @property
    @abstractmethod
    def created_at(self) -> datetime:
        raise NotImplementedError

    @property
    @abstractmethod
    def updated_at(self) -> datetime:
        raise NotImplementedError

    @property
    @abstractmethod
    def assignees(self) -> list[HostUser]:
        """Return the assignees. Trackers without multi-assignee support return at most one."""
        raise NotImplementedError

    @property
    @abstractmethod
    def labels(self) -> list[str]:
        raise NotImplementedError

    @property
    @abstractmethod
    def web_url(self) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def is_fixed(self) -> bool:
        raise NotImplementedError

    @property
    def is_open(self) -> bool:
        return self.state == State.OPEN

    @property
    def is_resolved(self) -> bool:
        return self.state == State.RESOLVED

    @property
    def is_closed(self) -> bool:
        return self.state == State.CLOSED

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------
    @abstractmethod
    def set_title(self, title: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def set_body(self, body: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def set_state(self, state: State) -> None:
        """Move the issue to the given state.

        Raises:
            TransitionError: If the tracker offers no path to the state.

        """
        raise NotImplementedError

    @abstractmethod
    def set_assignees(self, assignees: list[HostUser]) -> None:
        raise NotImplementedError

    @abstractmethod
    def add_label(self, label: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def remove_label(self, label: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def set_labels(self, labels: list[str]) -> None:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------
    @abstractmethod
    def comments(self) -> list[Comment]:
        raise NotImplementedError

    @abstractmethod
    def add_comment(self, body: str) -> Comment:
        raise NotImplementedError

    @abstractmethod
    def update_comment(self, comment_id: str, body: str) -> Comment:
        raise NotImplementedError

    @abstractmethod
    def remove_comment(self, comment: Comment) -> None:
        """Delete a comment. Deleting an already deleted comment is not an error."""
        raise NotImplementedError

    @abstractmethod
    def comment_url(self, comment: Comment) -> str:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Links
    # ------------------------------------------------------------------
    @abstractmethod
    def links(self) -> list[Link]:
        raise NotImplementedError

    @abstractmethod
    def add_link(self, link: Link) -> None:
        """Attach a link to the issue.

        Raises:
            NoSuchLinkTypeError: If an issue link's relationship is not declared.
            MalformedInputError: If link is neither a WebLink nor an IssueLink.

        """
        raise NotImplementedError

    @abstractmethod
    def remove_link(self, link: Link) -> None:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @abstractmethod
    def properties(self) -> dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def set_property(self, name: str, value: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    def remove_property(self, name: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def closed_by(self) -> HostUser | None:
        raise NotImplementedError

    #equivalent to Javas .toString()
    def __repr__(self) -> str:
        return f"<Issue id={self.id!r} title={self.title!r} state={self.state}>"
