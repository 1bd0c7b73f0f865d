"""Backend-neutral issue tracker contracts."""

from issue_tracker_interface.client import IssueTrackerClient
from issue_tracker_interface.comment import Comment
from issue_tracker_interface.errors import (
    IssueNotFoundError,
    MalformedInputError,
    NoSuchLinkTypeError,
    TrackerError,
    TransitionError,
    UnsupportedOperationError,
)
from issue_tracker_interface.issue import Issue, State
from issue_tracker_interface.link import IssueLink, Link, LinkType, WebLink
from issue_tracker_interface.project import IssueProject
from issue_tracker_interface.user import HostUser

__all__ = [
    "Comment",
    "HostUser",
    "Issue",
    "IssueLink",
    "IssueNotFoundError",
    "IssueProject",
    "IssueTrackerClient",
    "Link",
    "LinkType",
    "MalformedInputError",
    "NoSuchLinkTypeError",
    "State",
    "TrackerError",
    "TransitionError",
    "UnsupportedOperationError",
    "WebLink",
]
