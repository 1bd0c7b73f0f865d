"""Link contract - a link is either a web link or an issue link, never both."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from issue_tracker_interface.issue import Issue


@dataclass(frozen=True)
class WebLink:
    """Link from an issue to an external URI.

    Instances are immutable; use the ``with_*`` helpers to derive a copy with
    more metadata set.
    """

    uri: str
    title: str
    summary: str | None = None
    relationship: str | None = None
    resolved: bool = False
    icon_url: str | None = None
    icon_title: str | None = None
    status_icon_url: str | None = None
    status_icon_title: str | None = None

    def with_summary(self, summary: str) -> WebLink:
        return replace(self, summary=summary)

    def with_relationship(self, relationship: str) -> WebLink:
        return replace(self, relationship=relationship)

    def with_resolved(self, resolved: bool) -> WebLink:
        return replace(self, resolved=resolved)

    def with_icon(self, url: str | None = None, title: str | None = None) -> WebLink:
        return replace(self, icon_url=url, icon_title=title)

    def with_status_icon(self, url: str | None = None, title: str | None = None) -> WebLink:
        return replace(self, status_icon_url=url, status_icon_title=title)


@dataclass(frozen=True)
class IssueLink:
    """Link from an issue to another issue, e.g. ``"backport of"``."""

    issue: Issue
    relationship: str


Link = Union[WebLink, IssueLink]


@dataclass(frozen=True)
class LinkType:
    """Issue link type declared by a project.

    Each type has a name plus the relationship text seen from either end,
    e.g. ``LinkType("Blocks", inward="is blocked by", outward="blocks")``.
    """

    name: str
    inward: str
    outward: str

    def matches(self, relationship: str) -> bool:
        """Return True if relationship names either direction of this type (case-insensitive)."""
        wanted = relationship.lower()
        return wanted in (self.inward.lower(), self.outward.lower())

    def is_outward(self, relationship: str) -> bool:
        return self.outward.lower() == relationship.lower()
