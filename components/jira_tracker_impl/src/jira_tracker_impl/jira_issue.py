"""Jira Issue implementation."""

from __future__ import annotations

import copy
import json
import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

from issue_tracker_interface.comment import Comment
from issue_tracker_interface.errors import (
    IssueNotFoundError,
    MalformedInputError,
    NoSuchLinkTypeError,
    UnsupportedOperationError,
)
from issue_tracker_interface.issue import Issue, State
from issue_tracker_interface.link import IssueLink, Link, WebLink
from issue_tracker_interface.user import HostUser
from jira_tracker_impl import link_codec
from jira_tracker_impl.comment_store import JiraCommentStore, parse_timestamp
from jira_tracker_impl.link_store import CommentLinkStore, RemoteLinkStore, WebLinkStore
from jira_tracker_impl.properties import PropertyCodec
from jira_tracker_impl.rest import JiraTransport
from jira_tracker_impl.transitions import Transitions, resolve_state

if TYPE_CHECKING:
    from jira_tracker_impl.jira_project import JiraProject

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Mapping tables: Jira-native values  →  normalized values
# ---------------------------------------------------------------------------

#only these two statuses are terminal, every other status counts as open
_JIRA_STATE_MAP: dict[str, State] = {
    "Closed":   State.CLOSED,
    "Resolved": State.RESOLVED,
}

#resolutions meaning the issue was actually fixed
VALID_RESOLUTIONS = ("Fixed", "Delivered")

#dotted paths ignored when comparing snapshots; these fields change without the issue changing
VOLATILE_FIELDS: tuple[str, ...] = ("fields.customfield_11700",)


def _normalize_status(jira_status: str | None) -> State:
    if not jira_status:
        return State.OPEN
    return _JIRA_STATE_MAP.get(jira_status, State.OPEN)


def _without_paths(document: Any, paths: tuple[str, ...]) -> Any:
    """Return a deep copy of document with the given dotted paths removed."""
    result = copy.deepcopy(document)
    for path in paths:
        *parents, leaf = path.split(".")
        node = result
        for part in parents:
            node = node.get(part) if isinstance(node, dict) else None
            if node is None:
                break
        if isinstance(node, dict):
            node.pop(leaf, None)
    return result


# ------------------------------------------------------------------
# Issue implementation
# ------------------------------------------------------------------
class JiraIssue(Issue):
    """Concrete Issue backed by a Jira issue API response.

    Obtain instances via ``JiraProject.issue()`` or ``JiraClient.get_issue()``
    rather than instantiating directly.

    Equality is based on the document fetched when the instance was created,
    ignoring the paths in ``volatile_fields``. Two snapshots of an unchanged
    issue compare (and hash) equal.

    Args:
        project:   The project the issue belongs to.
        transport: The REST transport used for all writes and lazy reads.
        raw_data:  The full issue document from ``GET /issue/{key}``.

    """

    volatile_fields: tuple[str, ...] = VOLATILE_FIELDS

    def __init__(self, project: JiraProject, transport: JiraTransport, raw_data: dict) -> None:
        """Initialize JiraIssue."""
        self._project = project
        self._transport = transport
        self._json = raw_data
        self._fields: dict[str, Any] = raw_data.get("fields") or {}
        self._id: str = raw_data["key"]
        self._path = f"/issue/{self._id}"
        # None means "invalidated, fetch again on next read"
        self._labels: list[str] | None = list(self._fields.get("labels") or [])

        self._comments = JiraCommentStore(transport, self._path, project)
        self._remote_links = RemoteLinkStore(transport, self._path)
        self._comment_links = CommentLinkStore(self._comments)
        self._properties = PropertyCodec(project, transport, self._id, self._path, self._fields)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def project(self) -> JiraProject:
        return self._project

    @property
    def id(self) -> str:
        """Return id."""
        return self._id

    @property
    def title(self) -> str:
        """Return title."""
        #Jira calls "title" a "summary"
        return (self._fields.get("summary") or "").strip()

    @property
    def body(self) -> str:
        """Return the description, or an empty string if there is none."""
        desc = self._fields.get("description")
        if desc is None:
            return ""
        if isinstance(desc, str):
            return desc
        # API v3 returns description as Atlassian Document Format
        return _extract_adf_text(desc)

    @property
    def author(self) -> HostUser:
        creator = self._fields.get("creator") or {}
        return self._project.user(creator.get("name", ""), creator.get("displayName", ""))

    @property
    def status(self) -> str:
        """Return the Jira status name."""
        status = self._fields.get("status")
        return status.get("name", "") if isinstance(status, dict) else ""

    @property
    def state(self) -> State:
        return _normalize_status(self.status)

    @property
    def resolution(self) -> str | None:
        resolution = self._fields.get("resolution")
        if isinstance(resolution, dict):
            return resolution.get("name")
        return None

    @property
    def is_fixed(self) -> bool:
        """An issue is fixed if it's either resolved or closed with a "fixed" resolution."""
        if self.state in (State.RESOLVED, State.CLOSED):
            return self.resolution in VALID_RESOLUTIONS
        return False

    @property
    def created_at(self) -> datetime:
        return parse_timestamp(self._fields["created"])

    @property
    def updated_at(self) -> datetime:
        return parse_timestamp(self._fields["updated"])

    @property
    def assignees(self) -> list[HostUser]:
        assignee = self._fields.get("assignee")
        if not assignee:
            return []
        return [self._project.user(assignee.get("name", ""), assignee.get("displayName", ""))]

    @property
    def labels(self) -> list[str]:
        if self._labels is None:
            data = self._transport.get(self._path)
            self._labels = list((data.get("fields") or {}).get("labels") or [])
        return list(self._labels)

    @property
    def web_url(self) -> str:
        return self._project.web_url(self._id)

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    def set_title(self, title: str) -> None:
        if self._project.restricts_visibility:
            logger.warning("Issue title does not support setting a visibility role - ignoring")
            return
        self._transport.put(self._path, {"fields": {"summary": title}})

    def set_body(self, body: str) -> None:
        if self._project.restricts_visibility:
            logger.warning("Issue body does not support setting a visibility role - ignoring")
            return
        self._transport.put(self._path, {"fields": {"description": body}})

    def _available_transitions(self) -> Transitions:
        data = self._transport.get(f"{self._path}/transitions")
        return {t["to"]["name"]: str(t["id"]) for t in data.get("transitions", [])}

    def _perform_transition(self, transition_id: str) -> None:
        self._transport.post(f"{self._path}/transitions", {"transition": {"id": transition_id}})

    def set_state(self, state: State) -> None:
        """
        Transitions are named actions in Jira that move one Issue from one status to another.
        The available transitions are fetched again after every hop.
        """
        resolve_state(state, self._available_transitions, self._perform_transition)

    def set_assignees(self, assignees: list[HostUser]) -> None:
        if len(assignees) > 1:
            raise UnsupportedOperationError("multiple assignees not supported")
        assignee = assignees[0].id if assignees else None
        self._transport.put(f"{self._path}/assignee", {"name": assignee})

    def _update_labels(self, operation: str, value: Any) -> None:
        self._transport.put(self._path, {"update": {"labels": [{operation: value}]}})

    def add_label(self, label: str) -> None:
        self._labels = None
        self._update_labels("add", label)

    def remove_label(self, label: str) -> None:
        self._labels = None
        self._update_labels("remove", label)

    def set_labels(self, labels: list[str]) -> None:
        self._update_labels("set", list(labels))
        self._labels = list(labels)

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def comments(self) -> list[Comment]:
        return self._comments.list()

    def add_comment(self, body: str) -> Comment:
        return self._comments.add(body)

    def update_comment(self, comment_id: str, body: str) -> Comment:
        return self._comments.update(comment_id, body)

    def remove_comment(self, comment: Comment) -> None:
        self._comments.remove(comment.id)

    def comment_url(self, comment: Comment) -> str:
        return f"{self.web_url}?focusedCommentId={comment.id}"

    # ------------------------------------------------------------------
    # Links
    # ------------------------------------------------------------------

    @property
    def _web_link_store(self) -> WebLinkStore:
        # remote links cannot carry a visibility role, so restricted projects keep links in comments
        if self._project.restricts_visibility:
            return self._comment_links
        return self._remote_links

    def links(self) -> list[Link]:
        """Return remote links, then links stored in comments, then issue links."""
        result: list[Link] = []
        result.extend(self._remote_links.list())
        result.extend(self._comment_links.list())
        result.extend(self._issue_links())
        return result

    def _issue_links(self) -> list[IssueLink]:
        links: list[IssueLink] = []
        for raw in self._fields.get("issuelinks") or []:
            if "inwardIssue" in raw:
                key, relationship = raw["inwardIssue"]["key"], raw["type"]["inward"]
            else:
                key, relationship = raw["outwardIssue"]["key"], raw["type"]["outward"]
            other = self._project.issue(key)
            if other is None:
                raise IssueNotFoundError(f"Linked issue {key} not found")
            links.append(IssueLink(other, relationship))
        return links

    def add_link(self, link: Link) -> None:
        if isinstance(link, WebLink):
            # a link may later be stored in, or swept from, comments, so it must survive that encoding
            link_codec.check_link_comment(link)
            logger.debug("Adding link to %s on %s via %s", link.uri, self._id, type(self._web_link_store).__name__)
            self._web_link_store.add(link)
        elif isinstance(link, IssueLink):
            self._add_issue_link(link)
        else:
            raise MalformedInputError(f"Unknown type of link: {link!r}")

    def _add_issue_link(self, link: IssueLink) -> None:
        link_type = next((lt for lt in self._project.link_types() if lt.matches(link.relationship)), None)
        if link_type is None:
            raise NoSuchLinkTypeError(f"No link type declares relationship {link.relationship!r}")

        query: dict[str, Any] = {"type": {"name": link_type.name}}
        if link_type.is_outward(link.relationship):
            query["inwardIssue"] = {"key": self._id}
            query["outwardIssue"] = {"key": link.issue.id}
        else:
            query["outwardIssue"] = {"key": self._id}
            query["inwardIssue"] = {"key": link.issue.id}
        self._project.execute_link_query(query)

    def remove_link(self, link: Link) -> None:
        if isinstance(link, WebLink):
            # the link may have been added under either visibility mode, so sweep both channels
            self._remote_links.remove(link)
            self._comment_links.remove(link)
        elif isinstance(link, IssueLink):
            raise UnsupportedOperationError("removing issue links is not yet implemented")
        else:
            raise MalformedInputError(f"Unknown type of link: {link!r}")

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    def properties(self) -> dict[str, Any]:
        return self._properties.decode()

    def set_property(self, name: str, value: Any) -> None:
        self._properties.set(name, value)

    def remove_property(self, name: str) -> None:
        self._properties.remove(name)

    def closed_by(self) -> HostUser | None:
        msg = "closed_by is not yet implemented"
        raise NotImplementedError(msg)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def _comparable(self) -> Any:
        return _without_paths(self._json, self.volatile_fields)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, JiraIssue):
            return NotImplemented
        return self._comparable() == other._comparable()

    def __hash__(self) -> int:
        return hash(json.dumps(self._comparable(), sort_keys=True, default=str))


# ---------------------------------------------------------------------------
# Extract data from ADF format which Jira Cloud stores description in
# ---------------------------------------------------------------------------

def _extract_adf_text(node: dict) -> str:
    """Recursively extract plain text from an ADF document node."""
    if not isinstance(node, dict):
        return ""
    if node.get("type") == "text":
        return node.get("text", "")
    parts = [_extract_adf_text(child) for child in node.get("content") or []]
    return "\n".join(filter(None, parts))
