"""Comment access for a single Jira issue."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from issue_tracker_interface.comment import Comment
from jira_tracker_impl.rest import ALREADY_DELETED, JiraTransport

if TYPE_CHECKING:
    from jira_tracker_impl.jira_project import JiraProject

#Jira timestamps look like 2019-03-14T10:12:33.000+0000
JIRA_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"


def parse_timestamp(value: str) -> datetime:
    return datetime.strptime(value, JIRA_DATE_FORMAT)


class JiraCommentStore:
    """Reads and writes the comments of one issue.

    Args:
        transport:  The REST transport
        issue_path: Path of the issue relative to the API root (e.g. '/issue/PROJ-1')
        project:    Project the issue belongs to, supplies visibility role and user mapping
    """

    #Jira pages comments; one large page covers every realistic issue
    MAX_RESULTS = 1000

    def __init__(self, transport: JiraTransport, issue_path: str, project: JiraProject) -> None:
        self._transport = transport
        self._path = f"{issue_path}/comment"
        self._project = project

    def _parse(self, raw: dict[str, Any]) -> Comment:
        author = raw.get("author") or {}
        return Comment(
            id=str(raw["id"]),
            body=raw.get("body") or "",
            author=self._project.user(author.get("name", ""), author.get("displayName", "")),
            created_at=parse_timestamp(raw["created"]),
            updated_at=parse_timestamp(raw["updated"]),
        )

    def _query(self, body: str) -> dict[str, Any]:
        query: dict[str, Any] = {"body": body}
        role = self._project.visibility_role
        if role:
            query["visibility"] = {"type": "role", "value": role}
        return query

    def list(self) -> list[Comment]:
        data = self._transport.get(self._path, params={"maxResults": str(self.MAX_RESULTS)})
        return [self._parse(raw) for raw in data.get("comments", [])]

    def add(self, body: str) -> Comment:
        return self._parse(self._transport.post(self._path, self._query(body)))

    def update(self, comment_id: str, body: str) -> Comment:
        return self._parse(self._transport.put(f"{self._path}/{comment_id}", self._query(body)))

    def remove(self, comment_id: str) -> None:
        """Delete a comment; a comment that is already gone counts as deleted."""
        self._transport.delete(f"{self._path}/{comment_id}", fallbacks=ALREADY_DELETED)
