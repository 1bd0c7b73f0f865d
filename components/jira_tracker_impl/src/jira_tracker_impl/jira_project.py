"""Jira project - context shared by the issues of one project."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from issue_tracker_interface.errors import IssueNotFoundError
from issue_tracker_interface.link import LinkType
from issue_tracker_interface.project import IssueProject
from issue_tracker_interface.user import HostUser
from jira_tracker_impl.jira_issue import JiraIssue
from jira_tracker_impl.rest import JiraTransport

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Field tables: which Jira fields are exposed as properties and how
# ---------------------------------------------------------------------------

#fields holding a single named object, e.g. {"name": "Bug"}
_NAMED_FIELDS = frozenset({"issuetype", "priority", "resolution", "status"})

#fields holding a list of named objects, e.g. [{"name": "17"}, {"name": "18"}]
_NAMED_LIST_FIELDS = frozenset({"fixVersions", "versions", "components"})

#custom field kinds
SELECT = "select"
RAW = "raw"

#(encoded value, other decoded properties, issue key) -> final value
CustomFieldEncoder = Callable[[Any, dict[str, Any], str], Any]


class JiraProject(IssueProject):
    """
    Args:
        transport:             The REST transport
        name:                  The project key (e.g. 'PROJ')
        visibility_role:       When set, comments are restricted to this role and web links
                               are stored as comments
        custom_fields:         Custom field id -> kind, where kind is SELECT for select lists
                               ({"value": ...}) or RAW for values passed through unchanged
        custom_field_encoders: Custom field id -> encoder run after the plain encoding, for
                               fields whose legal values depend on the rest of the issue
    """

    def __init__(
        self,
        transport: JiraTransport,
        name: str,
        *,
        visibility_role: str | None = None,
        custom_fields: Mapping[str, str] | None = None,
        custom_field_encoders: Mapping[str, CustomFieldEncoder] | None = None,
    ) -> None:
        self._transport = transport
        self._name = name
        self._visibility_role = visibility_role
        self._custom_fields = dict(custom_fields or {})
        self._custom_field_encoders = dict(custom_field_encoders or {})
        self._link_types: list[LinkType] | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def visibility_role(self) -> str | None:
        return self._visibility_role

    @property
    def restricts_visibility(self) -> bool:
        return bool(self._visibility_role)

    def web_url(self, issue_id: str) -> str:
        return f"{self._transport.base_url}/browse/{issue_id}"

    def user(self, username: str, display_name: str) -> HostUser:
        # Jira Server identifies users by their user name
        return HostUser.create(username, username, display_name)

    # ------------------------------------------------------------------
    # Issues and links
    # ------------------------------------------------------------------

    def issue(self, issue_id: str) -> JiraIssue | None:
        data = self._transport.get(f"/issue/{issue_id}", fallbacks={404: None})
        if data is None:
            return None
        return JiraIssue(self, self._transport, data)

    def create_issue(self, title: str, body: str, properties: Mapping[str, Any] | None = None) -> JiraIssue:
        """Create an issue in this project and return a snapshot of it.

        Notes on usage:
            Properties are encoded like set_property does. The issue type defaults to "Bug"
            unless an "issuetype" property is given.
        """
        fields: dict[str, Any] = {
            "project": {"key": self._name},
            "summary": title,
            "description": body,
            "issuetype": {"name": "Bug"},
        }
        for name, value in (properties or {}).items():
            encoded = self.encode_property(name, value)
            if encoded is None:
                logger.warning("Ignoring unknown property: %s", name)
                continue
            fields[name] = encoded

        data = self._transport.post("/issue", {"fields": fields})
        issue = self.issue(data["key"])
        if issue is None:
            raise IssueNotFoundError(f"Created issue {data['key']} could not be fetched")
        return issue

    def link_types(self) -> list[LinkType]:
        if self._link_types is None:
            data = self._transport.get("/issueLinkType")
            self._link_types = [
                LinkType(raw["name"], inward=raw["inward"], outward=raw["outward"])
                for raw in data.get("issueLinkTypes", [])
            ]
        return list(self._link_types)

    def execute_link_query(self, query: dict[str, Any]) -> None:
        self._transport.post("/issueLink", query)

    # ------------------------------------------------------------------
    # Property codec
    # ------------------------------------------------------------------

    def decode_property(self, name: str, value: Any) -> Any | None:
        if value is None:
            return None
        if name in _NAMED_FIELDS:
            return value.get("name") if isinstance(value, dict) else None
        if name in _NAMED_LIST_FIELDS:
            if not isinstance(value, list):
                return None
            return [entry["name"] for entry in value if isinstance(entry, dict) and "name" in entry]
        kind = self._custom_fields.get(name)
        if kind == SELECT:
            if isinstance(value, list):
                return [entry.get("value") for entry in value if isinstance(entry, dict)]
            return value.get("value") if isinstance(value, dict) else None
        if kind == RAW:
            return value
        return None

    def encode_property(self, name: str, value: Any) -> Any | None:
        if name in _NAMED_FIELDS:
            return {"name": value}
        if name in _NAMED_LIST_FIELDS:
            values = value if isinstance(value, list) else [value]
            return [{"name": entry} for entry in values]
        kind = self._custom_fields.get(name)
        if kind == SELECT:
            if isinstance(value, list):
                return [{"value": entry} for entry in value]
            return {"value": value}
        if kind == RAW:
            return value
        return None

    def encode_custom_fields(self, name: str, encoded: Any, properties: dict[str, Any], issue_id: str) -> Any:
        encoder = self._custom_field_encoders.get(name)
        if encoder is None:
            return encoded
        return encoder(encoded, properties, issue_id)

    def __repr__(self) -> str:
        return f"<JiraProject name={self._name!r}>"
