"""Property access for a single Jira issue.

Property names are Jira field names. The project decides which fields are
known to the model and how their values are represented on either side.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from jira_tracker_impl.rest import JiraTransport

if TYPE_CHECKING:
    from jira_tracker_impl.jira_project import JiraProject

logger = logging.getLogger(__name__)


class PropertyCodec:
    """
    Args:
        project:    Supplies the encode and decode functions
        transport:  The REST transport
        issue_id:   The Jira issue key
        issue_path: Path of the issue relative to the API root
        fields:     The ``fields`` dict of the fetched issue
    """

    def __init__(
        self,
        project: JiraProject,
        transport: JiraTransport,
        issue_id: str,
        issue_path: str,
        fields: dict[str, Any],
    ) -> None:
        self._project = project
        self._transport = transport
        self._issue_id = issue_id
        self._path = issue_path
        self._fields = fields

    def decode(self) -> dict[str, Any]:
        """Return every field the project can decode; unknown fields are left out."""
        decoded: dict[str, Any] = {}
        for name, value in self._fields.items():
            result = self._project.decode_property(name, value)
            if result is not None:
                decoded[name] = result
        return decoded

    def set(self, name: str, value: Any) -> None:
        encoded = self._project.encode_property(name, value)
        if encoded is None:
            logger.warning("Ignoring unknown property: %s", name)
            return
        # custom fields may only be encodable with the rest of the issue at hand
        encoded = self._project.encode_custom_fields(name, encoded, self.decode(), self._issue_id)
        self._transport.put(self._path, {"fields": {name: encoded}})

    def remove(self, name: str) -> None:
        # TODO: clear the field with {"fields": {name: None}} once the project codec can tell
        # which fields accept null
        msg = f"removing property {name!r} is not yet implemented"
        raise NotImplementedError(msg)
