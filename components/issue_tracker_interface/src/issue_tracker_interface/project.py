"""Project contract - the context an issue needs from its project."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from issue_tracker_interface.link import LinkType
from issue_tracker_interface.user import HostUser

if TYPE_CHECKING:
    from issue_tracker_interface.issue import Issue


class IssueProject(ABC):
    """Abstract base class for a project holding issues."""

    @property
    @abstractmethod
    def name(self) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def restricts_visibility(self) -> bool:
        """Return True when content must be posted with a restricted visibility.

        Trackers cannot restrict the visibility of every kind of content, so
        issues fall back to other channels (e.g. comments for web links) when
        this is set.
        """
        raise NotImplementedError

    @abstractmethod
    def link_types(self) -> list[LinkType]:
        """Return the issue link types declared by the project."""
        raise NotImplementedError

    @abstractmethod
    def issue(self, issue_id: str) -> Issue | None:
        """Return the issue with the given id, or None if it does not exist."""
        raise NotImplementedError

    @abstractmethod
    def user(self, username: str, display_name: str) -> HostUser:
        """Map raw user values from the tracker to a canonical handle."""
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Property codec
    # ------------------------------------------------------------------
    @abstractmethod
    def decode_property(self, name: str, value: Any) -> Any | None:
        """Decode a backend field value. Return None for fields unknown to the model."""
        raise NotImplementedError

    @abstractmethod
    def encode_property(self, name: str, value: Any) -> Any | None:
        """Encode a property value for the backend. Return None for unknown properties."""
        raise NotImplementedError

    @abstractmethod
    def encode_custom_fields(self, name: str, encoded: Any, properties: dict[str, Any], issue_id: str) -> Any:
        """Second encoding stage which may depend on the issue's other properties."""
        raise NotImplementedError
