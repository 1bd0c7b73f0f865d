"""User handle contract."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HostUser:
    """Canonical handle for a user on the tracker host.

    Two handles are equal when their ids match; the display name is
    informational only.
    """

    id: str
    username: str
    full_name: str = ""

    @classmethod
    def create(cls, user_id: str, username: str, full_name: str = "") -> HostUser:
        """Build a handle from raw host values."""
        return cls(user_id, username, full_name or username)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HostUser):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
