"""Comment contract."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from issue_tracker_interface.user import HostUser


@dataclass(frozen=True)
class Comment:
    """A single comment on an issue."""

    id: str
    body: str
    author: HostUser
    created_at: datetime
    updated_at: datetime
