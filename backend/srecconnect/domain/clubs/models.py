"""Domain models for Clubs."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional

from srecconnect.domain.base import utcnow


@dataclass
class Club:
    id: str
    name: str
    category: str
    description: Optional[str] = None
    admin_id: Optional[str] = None
    # Mirror of User.clubs; only the store writes it.
    members: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)

    @property
    def member_count(self) -> int:
        return len(self.members)

    def copy(self) -> "Club":
        return replace(self, members=list(self.members))
