"""Pydantic schemas for Clubs API."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import Field

from srecconnect.domain.base import CamelModel


class ClubCreateRequest(CamelModel):
    # Clubs are addressed by name in a single path segment.
    name: Annotated[str, Field(min_length=3, max_length=100, pattern=r"^[^/]+$")]
    description: Optional[Annotated[str, Field(max_length=500)]] = None
    category: Annotated[str, Field(min_length=1, max_length=50)]


class ClubResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    category: str
    admin_id: Optional[str] = None
    members: List[str]
    member_count: int
    created_at: datetime
