"""Distributor account entity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

_EPOCH = datetime(1970, 1, 1)


@dataclass(frozen=True)
class Distributor:
    id: UUID
    name: str
    email: str
    password_hash: str
    address: str
    created_at: datetime = _EPOCH
    updated_at: datetime = _EPOCH
