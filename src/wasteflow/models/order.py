"""Waste-collection order entity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from wasteflow.core.types import OrderStatus

_EPOCH = datetime(1970, 1, 1)


@dataclass(frozen=True)
class Order:
    id: UUID
    company: str
    distributor_name: str
    distributor_email: str
    order_types: tuple[str, ...]
    quantity: float
    scheduled_date: datetime
    status: OrderStatus
    created_at: datetime = _EPOCH
    updated_at: datetime = _EPOCH
