"""Enumerated types for the WasteFlow persistence layer.

All enums inherit from ``StrEnum`` so their ``.value`` is a plain
string that psycopg serialises as TEXT and JSON round-trips naturally.
"""

from __future__ import annotations

from enum import StrEnum

# ---------------------------------------------------------------------------
# Order
# ---------------------------------------------------------------------------


class OrderStatus(StrEnum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    COMPLETED = "completed"
    NOT_COMPLETED = "not completed"


ALLOWED_ORDER_STATUSES: tuple[str, ...] = tuple(s.value for s in OrderStatus)
