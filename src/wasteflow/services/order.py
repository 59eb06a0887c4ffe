"""Order workflow service.

Validates order submissions, enforces the scheduling rule and the
status whitelist, and delegates persistence to
:class:`~wasteflow.repositories.order.OrderRepository`.  The service
holds no state of its own; every failure is raised as an
:class:`~wasteflow.app.errors.ApiError` subclass and travels unchanged
to the HTTP error handlers.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime
from numbers import Real
from typing import TYPE_CHECKING, Any
from uuid import UUID, uuid4

from wasteflow.app.errors import NotFoundError, ValidationError
from wasteflow.core.types import ALLOWED_ORDER_STATUSES, OrderStatus
from wasteflow.models.order import Order

if TYPE_CHECKING:
    from wasteflow.config.settings import OrderSettings
    from wasteflow.repositories.order import OrderRepository

log = logging.getLogger(__name__)

_REQUIRED_FIELDS = (
    "company",
    "distributorName",
    "distributorEmail",
    "orderTypes",
    "quantity",
    "scheduledDate",
)

MSG_REQUIRED = "All required fields must be provided"
MSG_PAST_DATE = "Scheduled date cannot be in the past"
MSG_EMAIL_REQUIRED = "Distributor email is required"
MSG_INVALID_ID = "Invalid order ID"
MSG_NOT_FOUND = "Order not found"
MSG_INVALID_STATUS = "Invalid status. Allowed: " + ", ".join(ALLOWED_ORDER_STATUSES)


def parse_order_id(order_id: Any) -> UUID:  # noqa: ANN401
    """Return *order_id* as a :class:`UUID` or raise ``ValidationError``."""
    if isinstance(order_id, UUID):
        return order_id
    if not isinstance(order_id, str) or not order_id.strip():
        raise ValidationError(MSG_INVALID_ID)
    try:
        return UUID(order_id.strip())
    except ValueError:
        raise ValidationError(MSG_INVALID_ID) from None


def parse_scheduled_date(value: Any) -> datetime:  # noqa: ANN401
    """Coerce an ISO-8601 string, ``date`` or ``datetime`` to an aware datetime.

    Values without an offset are taken as local time.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            msg = f"scheduledDate is not a valid ISO-8601 date: {value!r}"
            raise ValidationError(msg) from None
    else:
        msg = "scheduledDate must be an ISO-8601 date string"
        raise ValidationError(msg)
    return parsed.astimezone() if parsed.tzinfo is None else parsed


def start_of_today() -> datetime:
    """Midnight at the start of the current local day."""
    return datetime.now().astimezone().replace(hour=0, minute=0, second=0, microsecond=0)


def _parse_quantity(value: Any) -> float:  # noqa: ANN401
    quantity: float | None = None
    if isinstance(value, (Real, str)) and not isinstance(value, bool):
        try:
            quantity = float(value)
        except (ValueError, OverflowError):
            quantity = None
    if quantity is None or not math.isfinite(quantity):
        msg = "quantity must be a number"
        raise ValidationError(msg)
    return quantity


def _parse_order_types(value: Any) -> tuple[str, ...]:  # noqa: ANN401
    if not isinstance(value, (list, tuple)) or not all(isinstance(t, str) for t in value):
        msg = "orderTypes must be a list of strings"
        raise ValidationError(msg)
    return tuple(value)


def _require_text(data: dict, key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        msg = f"{key} must be a string"
        raise ValidationError(msg)
    return value


class OrderService:
    """Order creation, lookup, status updates and deletion."""

    def __init__(
        self,
        order_repo: OrderRepository,
        order_settings: OrderSettings | None = None,
    ) -> None:
        self._orders = order_repo
        self._allow_past_dates = bool(order_settings and order_settings.allow_past_dates)

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create_order(self, data: dict[str, Any] | None) -> Order:
        """Validate a submission and persist it as a ``pending`` order.

        *data* uses the wire field names (``distributorName``,
        ``orderTypes`` ...).  Any missing or empty required field,
        including a zero quantity, rejects the whole submission before
        the store is touched.
        """
        data = data or {}
        if any(not data.get(key) for key in _REQUIRED_FIELDS):
            raise ValidationError(MSG_REQUIRED)

        company = _require_text(data, "company")
        distributor_name = _require_text(data, "distributorName")
        distributor_email = _require_text(data, "distributorEmail")
        order_types = _parse_order_types(data["orderTypes"])
        quantity = _parse_quantity(data["quantity"])
        scheduled = parse_scheduled_date(data["scheduledDate"])

        if not self._allow_past_dates and scheduled < start_of_today():
            raise ValidationError(MSG_PAST_DATE)

        order = Order(
            id=uuid4(),
            company=company,
            distributor_name=distributor_name,
            distributor_email=distributor_email,
            order_types=order_types,
            quantity=quantity,
            scheduled_date=scheduled,
            status=OrderStatus.PENDING,
        )
        created = self._orders.create(order)
        log.info(
            "Created order %s for %s (%s kg, scheduled %s)",
            created.id,
            created.distributor_email,
            created.quantity,
            created.scheduled_date.isoformat(),
            extra={"order_id": str(created.id)},
        )
        return created

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_all_orders(self) -> list[Order]:
        return self._orders.list_all()

    def get_orders_by_distributor(self, email: str | None) -> list[Order]:
        if not email or not email.strip():
            raise ValidationError(MSG_EMAIL_REQUIRED)
        return self._orders.list_by_distributor_email(email)

    def get_order_by_id(self, order_id: Any) -> Order:  # noqa: ANN401
        oid = parse_order_id(order_id)
        order = self._orders.get_by_id(oid)
        if order is None:
            raise NotFoundError(MSG_NOT_FOUND)
        return order

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def update_order_status(self, order_id: Any, status: Any) -> Order:  # noqa: ANN401
        """Move an order to *status*.

        No transition graph is enforced: any allowed status may follow
        any other.
        """
        if not isinstance(status, str) or status not in ALLOWED_ORDER_STATUSES:
            raise ValidationError(MSG_INVALID_STATUS)
        oid = parse_order_id(order_id)

        updated = self._orders.update_status(oid, OrderStatus(status))
        if updated is None:
            raise NotFoundError(MSG_NOT_FOUND)

        log.info(
            "Order %s status changed to '%s'",
            oid,
            updated.status.value,
            extra={"order_id": str(oid), "order_status": updated.status.value},
        )
        return updated

    def delete_order(self, order_id: Any) -> None:  # noqa: ANN401
        oid = parse_order_id(order_id)
        if not self._orders.delete(oid):
            raise NotFoundError(MSG_NOT_FOUND)
        log.info("Deleted order %s", oid, extra={"order_id": str(oid)})
