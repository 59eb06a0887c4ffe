"""Order repository."""

from __future__ import annotations

from numbers import Real
from typing import TYPE_CHECKING

from pypgkit import BaseRepository, RepositoryError

from wasteflow.app.errors import StorageConstraintError
from wasteflow.core.types import ALLOWED_ORDER_STATUSES, OrderStatus
from wasteflow.models.order import Order

if TYPE_CHECKING:
    from uuid import UUID

_MIN_QUANTITY_KG = 1
_ORDER_BY = "scheduled_date"


def _clean_text(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""


def normalise_order(entity: Order) -> tuple[dict, list[str]]:
    """Apply the ``orders`` table rules to *entity*.

    Text fields are trimmed and the distributor email lowercased.
    Returns the column values together with one message per broken
    rule (empty when the record is storable).  The same rules exist
    as CHECK constraints in ``schema.sql``.
    """
    violations: list[str] = []

    company = _clean_text(entity.company)
    if not company:
        violations.append("Company is required")
    distributor_name = _clean_text(entity.distributor_name)
    if not distributor_name:
        violations.append("Distributor name is required")
    distributor_email = _clean_text(entity.distributor_email).lower()
    if not distributor_email:
        violations.append("Distributor email is required")

    order_types = list(entity.order_types or ())
    if not order_types:
        violations.append("At least one order type is required")
    elif not all(isinstance(t, str) and t for t in order_types):
        violations.append("Order types must be non-empty strings")

    quantity = entity.quantity
    if isinstance(quantity, bool) or not isinstance(quantity, Real):
        violations.append("Quantity is required")
    elif quantity < _MIN_QUANTITY_KG:
        violations.append("Quantity must be at least 1 kg")

    if entity.scheduled_date is None:
        violations.append("Scheduled date is required")

    status = OrderStatus.PENDING.value if entity.status is None else str(entity.status)
    if status not in ALLOWED_ORDER_STATUSES:
        violations.append(f"'{status}' is not a valid status")

    row = {
        "id": entity.id,
        "company": company,
        "distributor_name": distributor_name,
        "distributor_email": distributor_email,
        "order_types": order_types,
        "quantity": quantity,
        "scheduled_date": entity.scheduled_date,
        "status": status,
    }
    return row, violations


class OrderRepository(BaseRepository[Order]):
    table_name = "orders"
    primary_key = "id"

    def _row_to_entity(self, row: dict) -> Order:
        return Order(
            id=row["id"],
            company=row["company"],
            distributor_name=row["distributor_name"],
            distributor_email=row["distributor_email"],
            order_types=tuple(row["order_types"]),
            quantity=row["quantity"],
            scheduled_date=row["scheduled_date"],
            status=OrderStatus(row["status"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def _entity_to_row(self, entity: Order) -> dict:
        return normalise_order(entity)[0]

    @staticmethod
    def _check(entity: Order) -> None:
        _, violations = normalise_order(entity)
        if violations:
            raise StorageConstraintError(violations)

    def create(self, entity: Order) -> Order:
        """Insert *entity* and return the stored record.

        Raises :class:`StorageConstraintError` before touching the
        database when the record breaks a table rule.
        """
        self._check(entity)
        return super().create(entity)

    def list_all(self) -> list[Order]:
        """Return every order, earliest scheduled first."""
        return self.find_all(order_by=_ORDER_BY)

    def list_by_distributor_email(self, email: str) -> list[Order]:
        """Return one distributor's orders, earliest scheduled first.

        Emails are stored lowercased, so the lookup key is normalised
        the same way.
        """
        return self.find_by(
            {"distributor_email": email.strip().lower()},
            order_by=_ORDER_BY,
        )

    def get_by_id(self, order_id: UUID | str) -> Order | None:
        """Find an order by primary key."""
        return self.find_by_id(order_id)

    def update_status(self, order_id: UUID | str, status: OrderStatus | str) -> Order | None:
        """Set the status of one order and return the stored record.

        ``updated_at`` is bumped by the table trigger.  Returns ``None``
        when no such order exists.
        """
        value = str(status)
        if value not in ALLOWED_ORDER_STATUSES:
            raise StorageConstraintError([f"'{value}' is not a valid status"])
        try:
            row = self._db.fetch_one(
                "UPDATE orders SET status = %s WHERE id = %s RETURNING *",
                (value, order_id),
                as_dict=True,
            )
        except Exception as e:
            msg = f"Failed to update status of order {order_id}: {e}"
            raise RepositoryError(msg) from e
        return self._row_to_entity(row) if row else None
