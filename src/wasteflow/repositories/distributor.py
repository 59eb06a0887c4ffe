"""Distributor repository."""

from __future__ import annotations

from pypgkit import BaseRepository

from wasteflow.models.distributor import Distributor


class DistributorRepository(BaseRepository[Distributor]):
    table_name = "distributors"
    primary_key = "id"

    def _row_to_entity(self, row: dict) -> Distributor:
        return Distributor(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            password_hash=row["password_hash"],
            address=row["address"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def _entity_to_row(self, entity: Distributor) -> dict:
        return {
            "id": entity.id,
            "name": entity.name.strip(),
            "email": entity.email.strip().lower(),
            "password_hash": entity.password_hash,
            "address": entity.address.strip(),
        }

    def find_by_email(self, email: str) -> Distributor | None:
        """Find a distributor by (case-insensitive) email."""
        return self.find_one_by({"email": email.strip().lower()})

    def list_all(self) -> list[Distributor]:
        """Return every distributor ordered by name."""
        return self.find_all(order_by="name")
