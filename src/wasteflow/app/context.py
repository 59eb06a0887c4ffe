"""Dependency injection container for WasteFlow.

Created once during application startup and stored on the Flask app
via ``app.extensions["container"]``.  Accessible from any request
context with :func:`get_container`.

Usage::

    from wasteflow.app.context import get_container

    orders = get_container().order_service.get_all_orders()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import current_app

from wasteflow.auth import LoginRateLimiter
from wasteflow.repositories import DistributorRepository, OrderRepository
from wasteflow.services import DistributorService, OrderService

if TYPE_CHECKING:
    from pypgkit import Database

    from wasteflow.config.settings import WasteflowSettings


class Container:
    """Application-wide dependency container.

    Holds the :class:`Database`, one repository per table and the
    services built on top of them.  All repositories share the same
    connection pool.
    """

    def __init__(self, db: Database, settings: WasteflowSettings) -> None:
        self.db: Database = db
        self.settings: WasteflowSettings = settings

        # Repositories
        self.orders: OrderRepository = OrderRepository(db)
        self.distributors: DistributorRepository = DistributorRepository(db)

        # Services
        self.order_service: OrderService = OrderService(self.orders, settings.orders)
        self.distributor_service: DistributorService = DistributorService(
            self.distributors,
            settings.auth,
        )

        self.login_limiter: LoginRateLimiter = LoginRateLimiter.from_settings(settings.auth)


def get_container() -> Container:
    """Return the :class:`Container` from the current Flask app.

    Raises :class:`RuntimeError` if the database was not initialised
    (i.e. ``create_app`` was called without a ``database`` argument).
    """
    container = current_app.extensions.get("container")
    if container is None:
        msg = "Dependency container not available -- was the database initialised before create_app()?"
        raise RuntimeError(msg)
    return container
