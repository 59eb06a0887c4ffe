"""Repository classes for the WasteFlow persistence layer.

Each repository extends :class:`pypgkit.BaseRepository` with custom
query methods for the WasteFlow domain.
"""

from wasteflow.repositories.distributor import DistributorRepository
from wasteflow.repositories.order import OrderRepository

__all__ = [
    "DistributorRepository",
    "OrderRepository",
]
