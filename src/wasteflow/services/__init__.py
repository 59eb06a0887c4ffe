"""WasteFlow service layer.

Each service encapsulates business logic for one resource type and
delegates persistence to the repository layer.
"""

from wasteflow.services.distributor import DistributorService
from wasteflow.services.order import OrderService

__all__ = [
    "DistributorService",
    "OrderService",
]
