"""Entity models for the WasteFlow persistence layer.

All models are frozen dataclasses.  Use :func:`dataclasses.replace`
for modifications (copy-on-write).
"""

from wasteflow.models.distributor import Distributor
from wasteflow.models.order import Order

__all__ = [
    "Distributor",
    "Order",
]
