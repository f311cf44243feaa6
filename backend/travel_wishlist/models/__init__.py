from .base import BaseModel
from .destination import Destination

__all__ = [
    "BaseModel",
    "Destination",
]
