"""Observable records that can be bound to storage."""

from .collection import Collection
from .events import Events
from .model import Model

__all__ = ["Events", "Model", "Collection"]
