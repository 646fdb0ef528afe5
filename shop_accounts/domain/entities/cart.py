"""Cart entity"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..value_objects.entity_ids import CartId


@dataclass
class Cart:
    """Empty shopping cart owned by exactly one user; its items live elsewhere"""
    id: CartId
    created_at: Optional[datetime] = None

    @classmethod
    def create(cls, now: datetime) -> 'Cart':
        return cls(id=CartId.generate(), created_at=now)
