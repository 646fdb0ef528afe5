"""Cart repository interface"""

from abc import ABC, abstractmethod

from ..entities.cart import Cart


class ICartRepository(ABC):
    """Carts are created here; everything else about them lives in the cart service"""

    @abstractmethod
    async def add(self, cart: Cart) -> Cart:
        pass
