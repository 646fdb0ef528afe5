"""Cart repository implementation"""

from sqlalchemy.orm import Session

from ...domain.repositories.cart_repository import ICartRepository
from ...domain.entities.cart import Cart
from ..orm.cart_model import CartModel


class CartRepositoryImpl(ICartRepository):

    def __init__(self, session: Session):
        self.session = session

    async def add(self, cart: Cart) -> Cart:
        model = CartModel(id=cart.id.value)
        if cart.created_at is not None:
            model.created_at = cart.created_at
        self.session.add(model)
        self.session.flush()
        return cart
