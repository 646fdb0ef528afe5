"""SQLAlchemy-backed Unit of Work"""

from sqlalchemy.orm import Session

from ...domain.repositories.unit_of_work import IUnitOfWork
from .user_repository_impl import UserRepositoryImpl
from .cart_repository_impl import CartRepositoryImpl


class UnitOfWorkImpl(IUnitOfWork):
    """
    Wraps one session; the user and cart repositories share its transaction.

    Leaving the block normally commits whatever was not committed or rolled
    back yet, leaving it through an exception rolls everything back.
    """

    def __init__(self, session: Session):
        self.session = session
        self.users = UserRepositoryImpl(session)
        self.carts = CartRepositoryImpl(session)
        self._finished = False

    async def __aenter__(self) -> "UnitOfWorkImpl":
        self._finished = False
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is not None:
            await self.rollback()
        elif not self._finished:
            await self.commit()

    async def commit(self) -> None:
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self._finished = True

    async def rollback(self) -> None:
        self.session.rollback()
        self._finished = True
