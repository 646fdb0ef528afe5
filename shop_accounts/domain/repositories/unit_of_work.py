"""Unit of Work contract"""

from abc import ABC, abstractmethod

from .user_repository import IUserRepository
from .cart_repository import ICartRepository


class IUnitOfWork(ABC):
    """
    Groups the user and cart repositories in one transaction.

    Used as ``async with uow:``; a user and the cart created for it are
    either both stored or neither is.
    """

    users: IUserRepository
    carts: ICartRepository

    @abstractmethod
    async def __aenter__(self) -> "IUnitOfWork":
        ...

    @abstractmethod
    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        ...

    @abstractmethod
    async def commit(self) -> None:
        ...

    @abstractmethod
    async def rollback(self) -> None:
        ...
