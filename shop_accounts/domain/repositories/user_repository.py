"""User repository interface"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, List

from ..entities.user import User
from ..value_objects.email import Email
from ..value_objects.entity_ids import UserId


class IUserRepository(ABC):

    @abstractmethod
    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        pass

    @abstractmethod
    async def get_by_email(self, email: Email) -> Optional[User]:
        pass

    @abstractmethod
    async def exists_by_email(self, email: Email) -> bool:
        pass

    @abstractmethod
    async def add(self, user: User) -> User:
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> None:
        pass

    @abstractmethod
    async def list_summaries(self) -> List[dict]:
        """Project every user to first/last name, email, role and last connection"""
        pass

    @abstractmethod
    async def list_inactive_since(self, cutoff: datetime) -> List[User]:
        """Users whose last connection is strictly older than ``cutoff``"""
        pass
