"""Authenticated identity and the strategy interface that produces it"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from ..entities.user import User
from ..enums import UserRole
from ..value_objects.entity_ids import UserId


@dataclass(frozen=True)
class AuthenticatedIdentity:
    user_id: UserId
    email: str
    role: UserRole
    first_name: str

    @classmethod
    def from_user(cls, user: User) -> 'AuthenticatedIdentity':
        return cls(
            user_id=user.id,
            email=str(user.email),
            role=user.role,
            first_name=user.first_name,
        )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


@dataclass(frozen=True)
class PasswordCredentials:
    email: str
    password: str


@dataclass(frozen=True)
class OAuthCallback:
    code: str


class IIdentityStrategy(ABC):
    """
    Turns credentials into an identity.

    Returns None when the credentials are well formed but match no account;
    raises AccountError subclasses for rejected credentials or provider errors.
    """

    @abstractmethod
    async def authenticate(self, credentials: Any) -> Optional[AuthenticatedIdentity]:
        pass
