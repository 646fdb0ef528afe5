"""User entity with business logic"""

import secrets
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional, List

from ..value_objects.email import Email
from ..value_objects.entity_ids import UserId, CartId
from ..enums import UserRole, ResetTokenStatus
from ..events.user_events import UserRoleChanged, UserPasswordChanged


REQUIRED_DOCUMENTS = (
    "Identification",
    "Proof of address",
    "Proof of account status",
)


@dataclass(frozen=True)
class UserDocument:
    name: str
    reference: str


@dataclass
class User:
    id: UserId
    email: Email
    hashed_password: str
    first_name: str
    last_name: str
    age: Optional[int] = None
    role: UserRole = UserRole.USER
    cart_id: Optional[CartId] = None
    last_connection: Optional[datetime] = None
    documents: List[UserDocument] = field(default_factory=list)

    reset_token: Optional[str] = None
    reset_token_expires_at: Optional[datetime] = None

    created_at: Optional[datetime] = None

    # Domain events
    _events: List = field(default_factory=list, init=False, repr=False)

    @classmethod
    def create(
        cls,
        email: Email,
        hashed_password: str,
        first_name: str,
        last_name: str,
        age: Optional[int],
        cart_id: CartId,
        now: datetime,
    ) -> 'User':
        """Factory method to create a new user with proper defaults"""
        return cls(
            id=UserId.generate(),
            email=email,
            hashed_password=hashed_password,
            first_name=first_name,
            last_name=last_name,
            age=age,
            role=UserRole.USER,
            cart_id=cart_id,
            last_connection=now,
            created_at=now,
        )

    def record_connection(self, now: datetime) -> None:
        self.last_connection = now

    def issue_password_reset(self, token: str, now: datetime, ttl: timedelta) -> None:
        """Attach a pending reset token, replacing any previous one"""
        self.reset_token = token
        self.reset_token_expires_at = now + ttl

    def check_password_reset(self, token: str, now: datetime) -> ResetTokenStatus:
        """Business logic: validate password reset token"""
        if not self.reset_token or not secrets.compare_digest(self.reset_token.encode(), token.encode()):
            return ResetTokenStatus.INVALID

        if self.reset_token_expires_at is None or now > self.reset_token_expires_at:
            return ResetTokenStatus.EXPIRED

        return ResetTokenStatus.VALID

    def change_password(self, hashed_password: str, now: datetime) -> None:
        """Replace the password hash and consume the reset token"""
        self.hashed_password = hashed_password
        self.clear_password_reset()
        self._events.append(UserPasswordChanged(user_id=self.id, changed_at=now))

    def clear_password_reset(self) -> None:
        self.reset_token = None
        self.reset_token_expires_at = None

    def missing_documents(self) -> List[str]:
        uploaded = {doc.name for doc in self.documents}
        return [name for name in REQUIRED_DOCUMENTS if name not in uploaded]

    def toggle_premium(self) -> UserRole:
        """
        Switch between the regular and premium roles.

        Admin accounts keep their role.
        """
        if self.role == UserRole.ADMIN:
            return self.role

        previous = self.role
        self.role = UserRole.PREMIUM if self.role == UserRole.USER else UserRole.USER
        self._events.append(UserRoleChanged(
            user_id=self.id,
            previous_role=previous,
            new_role=self.role,
        ))
        return self.role

    def promote_to_admin(self) -> None:
        """Business logic: promote to admin"""
        if self.role == UserRole.ADMIN:
            raise ValueError("User is already an admin")

        previous = self.role
        self.role = UserRole.ADMIN
        self._events.append(UserRoleChanged(
            user_id=self.id,
            previous_role=previous,
            new_role=self.role,
        ))

    def get_events(self) -> List:
        """Get and clear domain events"""
        events = self._events.copy()
        self._events.clear()
        return events
