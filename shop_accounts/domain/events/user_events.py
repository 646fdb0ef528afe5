"""User domain events"""

from dataclasses import dataclass
from datetime import datetime

from ..value_objects.entity_ids import UserId
from ..enums import UserRole


@dataclass(frozen=True)
class UserRoleChanged:
    user_id: UserId
    previous_role: UserRole
    new_role: UserRole


@dataclass(frozen=True)
class UserPasswordChanged:
    user_id: UserId
    changed_at: datetime
