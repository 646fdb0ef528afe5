"""User DTOs for API layer"""

from pydantic import BaseModel, EmailStr, Field
from typing import Dict, List, Optional
from datetime import datetime
from uuid import UUID

from ...domain.entities.user import User


class RegisterUserDto(BaseModel):
    """DTO for user registration"""
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)
    age: Optional[int] = Field(default=None, ge=0)


class LoginUserDto(BaseModel):
    """DTO for user login"""
    email: str
    password: str


class PasswordResetRequestDto(BaseModel):
    email: str


class ResetPasswordDto(BaseModel):
    """DTO for the password change form"""
    email: str
    password: str
    token: str


class DocumentDto(BaseModel):
    name: str
    reference: str


class UserDto(BaseModel):
    """DTO for user response"""
    id: UUID
    first_name: str
    last_name: str
    email: str
    age: Optional[int] = None
    role: str
    cart_id: Optional[UUID] = None
    last_connection: Optional[datetime] = None
    documents: List[DocumentDto] = []

    @classmethod
    def from_entity(cls, user: User) -> "UserDto":
        return cls(
            id=user.id.value,
            first_name=user.first_name,
            last_name=user.last_name,
            email=str(user.email),
            age=user.age,
            role=user.role.value,
            cart_id=user.cart_id.value if user.cart_id else None,
            last_connection=user.last_connection,
            documents=[DocumentDto(name=d.name, reference=d.reference) for d in user.documents],
        )


class UserSummaryDto(BaseModel):
    first_name: str
    last_name: str
    email: str
    role: str
    last_connection: Optional[datetime] = None


class UsersListResponse(BaseModel):
    status: str = "success"
    payload: List[UserSummaryDto]


class PruneResponse(BaseModel):
    status: str
    message: str
    deleted: List[str]
    failed: Dict[str, str] = {}
