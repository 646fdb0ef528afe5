"""User repository implementation"""

from datetime import datetime
from typing import Optional, List
from sqlalchemy.orm import Session

from ...domain.repositories.user_repository import IUserRepository
from ...domain.entities.user import User, UserDocument
from ...domain.value_objects.email import Email
from ...domain.value_objects.entity_ids import UserId, CartId
from ...domain.enums import UserRole
from ..orm.user_model import UserModel


class UserRepositoryImpl(IUserRepository):
    """Repository implementation for User aggregate"""

    def __init__(self, session: Session):
        self.session = session

    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        """Get user by ID"""
        model = self.session.get(UserModel, user_id.value)
        return self._map_to_entity(model) if model else None

    async def get_by_email(self, email: Email) -> Optional[User]:
        """Get user by email"""
        model = self.session.query(UserModel).filter(UserModel.email == str(email)).first()
        return self._map_to_entity(model) if model else None

    async def exists_by_email(self, email: Email) -> bool:
        """Check if user exists by email"""
        return self.session.query(UserModel.id).filter(UserModel.email == str(email)).first() is not None

    async def add(self, user: User) -> User:
        """Add a new user"""
        model = self._create_model_from_entity(user)
        self.session.add(model)
        self.session.flush()
        return self._map_to_entity(model)

    async def update(self, user: User) -> User:
        """Update an existing user"""
        existing = self.session.get(UserModel, user.id.value)
        if existing is None:
            raise LookupError(f"User {user.id} does not exist")
        self._update_model_from_entity(existing, user)
        self.session.flush()
        return user

    async def delete(self, user_id: UserId) -> None:
        """Delete user"""
        model = self.session.get(UserModel, user_id.value)
        if model:
            self.session.delete(model)
            self.session.flush()

    async def list_summaries(self) -> List[dict]:
        rows = self.session.query(
            UserModel.first_name,
            UserModel.last_name,
            UserModel.email,
            UserModel.role,
            UserModel.last_connection,
        ).order_by(UserModel.created_at, UserModel.email).all()
        return [
            {
                "first_name": row.first_name,
                "last_name": row.last_name,
                "email": row.email,
                "role": UserRole(row.role).value,
                "last_connection": row.last_connection,
            }
            for row in rows
        ]

    async def list_inactive_since(self, cutoff: datetime) -> List[User]:
        models = self.session.query(UserModel).filter(
            UserModel.last_connection < cutoff
        ).all()
        return [self._map_to_entity(model) for model in models]

    def _create_model_from_entity(self, user: User) -> UserModel:
        """Create ORM model from domain entity"""
        model = UserModel(
            id=user.id.value,
            email=str(user.email),
            hashed_password=user.hashed_password,
            first_name=user.first_name,
            last_name=user.last_name,
            age=user.age,
            role=user.role,
            cart_id=user.cart_id.value if user.cart_id else None,
            last_connection=user.last_connection,
            reset_token=user.reset_token,
            reset_token_expires_at=user.reset_token_expires_at,
        )
        if user.created_at is not None:
            model.created_at = user.created_at
        return model

    def _update_model_from_entity(self, model: UserModel, user: User) -> None:
        """Update ORM model from domain entity; documents are managed elsewhere"""
        model.email = str(user.email)
        model.hashed_password = user.hashed_password
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.age = user.age
        model.role = user.role
        model.last_connection = user.last_connection
        model.reset_token = user.reset_token
        model.reset_token_expires_at = user.reset_token_expires_at

    def _map_to_entity(self, model: UserModel) -> User:
        """Map ORM model to domain entity"""
        return User(
            id=UserId(model.id),
            email=Email(model.email),
            hashed_password=model.hashed_password,
            first_name=model.first_name,
            last_name=model.last_name,
            age=model.age,
            role=UserRole(model.role),
            cart_id=CartId(model.cart_id) if model.cart_id else None,
            last_connection=model.last_connection,
            documents=[
                UserDocument(name=doc.name, reference=doc.reference)
                for doc in model.documents
            ],
            reset_token=model.reset_token,
            reset_token_expires_at=model.reset_token_expires_at,
            created_at=model.created_at,
        )
