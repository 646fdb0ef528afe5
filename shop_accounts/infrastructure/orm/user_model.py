"""User ORM Model"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Uuid, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from uuid import uuid4

from ...db.models import Base
from ...domain.enums import UserRole


class UserModel(Base):
    __tablename__ = 'users'

    id = Column(Uuid, primary_key=True, default=uuid4, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    age = Column(Integer, nullable=True)
    role = Column(
        SQLEnum(UserRole, values_callable=lambda roles: [r.value for r in roles]),
        default=UserRole.USER,
        nullable=False,
    )
    cart_id = Column(Uuid, ForeignKey('carts.id'), nullable=True, unique=True)
    last_connection = Column(DateTime, nullable=True, index=True)

    # Pending password reset
    reset_token = Column(String(255), nullable=True, index=True)
    reset_token_expires_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, server_default=func.now())

    # Relationships
    cart = relationship('CartModel', back_populates='user')
    documents = relationship(
        'UserDocumentModel',
        back_populates='user',
        cascade='all, delete-orphan',
        lazy='selectin',
    )


class UserDocumentModel(Base):
    __tablename__ = 'user_documents'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    reference = Column(String(500), nullable=False)
    uploaded_at = Column(DateTime, server_default=func.now())

    user = relationship('UserModel', back_populates='documents')
