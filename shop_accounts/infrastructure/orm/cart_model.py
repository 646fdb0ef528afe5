"""Cart ORM Model"""

from sqlalchemy import Column, DateTime, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from uuid import uuid4

from ...db.models import Base


class CartModel(Base):
    __tablename__ = 'carts'

    id = Column(Uuid, primary_key=True, default=uuid4, index=True)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship('UserModel', back_populates='cart', uselist=False)
