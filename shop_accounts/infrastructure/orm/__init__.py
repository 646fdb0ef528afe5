"""Infrastructure ORM Models"""

from .cart_model import CartModel
from .user_model import UserModel, UserDocumentModel

__all__ = [
    'CartModel',
    'UserModel',
    'UserDocumentModel',
]
