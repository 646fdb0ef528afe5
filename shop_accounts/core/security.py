"""Security utilities"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt, JWTError
from passlib.context import CryptContext
from .config import settings
import secrets


# Password context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored by the database layer"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_password_hash(password: str) -> str:
    """Hash password"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify password"""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def create_session_token(subject: str) -> str:
    """Create the signed session token stored in the session cookie"""
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {"exp": expire, "sub": subject, "type": "session"}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def read_session_token(token: str) -> Optional[str]:
    """Verify token and return subject"""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    if payload.get("type") != "session":
        return None
    return payload.get("sub")


def generate_reset_token() -> str:
    """Generate an opaque password reset token."""
    return secrets.token_urlsafe(24)


def generate_oauth_state() -> str:
    return secrets.token_urlsafe(16)
