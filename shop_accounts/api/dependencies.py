"""API dependencies"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.security import read_session_token
from ..db.database import get_db
from ..domain.repositories.unit_of_work import IUnitOfWork
from ..domain.services.identity import AuthenticatedIdentity
from ..domain.value_objects.entity_ids import UserId
from ..infrastructure.repositories.unit_of_work_impl import UnitOfWorkImpl
from ..infrastructure.external_services.email_service import EmailService
from ..infrastructure.external_services.github_oauth_service import GitHubOAuthService


security = HTTPBearer(auto_error=False)


def get_unit_of_work(db: Session = Depends(get_db)) -> IUnitOfWork:
    """Get unit of work"""
    return UnitOfWorkImpl(db)


@lru_cache
def get_email_service() -> EmailService:
    """Process-wide email service"""
    return EmailService(settings)


@lru_cache
def get_github_oauth_service() -> GitHubOAuthService:
    """Process-wide GitHub OAuth service"""
    return GitHubOAuthService(settings)


async def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
) -> Optional[AuthenticatedIdentity]:
    """Identity of the session cookie (or bearer token) owner, None when anonymous"""
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token and credentials:
        token = credentials.credentials
    if not token:
        return None

    subject = read_session_token(token)
    if not subject:
        return None

    try:
        user_id = UserId.from_str(subject)
    except ValueError:
        return None

    async with unit_of_work:
        user = await unit_of_work.users.get_by_id(user_id)

    if not user:
        return None
    return AuthenticatedIdentity.from_user(user)
