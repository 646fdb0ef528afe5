"""GitHub OAuth identity strategy"""

import logging
from typing import Optional

from ...domain.repositories.user_repository import IUserRepository
from ...domain.services.identity import AuthenticatedIdentity, IIdentityStrategy, OAuthCallback
from ...domain.value_objects.email import Email
from ..external_services.github_oauth_service import GitHubOAuthService

logger = logging.getLogger(__name__)


class GitHubOAuthStrategy(IIdentityStrategy):
    """Matches the GitHub account's e-mail against registered users"""

    def __init__(self, users: IUserRepository, oauth_service: GitHubOAuthService):
        self.users = users
        self.oauth_service = oauth_service

    async def authenticate(self, credentials: OAuthCallback) -> Optional[AuthenticatedIdentity]:
        address = await self.oauth_service.fetch_email(credentials.code)
        if not address:
            return None

        user = await self.users.get_by_email(Email(address))
        if not user:
            logger.info("GitHub login for unregistered e-mail %s", address)
            return None

        return AuthenticatedIdentity.from_user(user)
