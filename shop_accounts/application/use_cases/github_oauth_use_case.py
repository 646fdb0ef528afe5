"""GitHub OAuth authentication use case"""

from datetime import datetime
from typing import Callable, Optional

from ...core.security import utcnow
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.services.identity import AuthenticatedIdentity, OAuthCallback
from ...infrastructure.external_services.github_oauth_service import GitHubOAuthService
from ...infrastructure.identity.github_strategy import GitHubOAuthStrategy


class GitHubOAuthUseCase:

    def __init__(
        self,
        unit_of_work: IUnitOfWork,
        oauth_service: GitHubOAuthService,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.unit_of_work = unit_of_work
        self.oauth_service = oauth_service
        self.clock = clock

    def get_authorization_url(self, state: str) -> str:
        return self.oauth_service.authorization_url(state)

    async def handle_callback(self, code: str) -> Optional[AuthenticatedIdentity]:
        """Resolve the callback code to a registered account, or None"""
        async with self.unit_of_work:
            strategy = GitHubOAuthStrategy(self.unit_of_work.users, self.oauth_service)
            identity = await strategy.authenticate(OAuthCallback(code=code))
            if identity is None:
                return None

            user = await self.unit_of_work.users.get_by_id(identity.user_id)
            user.record_connection(self.clock())
            await self.unit_of_work.users.update(user)
            await self.unit_of_work.commit()

            return identity
