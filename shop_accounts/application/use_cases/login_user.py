"""Login user use case"""

from datetime import datetime
from typing import Callable

from ...core.security import utcnow
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.services.identity import AuthenticatedIdentity, PasswordCredentials
from ...infrastructure.identity.local_strategy import LocalPasswordStrategy
from ...application.dtos.user_dtos import LoginUserDto


class LoginUserUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, clock: Callable[[], datetime] = utcnow):
        self.unit_of_work = unit_of_work
        self.clock = clock

    async def execute(self, request: LoginUserDto) -> AuthenticatedIdentity:
        async with self.unit_of_work:
            strategy = LocalPasswordStrategy(self.unit_of_work.users)
            identity = await strategy.authenticate(
                PasswordCredentials(email=request.email, password=request.password)
            )

            # Update last connection
            user = await self.unit_of_work.users.get_by_id(identity.user_id)
            user.record_connection(self.clock())
            await self.unit_of_work.users.update(user)
            await self.unit_of_work.commit()

            return identity
