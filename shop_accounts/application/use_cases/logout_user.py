"""Logout user use case"""

from datetime import datetime
from typing import Callable, Optional

from ...core.security import utcnow
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.services.identity import AuthenticatedIdentity


class LogoutUserUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, clock: Callable[[], datetime] = utcnow):
        self.unit_of_work = unit_of_work
        self.clock = clock

    async def execute(self, identity: Optional[AuthenticatedIdentity]) -> None:
        """Stamp the last connection of the signed-in user; errors propagate"""
        if identity is None:
            return

        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(identity.user_id)
            if user is None:
                return

            user.record_connection(self.clock())
            await self.unit_of_work.users.update(user)
            await self.unit_of_work.commit()
