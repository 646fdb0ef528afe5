"""Promote a user to the admin role"""

from ...core.errors import UserNotFoundError
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.email import Email
from ..dtos.user_dtos import UserDto


class PromoteAdminUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, email: str) -> UserDto:
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_email(Email(email))
            if not user:
                raise UserNotFoundError(f"User with email {email!r} not found")

            user.promote_to_admin()
            await self.unit_of_work.users.update(user)
            await self.unit_of_work.commit()

            return UserDto.from_entity(user)
