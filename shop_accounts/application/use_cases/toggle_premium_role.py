"""Premium role toggle use case"""

import logging

from ...core.errors import MissingDocumentsError, UserNotFoundError
from ...domain.entities.user import REQUIRED_DOCUMENTS
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import UserId
from ..dtos.user_dtos import UserDto

logger = logging.getLogger(__name__)


class TogglePremiumRoleUseCase:
    """Switches a user between regular and premium once the required documents are uploaded"""

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, user_id: str) -> UserDto:
        try:
            uid = UserId.from_str(user_id)
        except ValueError:
            raise UserNotFoundError() from None

        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(uid)
            if not user:
                raise UserNotFoundError()

            if user.missing_documents():
                raise MissingDocumentsError(REQUIRED_DOCUMENTS)

            user.toggle_premium()
            await self.unit_of_work.users.update(user)
            await self.unit_of_work.commit()

        for event in user.get_events():
            logger.info(
                "User %s role changed from %s to %s",
                event.user_id, event.previous_role.value, event.new_role.value,
            )
        return UserDto.from_entity(user)
