"""Reset password use case"""

import logging
from datetime import datetime
from enum import Enum
from typing import Callable

from ...core.security import get_password_hash, verify_password, utcnow
from ...domain.enums import ResetTokenStatus
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.email import Email
from ..dtos.user_dtos import ResetPasswordDto

logger = logging.getLogger(__name__)


class PasswordResetOutcome(str, Enum):
    SUCCESS = "success"
    USER_NOT_FOUND = "user_not_found"
    INVALID_TOKEN = "invalid_token"
    EXPIRED_TOKEN = "expired_token"
    SAME_PASSWORD = "same_password"


class ResetPasswordUseCase:
    """
    Completes a password reset.

    Checks run in order and the first failing one is reported: the user
    exists, the token matches the pending one, the token has not expired,
    the new password differs from the current one.
    """

    def __init__(self, unit_of_work: IUnitOfWork, clock: Callable[[], datetime] = utcnow):
        self.unit_of_work = unit_of_work
        self.clock = clock

    async def execute(self, request: ResetPasswordDto) -> PasswordResetOutcome:
        try:
            email = Email(request.email)
        except ValueError:
            return PasswordResetOutcome.USER_NOT_FOUND

        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_email(email)
            if not user:
                return PasswordResetOutcome.USER_NOT_FOUND

            now = self.clock()
            status = user.check_password_reset(request.token, now)
            if status == ResetTokenStatus.INVALID:
                return PasswordResetOutcome.INVALID_TOKEN
            if status == ResetTokenStatus.EXPIRED:
                return PasswordResetOutcome.EXPIRED_TOKEN

            if verify_password(request.password, user.hashed_password):
                return PasswordResetOutcome.SAME_PASSWORD

            user.change_password(get_password_hash(request.password), now)
            await self.unit_of_work.users.update(user)
            await self.unit_of_work.commit()

        for event in user.get_events():
            logger.info("Password changed for user %s at %s", event.user_id, event.changed_at)
        return PasswordResetOutcome.SUCCESS
