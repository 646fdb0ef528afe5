"""Request password reset use case"""

import logging
from datetime import datetime, timedelta
from typing import Callable

from ...core.errors import NotificationError, UserNotFoundError
from ...core.security import generate_reset_token, utcnow
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.email import Email
from ...infrastructure.external_services.email_service import EmailService
from ..dtos.user_dtos import PasswordResetRequestDto

logger = logging.getLogger(__name__)


class RequestPasswordResetUseCase:
    """Issues a reset token, stores it on the user and e-mails it"""

    def __init__(
        self,
        unit_of_work: IUnitOfWork,
        email_service: EmailService,
        token_ttl: timedelta = timedelta(hours=1),
        clock: Callable[[], datetime] = utcnow,
        token_factory: Callable[[], str] = generate_reset_token,
    ):
        self.unit_of_work = unit_of_work
        self.email_service = email_service
        self.token_ttl = token_ttl
        self.clock = clock
        self.token_factory = token_factory

    async def execute(self, request: PasswordResetRequestDto) -> None:
        try:
            email = Email(request.email)
        except ValueError:
            raise UserNotFoundError() from None

        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_email(email)
            if not user:
                raise UserNotFoundError()

            token = self.token_factory()
            user.issue_password_reset(token, self.clock(), self.token_ttl)

            await self.unit_of_work.users.update(user)
            await self.unit_of_work.commit()

        sent = await self.email_service.send_password_reset_email(
            to_email=str(user.email),
            first_name=user.first_name,
            reset_token=token,
        )
        if not sent:
            raise NotificationError(str(user.email))

        logger.info("Password reset issued for %s", user.email)
