"""Register user use case"""

import logging
from datetime import datetime
from typing import Callable

from sqlalchemy.exc import IntegrityError

from ...core.errors import AccountError, ErrorCode, register_info_error
from ...core.security import get_password_hash, utcnow
from ...domain.entities.cart import Cart
from ...domain.entities.user import User
from ...domain.value_objects.email import Email
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...application.dtos.user_dtos import RegisterUserDto

logger = logging.getLogger(__name__)


class RegisterUserUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, clock: Callable[[], datetime] = utcnow):
        self.unit_of_work = unit_of_work
        self.clock = clock

    def _register_fail(self, request: RegisterUserDto) -> AccountError:
        return AccountError.create(
            name="Register fail",
            cause=register_info_error(request.first_name, request.last_name, request.email, request.age),
            message="Registration failed",
            code=ErrorCode.REGISTER_FAIL,
        )

    async def execute(self, request: RegisterUserDto) -> User:
        """Create the cart and the user in one transaction"""
        async with self.unit_of_work:
            email = Email(request.email)

            if await self.unit_of_work.users.exists_by_email(email):
                raise self._register_fail(request)

            now = self.clock()
            cart = await self.unit_of_work.carts.add(Cart.create(now))

            user = User.create(
                email=email,
                hashed_password=get_password_hash(request.password),
                first_name=request.first_name,
                last_name=request.last_name,
                age=request.age,
                cart_id=cart.id,
                now=now,
            )

            try:
                user = await self.unit_of_work.users.add(user)
            except IntegrityError as e:
                # Concurrent registration won the unique e-mail index
                raise self._register_fail(request) from e

            await self.unit_of_work.commit()

        logger.info("Registered user %s with cart %s", user.email, cart.id)
        return user
