"""E-mail and password identity strategy"""

from typing import Optional

from ...core.errors import AccountError, ErrorCode, login_info_error
from ...core.security import verify_password
from ...domain.repositories.user_repository import IUserRepository
from ...domain.services.identity import AuthenticatedIdentity, IIdentityStrategy, PasswordCredentials
from ...domain.value_objects.email import Email


class LocalPasswordStrategy(IIdentityStrategy):

    def __init__(self, users: IUserRepository):
        self.users = users

    async def authenticate(self, credentials: PasswordCredentials) -> Optional[AuthenticatedIdentity]:
        # Unknown e-mail and wrong password must be indistinguishable to the caller
        invalid = AccountError.create(
            name="Login fail",
            cause=login_info_error(credentials.email),
            message="Login failed, invalid user or password",
            code=ErrorCode.USER_INVALID,
        )

        try:
            email = Email(credentials.email)
        except ValueError:
            raise invalid from None

        user = await self.users.get_by_email(email)
        if not user:
            raise invalid

        if not verify_password(credentials.password, user.hashed_password):
            raise invalid

        return AuthenticatedIdentity.from_user(user)
