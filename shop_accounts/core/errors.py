"""Structured account errors"""

from enum import Enum
from typing import Optional, Sequence


class ErrorCode(str, Enum):
    REGISTER_FAIL = "register_fail"
    USER_INVALID = "user_invalid"
    ALL_USERS_FAIL = "all_users_fail"
    USER_NOT_FOUND = "user_not_found"
    MISSING_DOCUMENTS = "missing_documents"
    NOTIFICATION_FAIL = "notification_fail"
    OAUTH_FAIL = "oauth_fail"


class AccountError(Exception):
    """
    Business-rule failure raised by the use cases.

    ``cause`` is a human readable description of the input that triggered
    the failure; it never carries a plaintext password.
    """

    def __init__(self, name: str, message: str, code: ErrorCode, cause: Optional[str] = None):
        self.name = name
        self.message = message
        self.code = code
        self.cause = cause
        super().__init__(message)

    @classmethod
    def create(cls, *, name: str, message: str, code: ErrorCode, cause: Optional[str] = None) -> "AccountError":
        return cls(name=name, message=message, code=code, cause=cause)


class UserNotFoundError(AccountError):
    def __init__(self, message: str = "User not found"):
        super().__init__(name="User not found", message=message, code=ErrorCode.USER_NOT_FOUND)


class MissingDocumentsError(AccountError):
    def __init__(self, required: Sequence[str]):
        self.required = list(required)
        super().__init__(
            name="Missing documents",
            message="The user must upload the following documents: " + ", ".join(self.required),
            code=ErrorCode.MISSING_DOCUMENTS,
        )


class NotificationError(AccountError):
    def __init__(self, recipient: str):
        super().__init__(
            name="Notification fail",
            message=f"Could not send email to {recipient}",
            code=ErrorCode.NOTIFICATION_FAIL,
        )


class OAuthProviderError(AccountError):
    def __init__(self, message: str):
        super().__init__(name="OAuth fail", message=message, code=ErrorCode.OAUTH_FAIL)


def register_info_error(first_name, last_name, email, age) -> str:
    return (
        "One or more fields are incomplete or invalid.\n"
        "Required fields:\n"
        f"* first_name: string, received {first_name!r}\n"
        f"* last_name: string, received {last_name!r}\n"
        f"* email: string, received {email!r} (must not be registered already)\n"
        f"* age: number, received {age!r}"
    )


def login_info_error(email) -> str:
    return (
        "Invalid credentials.\n"
        f"* email: received {email!r}\n"
        "* password: does not match a registered account"
    )


def all_users_error() -> str:
    return "Could not read the user collection."
