"""Session cookie helpers"""

from starlette.responses import Response

from ..core.config import settings
from ..core.security import create_session_token
from ..domain.services.identity import AuthenticatedIdentity


def start_session(response: Response, identity: AuthenticatedIdentity) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=create_session_token(str(identity.user_id)),
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


def end_session(response: Response) -> None:
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
