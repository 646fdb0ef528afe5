"""User account routes"""

import logging
from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, RedirectResponse

from ...api.dependencies import (
    get_current_identity,
    get_email_service,
    get_github_oauth_service,
    get_unit_of_work,
)
from ...api.session import end_session, start_session
from ...api.templating import templates
from ...application.dtos.user_dtos import (
    LoginUserDto,
    PasswordResetRequestDto,
    PruneResponse,
    RegisterUserDto,
    ResetPasswordDto,
    UserDto,
    UsersListResponse,
)
from ...application.use_cases.get_user_profile import GetUserProfileUseCase
from ...application.use_cases.github_oauth_use_case import GitHubOAuthUseCase
from ...application.use_cases.list_users import ListUsersUseCase
from ...application.use_cases.login_user import LoginUserUseCase
from ...application.use_cases.logout_user import LogoutUserUseCase
from ...application.use_cases.prune_inactive_users import PruneInactiveUsersUseCase
from ...application.use_cases.register_user import RegisterUserUseCase
from ...application.use_cases.request_password_reset import RequestPasswordResetUseCase
from ...application.use_cases.reset_password_use_case import PasswordResetOutcome, ResetPasswordUseCase
from ...application.use_cases.toggle_premium_role import TogglePremiumRoleUseCase
from ...core.config import settings
from ...core.errors import AccountError, MissingDocumentsError, UserNotFoundError
from ...core.security import generate_oauth_state
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.services.identity import AuthenticatedIdentity
from ...infrastructure.external_services.email_service import EmailService
from ...infrastructure.external_services.github_oauth_service import GitHubOAuthService

logger = logging.getLogger(__name__)

router = APIRouter()

INTERNAL_ERROR = "Internal server error"

# Template and message for every failed password change check
RESET_FAILURES = {
    PasswordResetOutcome.USER_NOT_FOUND: ("password_change.html", "User not found"),
    PasswordResetOutcome.INVALID_TOKEN: ("password_reset.html", "The reset code is invalid"),
    PasswordResetOutcome.EXPIRED_TOKEN: ("password_reset.html", "The reset code has expired"),
    PasswordResetOutcome.SAME_PASSWORD: (
        "password_change.html",
        "The new password cannot be the same as the previous one",
    ),
}


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


@router.post("/register")
async def register_user(
    first_name: str = Form(...),
    last_name: str = Form(...),
    email: str = Form(...),
    password: str = Form(...),
    age: Optional[int] = Form(None),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
):
    """Register a new user"""
    try:
        request = RegisterUserDto(
            first_name=first_name, last_name=last_name, email=email, password=password, age=age
        )
        await RegisterUserUseCase(unit_of_work).execute(request)
    except AccountError as e:
        logger.warning("%s: %s\n%s", e.name, e.message, e.cause)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
    except Exception:
        logger.exception("Registration failed")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)

    return _redirect("/login")


@router.post("/login")
async def login_user(
    email: str = Form(...),
    password: str = Form(...),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
):
    """Login user"""
    try:
        identity = await LoginUserUseCase(unit_of_work).execute(
            LoginUserDto(email=email, password=password)
        )
    except AccountError as e:
        logger.warning("%s: %s", e.name, e.message)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
    except Exception:
        logger.exception("Login failed")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)

    response = _redirect("/profile")
    start_session(response, identity)
    return response


@router.get("/logout")
async def logout_user(
    identity: Optional[AuthenticatedIdentity] = Depends(get_current_identity),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
):
    """Logout user"""
    try:
        await LogoutUserUseCase(unit_of_work).execute(identity)
    except Exception:
        logger.exception("Could not save last connection on logout")
        return PlainTextResponse(INTERNAL_ERROR, status_code=500)

    response = _redirect("/login")
    end_session(response)
    return response


@router.get("/github")
async def login_github(
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    oauth_service: GitHubOAuthService = Depends(get_github_oauth_service),
):
    """Start GitHub authentication"""
    state = generate_oauth_state()
    url = GitHubOAuthUseCase(unit_of_work, oauth_service).get_authorization_url(state)

    response = RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)
    response.set_cookie(settings.OAUTH_STATE_COOKIE_NAME, state, max_age=600, httponly=True, samesite="lax")
    return response


@router.get("/githubcallback")
async def login_github_callback(
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    oauth_service: GitHubOAuthService = Depends(get_github_oauth_service),
):
    """Handle the GitHub callback; provider errors propagate to the error handlers"""
    expected_state = request.cookies.get(settings.OAUTH_STATE_COOKIE_NAME)
    if not code or not state or state != expected_state:
        response = _redirect("/login")
    else:
        identity = await GitHubOAuthUseCase(unit_of_work, oauth_service).handle_callback(code)
        if identity is None:
            response = _redirect("/login")
        else:
            response = _redirect("/profile")
            start_session(response, identity)

    response.delete_cookie(settings.OAUTH_STATE_COOKIE_NAME)
    return response


@router.get("/admin", response_class=HTMLResponse)
async def admin_view(
    request: Request,
    identity: Optional[AuthenticatedIdentity] = Depends(get_current_identity),
):
    """Admin page"""
    if identity is None or not identity.is_admin:
        return PlainTextResponse("Access denied", status_code=status.HTTP_403_FORBIDDEN)
    return templates.TemplateResponse(request, "admin.html", {"identity": identity})


@router.get("/current", response_model=UserDto)
async def current_user(
    identity: Optional[AuthenticatedIdentity] = Depends(get_current_identity),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
):
    """Profile of the signed-in user"""
    if identity is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    profile = await GetUserProfileUseCase(unit_of_work).execute(identity.user_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return profile


@router.post("/request-password-reset")
async def request_password_reset(
    email: str = Form(...),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    email_service: EmailService = Depends(get_email_service),
):
    """Send a password reset code"""
    use_case = RequestPasswordResetUseCase(
        unit_of_work,
        email_service,
        token_ttl=timedelta(minutes=settings.PASSWORD_RESET_TOKEN_TTL_MINUTES),
    )
    try:
        await use_case.execute(PasswordResetRequestDto(email=email))
    except UserNotFoundError:
        return PlainTextResponse("User not found", status_code=status.HTTP_404_NOT_FOUND)
    except Exception:
        logger.exception("Password reset request failed")
        return PlainTextResponse(INTERNAL_ERROR, status_code=500)

    return _redirect("/reset-sent")


@router.post("/reset-password")
async def reset_password(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    token: str = Form(...),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
):
    """Change the password with a reset code"""
    try:
        outcome = await ResetPasswordUseCase(unit_of_work).execute(
            ResetPasswordDto(email=email, password=password, token=token)
        )
    except Exception:
        logger.exception("Password reset failed")
        return templates.TemplateResponse(
            request, "password_reset.html", {"error": INTERNAL_ERROR}, status_code=500
        )

    if outcome == PasswordResetOutcome.SUCCESS:
        return _redirect("/login")

    template, message = RESET_FAILURES[outcome]
    return templates.TemplateResponse(request, template, {"error": message, "email": email})


@router.put("/premium/{uid}", response_model=UserDto)
async def toggle_premium(
    uid: str,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
):
    """Switch a user between the regular and premium roles"""
    try:
        return await TogglePremiumRoleUseCase(unit_of_work).execute(uid)
    except UserNotFoundError as e:
        return JSONResponse(status_code=404, content={"message": e.message})
    except MissingDocumentsError as e:
        return JSONResponse(
            status_code=400,
            content={"message": e.message, "required_documents": e.required},
        )
    except Exception:
        logger.exception("Role change failed for %s", uid)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)


@router.get("", response_model=UsersListResponse)
async def list_users(unit_of_work: IUnitOfWork = Depends(get_unit_of_work)):
    """List every user"""
    try:
        return await ListUsersUseCase(unit_of_work).execute()
    except AccountError as e:
        logger.error("%s: %s", e.name, e.cause)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
    except Exception:
        logger.exception("Listing users failed")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)


@router.delete("", response_model=PruneResponse)
async def delete_inactive_users(
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    email_service: EmailService = Depends(get_email_service),
):
    """Notify and delete users inactive for longer than the retention window"""
    use_case = PruneInactiveUsersUseCase(
        unit_of_work,
        email_service,
        retention=timedelta(days=settings.INACTIVITY_RETENTION_DAYS),
    )
    try:
        report = await use_case.execute()
    except Exception:
        logger.exception("Pruning inactive users failed")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)

    if report.ok:
        message = "Inactive users deleted"
    else:
        message = f"Inactive users deleted; {len(report.failed)} could not be processed"

    return PruneResponse(
        status="success" if report.ok else "partial",
        message=message,
        deleted=report.deleted,
        failed=report.failed,
    )
