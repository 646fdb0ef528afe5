"""HTML views"""

from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from ...api.dependencies import get_current_identity, get_unit_of_work
from ...api.templating import templates
from ...application.use_cases.get_user_profile import GetUserProfileUseCase
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.services.identity import AuthenticatedIdentity

router = APIRouter()


@router.get("/login", response_class=HTMLResponse)
async def login_page(request: Request):
    return templates.TemplateResponse(request, "login.html", {})


@router.get("/register", response_class=HTMLResponse)
async def register_page(request: Request):
    return templates.TemplateResponse(request, "register.html", {})


@router.get("/profile", response_class=HTMLResponse)
async def profile_page(
    request: Request,
    identity: Optional[AuthenticatedIdentity] = Depends(get_current_identity),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
):
    if identity is None:
        return RedirectResponse(url="/login", status_code=status.HTTP_303_SEE_OTHER)

    profile = await GetUserProfileUseCase(unit_of_work).execute(identity.user_id)
    return templates.TemplateResponse(request, "profile.html", {"user": profile})


@router.get("/reset-sent", response_class=HTMLResponse)
async def reset_sent_page(request: Request):
    return templates.TemplateResponse(request, "reset_sent.html", {})


@router.get("/password-reset", response_class=HTMLResponse)
async def password_reset_page(request: Request):
    return templates.TemplateResponse(request, "password_reset.html", {})


@router.get("/password-change", response_class=HTMLResponse)
async def password_change_page(request: Request, email: Optional[str] = None):
    return templates.TemplateResponse(request, "password_change.html", {"email": email})
