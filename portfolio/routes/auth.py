"""
Sign-in and sign-out pages for the single admin account.
"""
from fastapi import APIRouter, Form, HTTPException, Request, status
from fastapi.responses import RedirectResponse
import logging

from portfolio.templating import templates
from portfolio.utils.jwt_auth import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    TOKEN_COOKIE_NAME,
    authenticate_user,
    create_access_token,
    get_admin_session,
)
from portfolio.utils.rate_limit import limiter, RATE_LIMITS

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.get("/sign-in")
async def sign_in_page(request: Request):
    if get_admin_session(request):
        return RedirectResponse("/admin", status_code=status.HTTP_303_SEE_OTHER)
    return templates.TemplateResponse(request, "sign_in.html", {"error": None})


@router.post("/sign-in")
@limiter.limit(RATE_LIMITS["login"])
async def sign_in(request: Request, password: str = Form("")):
    """Verify the admin password and set the session cookie."""
    try:
        token_data = authenticate_user(password)
    except HTTPException as e:
        logger.warning(f"Failed sign-in from {request.client.host if request.client else 'unknown'}")
        return templates.TemplateResponse(
            request,
            "sign_in.html",
            {"error": e.detail.get("message", "Sign-in failed")},
            status_code=e.status_code,
        )

    response = RedirectResponse("/admin", status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        TOKEN_COOKIE_NAME,
        create_access_token(token_data),
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=request.url.scheme == "https",
    )
    logger.info("Admin signed in")
    return response


@router.get("/sign-up")
async def sign_up():
    # Single admin account; there is nothing to register
    return RedirectResponse("/sign-in", status_code=status.HTTP_303_SEE_OTHER)


@router.post("/sign-out")
async def sign_out():
    response = RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(TOKEN_COOKIE_NAME)
    return response
