"""
Page routes: the public gallery and the admin console.
"""
from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile

from portfolio.config import settings
from portfolio.database import get_db
from portfolio.exceptions import UpstreamServiceError
from portfolio.services.gallery_store import GalleryStore
from portfolio.services.upload_client import UploadClient
from portfolio.templating import templates
from portfolio.utils.jwt_auth import get_admin_session
from portfolio.views.admin import ADDED_MESSAGE, AdminConsole, ItemDraft, SelectedFile
from portfolio.views.gallery import GalleryView

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])

# Carries the outcome of a successful post across the redirect back to /admin
FLASH_COOKIE_NAME = "admin_flash"
FLASH_MESSAGES = {
    "added": ADDED_MESSAGE,
}


async def _gallery_view(db: AsyncSession, category: Optional[str], view: Optional[str]) -> GalleryView:
    try:
        items = await GalleryStore(db).list_items()
    except UpstreamServiceError:
        items = []
    return GalleryView(items, category=category, viewer_id=view)


@router.get("/")
async def gallery_page(
    request: Request,
    category: Optional[str] = None,
    view: Optional[str] = None,
    db: AsyncSession = Depends(get_db)
):
    gallery = await _gallery_view(db, category, view)
    return templates.TemplateResponse(request, "gallery.html", {"gallery": gallery})


@router.get("/partials/gallery")
async def gallery_partial(
    request: Request,
    category: Optional[str] = None,
    view: Optional[str] = None,
    db: AsyncSession = Depends(get_db)
):
    """Gallery section alone, refetched by the page on every change event."""
    gallery = await _gallery_view(db, category, view)
    return templates.TemplateResponse(request, "_gallery_section.html", {"gallery": gallery})


def _uploader(request: Request) -> UploadClient:
    if settings.UPLOAD_ENDPOINT_URL:
        return UploadClient(base_url=settings.UPLOAD_ENDPOINT_URL)
    return UploadClient(app=request.app)


def _console(request: Request, db: AsyncSession, categories: Optional[List[str]] = None) -> AdminConsole:
    return AdminConsole(
        store=GalleryStore(db),
        uploader=_uploader(request),
        categories=list(categories or []),
    )


def _render_admin(request: Request, console: AdminConsole, session: dict):
    return templates.TemplateResponse(request, "admin.html", {"console": console, "session": session})


def _sign_in_redirect() -> RedirectResponse:
    return RedirectResponse("/sign-in", status_code=status.HTTP_303_SEE_OTHER)


def _admin_redirect(flash: Optional[str] = None) -> RedirectResponse:
    """Post/redirect/get so a reload does not repeat the mutation."""
    response = RedirectResponse("/admin", status_code=status.HTTP_303_SEE_OTHER)
    if flash:
        response.set_cookie(FLASH_COOKIE_NAME, flash, max_age=60, httponly=True, samesite="lax")
    return response


@router.get("/admin")
async def admin_page(request: Request, db: AsyncSession = Depends(get_db)):
    session = get_admin_session(request)
    if not session:
        return _sign_in_redirect()

    console = _console(request, db)
    await console.fetch_items()
    flash = request.cookies.get(FLASH_COOKIE_NAME)
    if flash in FLASH_MESSAGES:
        console.alert(FLASH_MESSAGES[flash])

    response = _render_admin(request, console, session)
    if flash:
        response.delete_cookie(FLASH_COOKIE_NAME)
    return response


@router.post("/admin/items")
async def admin_add_item(
    request: Request,
    title: str = Form(""),
    category: str = Form(""),
    description: str = Form(""),
    categories: List[str] = Form([]),
    db: AsyncSession = Depends(get_db)
):
    session = get_admin_session(request)
    if not session:
        return _sign_in_redirect()

    form = await request.form()
    file = form.get("file")
    selected = None
    if isinstance(file, UploadFile) and file.filename:
        selected = SelectedFile(
            filename=file.filename,
            content=await file.read(),
            content_type=file.content_type or "application/octet-stream",
        )

    console = _console(request, db, categories)
    added = await console.add_item(ItemDraft(
        title=title,
        category=category,
        description=description,
        file=selected,
    ))
    if added:
        return _admin_redirect(flash="added")
    # Keep the client-local categories; the list is only reloaded for display
    await console.fetch_items(regenerate_categories=False)
    return _render_admin(request, console, session)


@router.post("/admin/items/{item_id}/delete")
async def admin_delete_item(
    request: Request,
    item_id: str,
    confirmed: bool = Form(False),
    categories: List[str] = Form([]),
    db: AsyncSession = Depends(get_db)
):
    session = get_admin_session(request)
    if not session:
        return _sign_in_redirect()

    console = _console(request, db, categories)
    deleted = await console.delete_item(item_id, confirmed=confirmed)
    if deleted:
        return _admin_redirect()
    await console.fetch_items(regenerate_categories=False)
    return _render_admin(request, console, session)


@router.post("/admin/categories")
async def admin_manage_categories(
    request: Request,
    action: str = Form(...),
    label: str = Form(""),
    categories: List[str] = Form([]),
    db: AsyncSession = Depends(get_db)
):
    """Add or remove a label in the page-local category list. Nothing is stored."""
    session = get_admin_session(request)
    if not session:
        return _sign_in_redirect()

    console = _console(request, db, categories)
    if action == "add":
        console.add_category(label)
    elif action == "remove":
        console.remove_category(label)
    await console.fetch_items(regenerate_categories=False)
    return _render_admin(request, console, session)
