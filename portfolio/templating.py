"""
Jinja2 environment shared by the page routes.
"""
from pathlib import Path

from fastapi.templating import Jinja2Templates

from portfolio.config import settings, SITE_OWNER
from portfolio.views.navigation import NAV_LINKS, should_show_header

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=TEMPLATES_DIR)
templates.env.globals.update(
    site_owner=SITE_OWNER,
    nav_links=NAV_LINKS,
    should_show_header=should_show_header,
    settings=settings,
)
