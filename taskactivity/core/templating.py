"""
Jinja2 templates and session flash messages for the server-rendered pages
"""
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

FLASH_SESSION_KEY = "_flashes"


def flash(request: Request, key: str, message: str) -> None:
    """Store a message for the next rendered page (successMessage / errorMessage)"""
    flashes = request.session.get(FLASH_SESSION_KEY, {})
    flashes[key] = message
    request.session[FLASH_SESSION_KEY] = flashes


def pop_flashes(request: Request) -> Dict[str, str]:
    return request.session.pop(FLASH_SESSION_KEY, None) or {}


def render(
    request: Request,
    name: str,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 200
):
    """Render a template with pending flash messages merged into the context"""
    ctx = pop_flashes(request)
    ctx.update(context or {})
    return templates.TemplateResponse(request, name, ctx, status_code=status_code)
