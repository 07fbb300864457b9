"""
NoteApp Backend — View Rendering
==================================

What:  Jinja2 environment setup and a render() helper for route handlers.
Why:   Any Jinja2 failure (missing file, syntax error, undefined filter)
       surfaces as TemplateRenderError so the global handler answers 500.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates
from jinja2 import TemplateError
from starlette.responses import Response

from noteapp.exceptions import TemplateRenderError
from noteapp.session import SessionState

logger = logging.getLogger(__name__)


def create_templates(directory: str) -> Jinja2Templates:
    return Jinja2Templates(directory=directory)


def render(
    templates: Jinja2Templates,
    request: Request,
    name: str,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None,
) -> Response:
    """
    Render `name` with `context`; current_user is always available to templates.

    Raises:
        TemplateRenderError: the template could not be loaded or rendered
    """
    ctx = dict(context or {})
    ctx.setdefault("current_user", SessionState(request.session).current())
    try:
        return templates.TemplateResponse(
            request,
            name,
            ctx,
            status_code=status_code,
            headers=headers,
        )
    except TemplateError as e:
        logger.error("Template %s failed: %s", name, str(e))
        raise TemplateRenderError(name, context={"error": str(e)})
