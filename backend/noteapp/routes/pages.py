"""
NoteApp Backend — Landing Page
================================

What:  GET / renders the landing page with links to log in or register.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from noteapp.dependencies import get_templates
from noteapp.templating import render

router = APIRouter(tags=["Pages"])


@router.get("/", include_in_schema=False)
async def index(
    request: Request,
    templates: Jinja2Templates = Depends(get_templates),
) -> Response:
    return render(templates, request, "index.html")
