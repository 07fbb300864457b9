"""
NoteApp Backend — Notes Route Handlers
========================================

What:  List, create, edit and delete the logged-in user's notes.
Why:   Each POST is one load → validate → mutate → save cycle followed by a
       redirect back to /notes.
Who:   Called by the forms in notes.html and edit_note.html.

Access:
    Every route depends on require_username; without a session the
    NotAuthenticatedError handler redirects to "/".

Caching:
    GET /notes is marked no-store so the back button never shows a stale
    list after an edit or delete.
"""

import logging

from fastapi import APIRouter, Depends, Form, Query, Request, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from noteapp.dependencies import get_note_repository, get_templates, require_username
from noteapp.schemas.note import Note
from noteapp.services.note_service import NoteRepository
from noteapp.templating import render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, max-age=0",
    "Pragma": "no-cache",
    "Expires": "0",
}


def _back_to_notes() -> RedirectResponse:
    return RedirectResponse("/notes", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/notes", include_in_schema=False)
async def list_notes(
    request: Request,
    username: str = Depends(require_username),
    notes: NoteRepository = Depends(get_note_repository),
    templates: Jinja2Templates = Depends(get_templates),
) -> Response:
    items = await notes.load(username)
    return render(
        templates,
        request,
        "notes.html",
        {"notes": items, "username": username},
        headers=NO_CACHE_HEADERS,
    )


@router.post(
    "/notes",
    status_code=status.HTTP_303_SEE_OTHER,
    summary="Create a note",
)
async def create_note(
    name: str = Form(""),
    content: str = Form(""),
    username: str = Depends(require_username),
    notes: NoteRepository = Depends(get_note_repository),
) -> RedirectResponse:
    await notes.add(username, name, content)
    return _back_to_notes()


@router.get("/edit", include_in_schema=False)
async def edit_note_form(
    request: Request,
    name: str = Query(""),
    username: str = Depends(require_username),
    notes: NoteRepository = Depends(get_note_repository),
    templates: Jinja2Templates = Depends(get_templates),
) -> Response:
    # Unknown names render an empty form
    note = await notes.get(username, name) or Note(name="", content="")
    return render(templates, request, "edit_note.html", {"note": note})


@router.post(
    "/edit",
    status_code=status.HTTP_303_SEE_OTHER,
    summary="Rename and/or rewrite a note",
)
async def edit_note(
    old_name: str = Form(""),
    name: str = Form(""),
    content: str = Form(""),
    username: str = Depends(require_username),
    notes: NoteRepository = Depends(get_note_repository),
) -> RedirectResponse:
    await notes.edit(username, old_name, name, content)
    return _back_to_notes()


@router.api_route(
    "/delete",
    methods=["GET", "POST"],
    status_code=status.HTTP_303_SEE_OTHER,
    summary="Delete a note",
)
async def delete_note(
    name: str = Query(""),
    username: str = Depends(require_username),
    notes: NoteRepository = Depends(get_note_repository),
) -> RedirectResponse:
    await notes.delete(username, name)
    return _back_to_notes()
