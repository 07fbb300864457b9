"""
NoteApp Backend — FastAPI Dependencies
========================================

What:  Per-request accessors for the repositories, templates and session.
Why:   create_app() wires one set of collaborators into app.state; routes
       receive them through Depends() instead of importing module globals,
       so tests can build an app against a temporary data directory.
"""

from fastapi import Depends, Request
from fastapi.templating import Jinja2Templates

from noteapp.exceptions import NotAuthenticatedError
from noteapp.services.note_service import NoteRepository
from noteapp.services.user_service import UserRepository
from noteapp.session import SessionState


def get_user_repository(request: Request) -> UserRepository:
    return request.app.state.users


def get_note_repository(request: Request) -> NoteRepository:
    return request.app.state.notes


def get_templates(request: Request) -> Jinja2Templates:
    return request.app.state.templates


def get_session_state(request: Request) -> SessionState:
    return SessionState(request.session)


def require_username(
    request: Request,
    session: SessionState = Depends(get_session_state),
) -> str:
    """
    Username of the logged-in user.

    Raises:
        NotAuthenticatedError: nobody is logged in (answered with a redirect to "/")
    """
    username = session.current()
    if username is None:
        raise NotAuthenticatedError(path=request.url.path)
    return username
