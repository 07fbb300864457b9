"""
NoteApp Backend — Account Route Handlers
==========================================

What:  Registration, login and logout.

Request Flow:
    POST /register → UserRepository.register → 303 /        (400 if taken)
    POST /login    → UserRepository.authenticate
                   → SessionState.login      → 303 /notes   (401 on mismatch)
    POST /logout   → SessionState.logout     → 303 /        (cookie expired)
"""

import logging

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from noteapp.dependencies import (
    get_session_state,
    get_templates,
    get_user_repository,
)
from noteapp.services.user_service import UserRepository
from noteapp.session import SessionState
from noteapp.templating import render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.get("/register", include_in_schema=False)
async def register_form(
    request: Request,
    templates: Jinja2Templates = Depends(get_templates),
) -> Response:
    return render(templates, request, "register.html")


@router.post(
    "/register",
    status_code=status.HTTP_303_SEE_OTHER,
    summary="Create an account",
)
async def register(
    username: str = Form(""),
    password: str = Form(""),
    users: UserRepository = Depends(get_user_repository),
) -> RedirectResponse:
    await users.register(username, password)
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/login", include_in_schema=False)
async def login_form(
    request: Request,
    templates: Jinja2Templates = Depends(get_templates),
) -> Response:
    return render(templates, request, "login.html")


@router.post(
    "/login",
    status_code=status.HTTP_303_SEE_OTHER,
    summary="Log in and start a session",
)
async def login(
    username: str = Form(""),
    password: str = Form(""),
    users: UserRepository = Depends(get_user_repository),
    session: SessionState = Depends(get_session_state),
) -> RedirectResponse:
    user = await users.authenticate(username, password)
    session.login(user)
    return RedirectResponse("/notes", status_code=status.HTTP_303_SEE_OTHER)


@router.post(
    "/logout",
    status_code=status.HTTP_303_SEE_OTHER,
    summary="End the session",
)
async def logout(
    session: SessionState = Depends(get_session_state),
) -> RedirectResponse:
    username = session.current()
    session.logout()
    if username:
        logger.info("User %s logged out", username)
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
