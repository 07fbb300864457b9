"""
NoteApp Backend — Session State
=================================

What:  Tracks which user is logged in for the client making the request.
Why:   Each browser carries its own identity in a signed cookie, so one
       client logging in or out never changes what another client sees.
How:   Starlette's SessionMiddleware (itsdangerous-signed cookie) exposes
       request.session; SessionState is a thin typed wrapper over it.
Who:   Created per request by noteapp.dependencies.get_session_state.
"""

from typing import Any, MutableMapping, Optional

from noteapp.schemas.user import User

SESSION_USER_KEY = "username"


class SessionState:
    """The current-user slot of one client session."""

    def __init__(self, session: MutableMapping[str, Any]):
        self._session = session

    def login(self, user: User) -> None:
        """Make `user` the current identity, replacing any previous one."""
        self._session[SESSION_USER_KEY] = user.username

    def logout(self) -> None:
        """Forget the current identity; the cookie is expired on the response."""
        self._session.clear()

    def current(self) -> Optional[str]:
        """Username of the logged-in user, or None."""
        username = self._session.get(SESSION_USER_KEY)
        return username if isinstance(username, str) and username else None
