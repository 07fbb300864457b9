"""
NoteApp Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for storage, auth and note errors.
Why:   Repositories raise typed errors; global handlers in main.py map each
       type to an HTTP status so route handlers stay free of try/except.
How:   Each exception carries a user-facing message and an optional context
       dict that is logged server-side but never returned to the client.

Exception Hierarchy:
    NoteAppError (base)
    ├── ValidationError          → 400 Bad Request
    ├── AlreadyExistsError       → 400 Bad Request (username taken)
    ├── DuplicateNameError       → 400 Bad Request (note name taken)
    ├── InvalidCredentialsError  → 401 Unauthorized
    ├── NotAuthenticatedError    → 303 redirect to the landing page
    ├── StorageError             → 500 (file read/write failed)
    ├── FormatError              → 500 (collection file is not valid JSON)
    └── TemplateRenderError      → 500 (view could not be rendered)
"""

from typing import Any, Dict, Optional


class NoteAppError(Exception):
    """
    Base exception for all NoteApp errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NoteAppError):
    """Raised when form input is missing or unsafe (e.g. a path-like username)."""

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AlreadyExistsError(NoteAppError):
    """Raised by registration when the username is already taken."""

    def __init__(self, username: str):
        super().__init__(
            message="Username already exists",
            context={"username": username},
        )
        self.username = username


class DuplicateNameError(NoteAppError):
    """Raised when a user already owns a note with the requested name."""

    def __init__(self, name: str, username: Optional[str] = None):
        ctx: Dict[str, Any] = {"name": name}
        if username:
            ctx["username"] = username
        super().__init__(
            message="Note with this name already exists. Please choose a unique name.",
            context=ctx,
        )
        self.name = name


class InvalidCredentialsError(NoteAppError):
    """
    Raised when no user matches the supplied username and password hash.

    The message deliberately does not say which of the two was wrong.
    """

    def __init__(self, username: Optional[str] = None):
        ctx = {"username": username} if username else {}
        super().__init__(message="Invalid username or password", context=ctx)


class NotAuthenticatedError(NoteAppError):
    """
    Raised when a notes route is hit without a logged-in user.

    HTTP: handled as a 303 redirect to "/" rather than an error status.
    """

    def __init__(self, path: Optional[str] = None):
        ctx = {"path": path} if path else {}
        super().__init__(message="Login required", context=ctx)


class StorageError(NoteAppError):
    """
    Raised when a collection file exists but cannot be read or written.

    A missing file is NOT a StorageError; the store treats it as empty.
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class FormatError(NoteAppError):
    """Raised when a collection file's content does not decode into the expected shape."""

    def __init__(
        self,
        message: str = "Stored data is corrupted",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class TemplateRenderError(NoteAppError):
    """Raised when a Jinja2 template cannot be loaded or rendered."""

    def __init__(self, template: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["template"] = template
        super().__init__(message="Error loading template", context=ctx)
        self.template = template
