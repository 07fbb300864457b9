"""
NoteApp Backend — User Repository
===================================

What:  Registration and authentication against the shared user collection.
Why:   Keeps password hashing and the uniqueness rule out of the routes.
How:   Loads the full collection, scans it linearly, and rewrites the whole
       file on change. Registration holds the collection lock so two
       concurrent sign-ups cannot overwrite each other.
Who:   Called by the /register and /login route handlers.

Username policy:
    A username also names the user's note file (data/<username>.json), so it
    must be a safe file stem: 1-64 characters from [A-Za-z0-9_.-], starting
    with a letter or digit, and unique ignoring case so two accounts never
    map to one file on a case-insensitive file system. The stem of the user
    collection file itself ("users") is reserved, otherwise that user's notes
    would overwrite the user list.

Password storage:
    SHA-256 hex digest, unsalted. Existing data files depend on this exact
    format, so it cannot be swapped for a salted scheme without a migration.
"""

import hashlib
import hmac
import logging
import re
from pathlib import Path
from typing import List, Sequence

from noteapp.exceptions import (
    AlreadyExistsError,
    InvalidCredentialsError,
    ValidationError,
)
from noteapp.schemas.user import User
from noteapp.services.file_store import FileStore, PathLike

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]{0,63}$")


def hash_password(password: str) -> str:
    """Return the 64-character SHA-256 hex digest of `password`."""
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def validate_username(username: str, reserved: Sequence[str] = ("users",)) -> str:
    """
    Ensure `username` is safe to use as a file name stem.

    Raises:
        ValidationError: empty, too long, path-like, or reserved
    """
    if not USERNAME_PATTERN.match(username or ""):
        raise ValidationError(
            message=(
                "Username must be 1-64 characters of letters, digits, '.', '_' or '-' "
                "and start with a letter or digit"
            ),
            field="username",
        )
    if username.lower() in {r.lower() for r in reserved}:
        raise ValidationError(
            message=f"Username '{username}' is reserved",
            field="username",
        )
    return username


class UserRepository:
    """
    Access to the single global user collection.

    Responsibilities:
        - load_all() / save_all(): raw collection access
        - register(): unique-username insert with password hashing
        - authenticate(): username + hashed password lookup
    """

    def __init__(self, store: FileStore, users_path: PathLike):
        self.store = store
        self.users_path = Path(users_path)

    @property
    def reserved_names(self) -> Sequence[str]:
        return (self.users_path.stem,)

    async def load_all(self) -> List[User]:
        return await self.store.read(self.users_path, User)

    async def save_all(self, users: Sequence[User]) -> None:
        await self.store.write(self.users_path, users)

    async def register(self, username: str, password: str) -> User:
        """
        Create a new account.

        Returns:
            The stored User (password field holds the hash).

        Raises:
            ValidationError: unsafe username or empty password
            AlreadyExistsError: username taken (ignoring case); nothing is written
            StorageError / FormatError: collection could not be loaded or saved
        """
        validate_username(username, self.reserved_names)
        if not password:
            raise ValidationError(message="Password is required", field="password")

        async with self.store.lock(self.users_path):
            users = await self.load_all()

            # Case-insensitive: Alice and alice would share one note file on
            # case-insensitive file systems (macOS, Windows)
            for user in users:
                if user.username.lower() == username.lower():
                    logger.info(
                        "Registration rejected: username %s clashes with %s",
                        username,
                        user.username,
                    )
                    raise AlreadyExistsError(username)

            new_user = User(username=username, password=hash_password(password))
            users.append(new_user)
            await self.save_all(users)

        logger.info("Registered user %s (%d total)", username, len(users))
        return new_user

    async def authenticate(self, username: str, password: str) -> User:
        """
        Find the user whose username and password hash both match.

        No rate limiting or lockout is applied.

        Raises:
            InvalidCredentialsError: no matching user
        """
        hashed = hash_password(password)
        users = await self.load_all()

        for user in users:
            if user.username == username and hmac.compare_digest(
                user.password.encode("utf-8"), hashed.encode("utf-8")
            ):
                logger.info("User %s logged in", username)
                return user

        logger.warning("Failed login attempt for username %s", username)
        raise InvalidCredentialsError(username)
