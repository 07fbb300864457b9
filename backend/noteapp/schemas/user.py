"""
NoteApp Backend — User Model
==============================

What:  One entry of the shared user collection (data/users.json).
Why:   Field names match the persisted JSON keys exactly.

Invariants:
    - username is the unique key of the collection (case-sensitive).
    - password holds the SHA-256 hex digest, never the plaintext.
"""

from pydantic import BaseModel, Field


class User(BaseModel):
    """A registered account as stored on disk."""

    username: str = Field(description="Unique login name; also names the user's note file")
    password: str = Field(description="SHA-256 hex digest of the password")
