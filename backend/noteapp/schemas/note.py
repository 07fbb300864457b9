"""
NoteApp Backend — Note Model
==============================

What:  One entry of a user's note collection (data/<username>.json).
Why:   Field names match the persisted JSON keys exactly.

Invariants:
    - name is unique within one user's collection when a note is created;
      editing may introduce a duplicate, which the app tolerates.
    - Collection order is creation order.
"""

from pydantic import BaseModel, Field


class Note(BaseModel):
    """A named text note."""

    name: str = Field(description="Note title, unique per user at creation time")
    content: str = Field(default="", description="Free-form note body")
