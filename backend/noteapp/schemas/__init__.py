"""
NoteApp Backend — Pydantic Data Models
========================================

What:  The two persisted entity types (User, Note) plus response envelopes.
Why:   The same models validate what comes off disk and what goes back on it,
       so a collection file can only ever hold well-formed records.

Model Inventory:
    - user.py:    User {username, password}
    - note.py:    Note {name, content}
    - common.py:  ErrorResponse, HealthResponse
"""
