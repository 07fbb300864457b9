# Services package init
"""
NoteApp Backend — Services Layer
==================================

What:  Persistence and business rules sitting between routes (HTTP) and disk.
Why:   Routes handle HTTP; services handle uniqueness, hashing and storage.

Service Inventory:
    - FileStore:       whole-collection JSON read/write with per-file locks
    - UserRepository:  registration and authentication (data/users.json)
    - NoteRepository:  per-user note CRUD (data/<username>.json)
"""
