"""
NoteApp Backend — Application Package Initializer
===================================================

Architecture Note:

    ┌─────────────────────────────────────┐
    │      Routes (HTML forms + redirects)│  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Session (signed cookie per client)│
    ├─────────────────────────────────────┤
    │   Services (User/Note repositories) │  ← uniqueness, hashing
    ├─────────────────────────────────────┤
    │     FileStore (JSON collection files)│  ← data/*.json
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
