# Middleware package init
"""
NoteApp Backend — Middleware Package
======================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [Session] → Route Handler

    1. Request ID: correlation ID for logs and error bodies
    2. Logging: method, path, status and duration with the request ID
    3. Session: Starlette SessionMiddleware decodes the signed cookie
"""
