# Routes package init
"""
NoteApp Backend — Routes Package
==================================

Route Inventory:
    - pages.py:   GET  /                  (landing page)
    - auth.py:    GET/POST /register, GET/POST /login, POST /logout
    - notes.py:   GET/POST /notes, GET/POST /edit, GET/POST /delete
    - health.py:  GET  /health            (service health check)
    Static assets are mounted at /static by main.create_app().

Design Principle:
    Routes stay THIN: parse the form, call one repository operation, then
    redirect (303 See Other) after every successful write so a browser
    refresh never repeats it. Errors are raised, not returned; the global
    handlers in main.py turn them into responses.
"""
