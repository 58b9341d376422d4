"""
Noteful API - Routes Package
============================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - folders.py: GET/POST /api/folders, GET/PATCH/DELETE /api/folders/{id}
    - notes.py:   GET /api (and /api/notes), POST /api/notes,
                  GET/PATCH/DELETE /api/notes/{id}
    - health.py:  GET /health

Routes stay thin: extract path params and body, call a service, set the
status code and headers. Validation and store access live in services.
"""
