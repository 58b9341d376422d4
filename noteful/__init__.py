"""
Noteful API - Application Package
=================================

What: Folder and note management REST API.
Who:  Imported by uvicorn (`noteful.main:app`), pytest and the service layer.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Validators / Services (Business)  │  ← Field checks, CRUD orchestration
    ├─────────────────────────────────────┤
    │  Models, Schemas & Sanitizer (Data) │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes set status codes and headers and delegate to services.
    Services raise application exceptions; main.py renders them.
"""

__version__ = "1.0.0"
