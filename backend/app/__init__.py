"""
Device Registry Backend — Application Package Initializer
==========================================================

What: Marks the `app` directory as a Python package.
Why:  Enables module imports like `from app.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend keeps a thin layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← status codes, headers
    ├─────────────────────────────────────┤
    │     Services (query + mapping)      │  ← one query or mutation each
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic DTOs
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch the ORM; services never build HTTP responses.
"""

__version__ = "1.0.0"
