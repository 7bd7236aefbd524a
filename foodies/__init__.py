"""
Foodies Backend — Application Package Initializer
==================================================

What: Marks the `foodies` directory as a Python package.
Why:  Enables module imports like `from foodies.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend is layered the same way for every feature:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Mutation / Retrieval)   │  ← Validation, slug, sanitize, cache
    ├─────────────────────────────────────┤
    │          Store (MealStore)          │  ← Parameterized queries, constraints
    ├─────────────────────────────────────┤
    │   Models & Schemas (Data)           │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy over SQLite
    └─────────────────────────────────────┘

    Routes never touch SQL; services never touch HTTP status codes.
"""

__version__ = "1.0.0"
