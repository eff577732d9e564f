"""
Voxboard Backend - Application Package Initializer
===================================================

What: Marks the `voxboard` directory as a Python package.
Who:  Imported by uvicorn (`voxboard.main:app`), Alembic, and pytest.

Architecture Note:
    The backend follows the same layered split everywhere:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  <- HTTP concerns, envelope, status codes
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  <- validation, orchestration
    ├─────────────────────────────────────┤
    │   Adapters (Speech, Blob, Gemini)   │  <- one external call each
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  <- SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  <- Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Services and adapters are built once in `create_app()` and reach the
    routes through FastAPI dependencies, so every layer can be replaced by a
    fake in tests.
"""

__version__ = "1.0.0"
