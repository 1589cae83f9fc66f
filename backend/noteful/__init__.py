"""
Noteful Backend — Application Package Initializer
=================================================

What: Marks the `noteful` directory as a Python package.
Who:  Imported by uvicorn (noteful.main:app), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Orchestration)        │  ← note_service, catalog_service
    ├─────────────────────────────────────┤
    │  Query Layer  →  Hydration Engine   │  ← joined rows → nested notes
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
