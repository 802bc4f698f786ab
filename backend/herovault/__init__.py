"""
HeroVault Backend - Application Package
=======================================

What: Record store facade for character, superhero and image records.
Who:  Imported by uvicorn (`uvicorn herovault.main:app`), pytest and any
      tooling that needs the settings or the ORM models.

Layout:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Validation + Store)   │  ← one store call per operation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy engine
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
