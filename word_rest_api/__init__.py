"""
Word REST API: Application Package
===================================

What: CRUD REST service for users, posts and vocabulary entries.
Who:  Imported by uvicorn (`word_rest_api.main:app`), Alembic and pytest.

Architecture Note:
    The backend follows a layered layout:

    ┌─────────────────────────────────────┐
    │        Routes (HTTP handlers)       │  ← status codes, headers, paths
    ├─────────────────────────────────────┤
    │   Schemas + validation (pydantic)   │  ← payload shape and normalization
    ├─────────────────────────────────────┤
    │   Repositories (parameterized SQL)  │  ← constraint → domain error mapping
    ├─────────────────────────────────────┤
    │  Models + session manager (SQLA)    │  ← tables, pool, schema creation
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
