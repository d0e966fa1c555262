"""
Location lineage service.

This package contains:
- Configuration management (Pydantic settings)
- Database models and session handling (SQLAlchemy async)
- Location store, ancestor resolver and query facade
- REST API (FastAPI)
"""

__version__ = "0.1.0"
