"""
Platform database layer.

SQLModel entities, async repositories and engine helpers. The global engine
and ``get_session`` dependency live in ``cdi_platform.core.database.session``
so importing entities never opens a connection pool.
"""

from .base import Base, new_id, utc_now
from .utils import create_all, create_engine, create_sessionmaker, normalize_database_url

__all__ = [
    "Base",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "new_id",
    "normalize_database_url",
    "utc_now",
]
