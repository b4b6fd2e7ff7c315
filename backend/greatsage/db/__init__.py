"""Database package."""

from greatsage.db.base import Base, BaseModel
from greatsage.db.patch import build_update
from greatsage.db.session import DBSession, get_db_session

__all__ = ["Base", "BaseModel", "DBSession", "build_update", "get_db_session"]
