from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.storage.base import Storage
from app.storage.database import DatabaseStorage


def get_storage(db: Session = Depends(get_db)) -> Generator[Storage, None, None]:
    """Request-scoped storage over the request's database session."""
    yield DatabaseStorage(db)


__all__ = ["Storage", "DatabaseStorage", "get_storage"]
