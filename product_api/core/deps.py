from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from product_api.core.db import get_sessionmaker
from product_api.repositories import ProductRepository


def get_db() -> Generator[Session, None, None]:
    """
    Dependency/fixture-friendly: yields a session and always closes it.
    """
    SessionLocal = get_sessionmaker()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_product_repository(db: Session = Depends(get_db)) -> ProductRepository:
    return ProductRepository(db)
