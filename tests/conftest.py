import os

# Defaults de entorno para que el suite sea estable (antes de importar la app)
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from decimal import Decimal  # noqa: E402
from typing import Callable, Generator, Optional  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import Engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from product_api import models  # noqa: E402,F401
from product_api.core.db import Base, build_engine  # noqa: E402
from product_api.core.deps import get_db  # noqa: E402
from product_api.main import app  # noqa: E402
from product_api.repositories import ProductRepository  # noqa: E402


@pytest.fixture(scope="session")
def engine() -> Engine:
    """In-memory SQLite shared by every session of the test run."""
    return build_engine("sqlite://")


@pytest.fixture
def session_factory(engine: Engine) -> Generator[sessionmaker[Session], None, None]:
    # Esquema limpio por test
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    with session_factory() as db:
        yield db


@pytest.fixture
def repo(db_session: Session) -> ProductRepository:
    return ProductRepository(db_session)


@pytest.fixture
def client(session_factory: sessionmaker[Session]) -> Generator[TestClient, None, None]:
    def _override_get_db() -> Generator[Session, None, None]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def create_product(session_factory: sessionmaker[Session]) -> Callable[..., int]:
    """Insert a product directly through the repository and return its id."""

    def _create(name: str, price: str = "9.99", description: Optional[str] = None) -> int:
        with session_factory() as db:
            product = ProductRepository(db).save(
                models.Product(name=name, price=Decimal(price), description=description)
            )
            return product.id

    return _create
