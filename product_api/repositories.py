from __future__ import annotations

from sqlalchemy import exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from product_api.core.errors import ApiError
from product_api.core.logging import get_logger
from product_api.models import Product

logger = get_logger(__name__)


class ProductRepository:
    """
    Persistence operations for products, one session per instance.

    Every write commits immediately; there is no unit of work spanning
    several calls.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def list(self) -> list[Product]:
        return list(self.db.execute(select(Product).order_by(Product.id)).scalars().all())

    def get(self, product_id: int) -> Product | None:
        return self.db.get(Product, product_id)

    def save(self, product: Product) -> Product:
        """Insert or update ``product`` and return it as stored."""
        self.db.add(product)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Product rejected by storage constraint: %s", e.orig)
            raise ApiError.validation("Product violates a storage constraint") from e
        self.db.refresh(product)
        return product

    def delete_by_id(self, product_id: int) -> None:
        product = self.get(product_id)
        if product is not None:
            self.db.delete(product)
            self.db.commit()

    def exists_by_id(self, product_id: int) -> bool:
        return bool(self.db.execute(select(exists().where(Product.id == product_id))).scalar())

    def search_by_name_substring(self, text: str) -> list[Product]:
        # autoescape: '%' and '_' in the search term match literally
        stmt = (
            select(Product)
            .where(Product.name.icontains(text, autoescape=True))
            .order_by(Product.id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def count(self) -> int:
        return self.db.execute(select(func.count()).select_from(Product)).scalar_one()
