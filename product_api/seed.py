"""Sample catalogue loaded at startup when SEED_SAMPLE_DATA is enabled."""

from decimal import Decimal

from product_api.core.logging import get_logger
from product_api.models import Product
from product_api.repositories import ProductRepository

logger = get_logger(__name__)

SAMPLE_PRODUCTS = [
    ("Laptop", Decimal("999.99"), "High performance laptop"),
    ("Mouse", Decimal("29.99"), "Wireless mouse"),
    ("Keyboard", Decimal("79.99"), "Mechanical keyboard"),
    ("Monitor", Decimal("299.99"), "27 inch 4K monitor"),
    ("Headphones", Decimal("149.99"), "Noise cancelling headphones"),
]


def seed_sample_products(repo: ProductRepository) -> int:
    """Insert the sample products into an empty table. Returns the row count."""
    if repo.count() > 0:
        logger.info("Products table not empty, skipping sample data")
        return repo.count()

    for name, price, description in SAMPLE_PRODUCTS:
        repo.save(Product(name=name, price=price, description=description))

    total = repo.count()
    logger.info("Sample data initialized: %s products", total)
    return total
