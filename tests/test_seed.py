from decimal import Decimal

from product_api.models import Product
from product_api.repositories import ProductRepository
from product_api.seed import SAMPLE_PRODUCTS, seed_sample_products


def test_seed_populates_empty_table(repo: ProductRepository):
    assert seed_sample_products(repo) == len(SAMPLE_PRODUCTS)
    names = [p.name for p in repo.list()]
    assert names == ["Laptop", "Mouse", "Keyboard", "Monitor", "Headphones"]


def test_seed_skips_non_empty_table(repo: ProductRepository):
    repo.save(Product(name="Existing", price=Decimal("1.00")))

    assert seed_sample_products(repo) == 1
    assert [p.name for p in repo.list()] == ["Existing"]
