# Smoke tests contra una instancia levantada (docker / uvicorn).
# Se omiten salvo que PRODUCT_API_BASE_URL esté definido.
import os

import pytest
import requests


@pytest.fixture(scope="module")
def base_url() -> str:
    url = os.getenv("PRODUCT_API_BASE_URL", "").strip()
    if not url:
        pytest.skip("PRODUCT_API_BASE_URL no definido; smoke tests HTTP omitidos.")
    return url.rstrip("/")


def test_health_ok(base_url: str):
    r = requests.get(f"{base_url}/health", timeout=10)
    assert r.status_code == 200, r.text


def test_product_lifecycle(base_url: str):
    r = requests.post(
        f"{base_url}/api/products",
        json={"name": "Smoke Test Product", "price": 1.5},
        timeout=10,
    )
    assert r.status_code == 201, r.text
    product_id = r.json()["id"]

    r = requests.get(f"{base_url}/api/products/search", params={"name": "smoke test"}, timeout=10)
    assert product_id in [p["id"] for p in r.json()]

    r = requests.delete(f"{base_url}/api/products/{product_id}", timeout=10)
    assert r.status_code == 204, r.text

    r = requests.get(f"{base_url}/api/products/{product_id}", timeout=10)
    assert r.status_code == 404, r.text
    assert r.json()["detail"] == f"Product not found with id: {product_id}"
