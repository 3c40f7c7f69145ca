from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status

from product_api.core.deps import get_product_repository
from product_api.core.errors import ApiError
from product_api.models import Product
from product_api.repositories import ProductRepository
from product_api.schemas import ProductIn, ProductRead

router = APIRouter(prefix="/api/products", tags=["products"])

# Ids outside the INTEGER column range are rejected before reaching the driver.
ProductId = Annotated[int, Path(ge=-2_147_483_648, le=2_147_483_647)]


def _get_or_404(repo: ProductRepository, product_id: int) -> Product:
    product = repo.get(product_id)
    if product is None:
        raise ApiError.not_found("Product", product_id)
    return product


@router.get("", response_model=list[ProductRead])
def http_list_products(repo: ProductRepository = Depends(get_product_repository)):
    return repo.list()


# Declared before /{product_id} so "search" is not parsed as an id.
@router.get("/search", response_model=list[ProductRead])
def http_search_products(
    name: Optional[str] = Query(default=None),
    repo: ProductRepository = Depends(get_product_repository),
):
    if name is None or not name.strip():
        raise ApiError.bad_request("Search parameter 'name' must not be empty")
    return repo.search_by_name_substring(name)


@router.get("/{product_id}", response_model=ProductRead)
def http_get_product(product_id: ProductId, repo: ProductRepository = Depends(get_product_repository)):
    return _get_or_404(repo, product_id)


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def http_create_product(payload: ProductIn, repo: ProductRepository = Depends(get_product_repository)):
    if payload.id is not None:
        raise ApiError.bad_request("Product ID must not be provided when creating a new product")

    product = Product(name=payload.name, price=payload.price, description=payload.description)
    return repo.save(product)


@router.put("/{product_id}", response_model=ProductRead)
def http_update_product(
    product_id: ProductId,
    payload: ProductIn,
    repo: ProductRepository = Depends(get_product_repository),
):
    product = _get_or_404(repo, product_id)

    # payload.id is ignored: identity comes from the path
    product.name = payload.name
    product.price = payload.price
    product.description = payload.description
    return repo.save(product)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def http_delete_product(product_id: ProductId, repo: ProductRepository = Depends(get_product_repository)):
    if not repo.exists_by_id(product_id):
        raise ApiError.not_found("Product", product_id)

    repo.delete_by_id(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
