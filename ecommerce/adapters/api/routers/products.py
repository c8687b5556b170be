# ecommerce/adapters/api/routers/products.py
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status
import structlog

from ecommerce.core.use_cases.product_catalog import ProductCatalog
from ecommerce.core.domain.exceptions import (
    DuplicateProductError,
    ProductNotFoundError,
    ValidationError,
)
from ecommerce.adapters.api.dependencies import get_product_catalog
from ecommerce.adapters.api.schemas import ProductCreate, ProductResponse, ProductUpdate

logger = structlog.get_logger()

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("", response_model=List[ProductResponse], summary="List products")
async def list_products(catalog: ProductCatalog = Depends(get_product_catalog)):
    products = await catalog.get_all()
    return [ProductResponse.model_validate(p) for p in products]


@router.get("/{product_id}", response_model=ProductResponse, summary="Fetch a product")
async def get_product(
    product_id: UUID,
    catalog: ProductCatalog = Depends(get_product_catalog),
):
    try:
        product = await catalog.get_by_id(product_id)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ProductResponse.model_validate(product)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a product to the catalog",
)
async def create_product(
    payload: ProductCreate,
    response: Response,
    catalog: ProductCatalog = Depends(get_product_catalog),
):
    try:
        product = await catalog.add(**payload.model_dump())
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DuplicateProductError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    response.headers["Location"] = f"/api/products/{product.id}"
    return ProductResponse.model_validate(product)


@router.put("/{product_id}", response_model=ProductResponse, summary="Update a product")
async def update_product(
    product_id: UUID,
    payload: ProductUpdate,
    catalog: ProductCatalog = Depends(get_product_catalog),
):
    try:
        product = await catalog.update(product_id, **payload.model_dump(exclude_unset=True))
    except ProductNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DuplicateProductError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return ProductResponse.model_validate(product)


@router.delete(
    "/{name}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a product by name",
)
async def delete_product(
    name: str,
    catalog: ProductCatalog = Depends(get_product_catalog),
):
    try:
        await catalog.delete_by_name(name)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
