"""Product endpoints.

Products are addressed by SKU. Reads return the product flattened with its
progenitor; deletes are soft-archives.
"""

from fastapi import APIRouter, Response, status

from dairycart.api.deps import DbSession, PipelineDep, QueryFilterDep, SkuValidatorDep, deadline
from dairycart.infra.logging import get_logger
from dairycart.schemas.common import ListResponse
from dairycart.schemas.product import (
    CreatedProductResponse,
    ProductCreationInput,
    ProductResponse,
    ProductUpdateInput,
)
from dairycart.services import products as products_service

router = APIRouter()
logger = get_logger(__name__)


@router.head("/product/{sku}", summary="Check whether a product exists")
async def product_exists(sku: str, db: DbSession) -> Response:
    async with deadline():
        exists = await products_service.product_exists(db, sku)
    return Response(status_code=status.HTTP_200_OK if exists else status.HTTP_404_NOT_FOUND)


@router.get("/product/{sku}", response_model=ProductResponse)
async def get_product(sku: str, db: DbSession) -> ProductResponse:
    async with deadline():
        product = await products_service.retrieve_product(db, sku)
    return ProductResponse.from_record(product)


@router.get("/products", response_model=ListResponse[ProductResponse])
async def list_products(db: DbSession, query_filter: QueryFilterDep) -> ListResponse[ProductResponse]:
    """List unarchived products, one page at a time.

    Accepts ``page``, ``limit`` and the Unix-second bounds ``created_after``,
    ``created_before``, ``updated_after`` and ``updated_before``.
    """
    async with deadline():
        total, products = await products_service.list_products(db, query_filter)
    return ListResponse[ProductResponse](
        page=query_filter.page,
        limit=query_filter.limit,
        count=total,
        data=[ProductResponse.from_record(p) for p in products],
    )


@router.post(
    "/product",
    response_model=CreatedProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product with its progenitor, attributes and values",
)
async def create_product(
    data: ProductCreationInput,
    db: DbSession,
    pipeline: PipelineDep,
    sku_validator: SkuValidatorDep,
) -> CreatedProductResponse:
    """Create a product.

    The SKU is validated and checked for uniqueness first; everything else
    is written in a single transaction.
    """
    logger.info(
        "Product creation requested",
        sku=data.sku,
        attributes=len(data.attributes_and_values),
    )
    async with deadline():
        await products_service.validate_new_product(db, data, sku_validator)
        created = await pipeline.create_product(data)
    return CreatedProductResponse.from_created(created)


@router.put("/product/{sku}", response_model=ProductResponse)
async def update_product(
    sku: str,
    update: ProductUpdateInput,
    db: DbSession,
    sku_validator: SkuValidatorDep,
) -> ProductResponse:
    async with deadline():
        product = await products_service.update_product(db, sku, update, sku_validator)
    return ProductResponse.from_record(product)


@router.delete("/product/{sku}")
async def delete_product(sku: str, db: DbSession) -> dict:
    async with deadline():
        await products_service.archive_product(db, sku)
    return {"success": True, "sku": sku}
