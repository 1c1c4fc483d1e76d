"""Product attribute and attribute value endpoints."""

from fastapi import APIRouter, status

from dairycart.api.deps import DbSession, PipelineDep, QueryFilterDep, deadline
from dairycart.schemas.attribute import (
    AttributeCreationInput,
    AttributeResponse,
    AttributeValueCreationInput,
    AttributeValueResponse,
    AttributeValueUpdateInput,
)
from dairycart.schemas.common import ListResponse
from dairycart.services import attributes as attributes_service

router = APIRouter()


@router.get("/product_attributes/{progenitor_id}", response_model=ListResponse[AttributeResponse])
async def list_attributes(
    progenitor_id: int,
    db: DbSession,
    query_filter: QueryFilterDep,
) -> ListResponse[AttributeResponse]:
    async with deadline():
        total, attributes = await attributes_service.list_attributes(db, progenitor_id, query_filter)
    return ListResponse[AttributeResponse](
        page=query_filter.page,
        limit=query_filter.limit,
        count=total,
        data=[AttributeResponse.from_record(a) for a in attributes],
    )


@router.post(
    "/product_attributes/{progenitor_id}",
    response_model=AttributeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_attribute(
    progenitor_id: int,
    data: AttributeCreationInput,
    db: DbSession,
    pipeline: PipelineDep,
) -> AttributeResponse:
    """Create an attribute and all of its values in one transaction."""
    async with deadline():
        created = await attributes_service.create_attributes(db, pipeline, progenitor_id, [data])
    return AttributeResponse.from_record(created[0])


@router.post(
    "/product_attributes/{attribute_id}/value",
    response_model=AttributeValueResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_attribute_value(
    attribute_id: int,
    data: AttributeValueCreationInput,
    db: DbSession,
) -> AttributeValueResponse:
    async with deadline():
        value = await attributes_service.create_attribute_value(db, attribute_id, data)
    return AttributeValueResponse.from_record(value)


@router.put("/product_attribute_values/{value_id}", response_model=AttributeValueResponse)
async def update_attribute_value(
    value_id: int,
    update: AttributeValueUpdateInput,
    db: DbSession,
) -> AttributeValueResponse:
    async with deadline():
        value = await attributes_service.update_attribute_value(db, value_id, update)
    return AttributeValueResponse.from_record(value)


@router.delete("/product_attribute_values/{value_id}")
async def delete_attribute_value(value_id: int, db: DbSession) -> dict:
    async with deadline():
        await attributes_service.archive_attribute_value(db, value_id)
    return {"success": True, "id": value_id}
