"""Discount endpoints."""

from fastapi import APIRouter, status

from dairycart.api.deps import DbSession, QueryFilterDep, deadline
from dairycart.schemas.common import ListResponse
from dairycart.schemas.discount import DiscountCreationInput, DiscountResponse, DiscountUpdateInput
from dairycart.services import discounts as discounts_service

router = APIRouter()


@router.get("/discounts", response_model=ListResponse[DiscountResponse])
async def list_discounts(db: DbSession, query_filter: QueryFilterDep) -> ListResponse[DiscountResponse]:
    async with deadline():
        total, discounts = await discounts_service.list_discounts(db, query_filter)
    return ListResponse[DiscountResponse](
        page=query_filter.page,
        limit=query_filter.limit,
        count=total,
        data=[DiscountResponse.from_record(d) for d in discounts],
    )


@router.get("/discount/{discount_id}", response_model=DiscountResponse)
async def get_discount(discount_id: int, db: DbSession) -> DiscountResponse:
    async with deadline():
        discount = await discounts_service.retrieve_discount(db, discount_id)
    return DiscountResponse.from_record(discount)


@router.post("/discount", response_model=DiscountResponse, status_code=status.HTTP_201_CREATED)
async def create_discount(data: DiscountCreationInput, db: DbSession) -> DiscountResponse:
    async with deadline():
        discount = await discounts_service.create_discount(db, data)
    return DiscountResponse.from_record(discount)


@router.put("/discount/{discount_id}", response_model=DiscountResponse)
async def update_discount(
    discount_id: int,
    update: DiscountUpdateInput,
    db: DbSession,
) -> DiscountResponse:
    async with deadline():
        discount = await discounts_service.update_discount(db, discount_id, update)
    return DiscountResponse.from_record(discount)


@router.delete("/discount/{discount_id}")
async def delete_discount(discount_id: int, db: DbSession) -> dict:
    async with deadline():
        await discounts_service.archive_discount(db, discount_id)
    return {"success": True, "id": discount_id}
