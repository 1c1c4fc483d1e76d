"""Progenitor endpoints."""

from fastapi import APIRouter

from dairycart.api.deps import DbSession, deadline
from dairycart.schemas.product import ProgenitorResponse
from dairycart.services import progenitors as progenitors_service

router = APIRouter()


@router.get("/product_progenitors/{progenitor_id}", response_model=ProgenitorResponse)
async def get_progenitor(progenitor_id: int, db: DbSession) -> ProgenitorResponse:
    async with deadline():
        progenitor = await progenitors_service.retrieve_progenitor(db, progenitor_id)
    return ProgenitorResponse.model_validate(progenitor)
