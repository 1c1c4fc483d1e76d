"""Progenitor reads."""

from sqlalchemy.ext.asyncio import AsyncSession

from dairycart.core.layouts import PROGENITOR_LAYOUT
from dairycart.core.records import Progenitor
from dairycart.services.base import retrieve_one


async def retrieve_progenitor(session: AsyncSession, progenitor_id: int) -> Progenitor:
    return await retrieve_one(session, PROGENITOR_LAYOUT, "id", progenitor_id)
