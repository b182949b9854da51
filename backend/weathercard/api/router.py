"""Top-level API router aggregation."""

from fastapi import APIRouter

from . import card

api_router = APIRouter(prefix="/api")

api_router.include_router(card.router)
