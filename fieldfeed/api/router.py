from fastapi import APIRouter

from fieldfeed.domains.orders.api import router as orders_router

api_router = APIRouter()

# API routes (all have /api/v1 prefix from the app factory)
api_router.include_router(orders_router)
