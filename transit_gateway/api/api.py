from fastapi import APIRouter

from transit_gateway.api.endpoints import health, routing

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(routing.router, tags=["routing"])
