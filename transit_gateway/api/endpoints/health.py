from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse

from transit_gateway.core.config import settings
from transit_gateway.schemas.health import HealthCheckResponse
from transit_gateway.services.router_client import router_client

router = APIRouter()


@router.get("/healthy", response_class=PlainTextResponse)
async def healthy() -> str:
    """
    Liveness check. Answers OK whenever the process is up, without
    contacting the routing engine.
    """
    return "OK"


@router.get("/health/router")
async def router_health() -> HealthCheckResponse:
    """
    Diagnostic check of the routing engine.

    Returns 200 if the engine responds, 503 otherwise.
    """
    router_health_status = await router_client.health_check()

    response = HealthCheckResponse(
        service="transit-gateway",
        version=settings.VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        healthy=router_health_status.healthy,
        router=router_health_status,
    )

    if response.healthy:
        return response
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=response.model_dump()
    )
