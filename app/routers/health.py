# =============================================================================
# app/routers/health.py - Health Check Endpoint
# =============================================================================
# Provides the health check used by monitoring and load balancers.
# Responds 200 when the database answers and 503 otherwise.
# =============================================================================

import logging
import time
from datetime import datetime, timezone

from fastapi import Request
from fastapi.responses import JSONResponse

from lib.repository import Repository
from swagger_docs import (
    ApiModel,
    ControllerBase,
    api_ok_response,
    api_operation,
    api_property,
    api_service_unavailable_response,
    api_tags,
    get_route,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Response Models
# =============================================================================

class DatabaseStatusDto(ApiModel):
    status: str = api_property(description="Connection status", example="connected")
    message: str = api_property(description="Details of the last check", example="connected")


class HealthResponseDto(ApiModel):
    """Health check response."""
    ok: bool = api_property(description="Service status", example=True)
    uptime: float = api_property(description="Uptime (seconds)", example=1234.56)
    timestamp: str = api_property(
        description="Timestamp",
        example="2023-01-01T00:00:00.000Z",
        format="date-time",
    )
    database: DatabaseStatusDto = api_property(description="Database status")


# =============================================================================
# Controller
# =============================================================================

@api_tags("Health")
class HealthController(ControllerBase):
    """Reports process uptime and database connectivity."""

    base_path = "/health"

    def __init__(self, repository: Repository, started_at: float | None = None):
        self.repository = repository
        self.started_at = started_at if started_at is not None else time.monotonic()
        super().__init__()

    @get_route("")
    @api_operation(
        summary="Health check",
        description="Check API service status and database connection",
    )
    @api_ok_response(description="Service healthy", model=HealthResponseDto)
    @api_service_unavailable_response(description="Service unhealthy", model=HealthResponseDto)
    async def health_check(self, request: Request) -> JSONResponse:
        try:
            ok, message = await self.repository.health_check()
            status = "connected" if ok else "disconnected"
        except Exception as e:
            logger.warning(f"Database check failed: {e}")
            ok, status, message = False, "error", "Database check failed"

        health = HealthResponseDto(
            ok=ok,
            uptime=round(time.monotonic() - self.started_at, 3),
            timestamp=datetime.now(timezone.utc).isoformat(),
            database=DatabaseStatusDto(status=status, message=message),
        )
        return JSONResponse(
            status_code=200 if ok else 503,
            content=health.model_dump(by_alias=True),
        )
