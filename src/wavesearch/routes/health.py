"""Health check endpoints for liveness and readiness probes."""
import asyncio
from typing import Literal

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from wavesearch.lifecycle import SearchRuntime

router = APIRouter(prefix="/health", tags=["health"])


class LivenessResponse(BaseModel):
    """Response model for liveness probe."""

    status: Literal["alive"]


class ReadinessCheck(BaseModel):
    """Individual dependency check result.

    Attributes:
        name: Identifier for the dependency being checked.
        status: Result of the check ('ok' or 'failed').
        message: Error details when status is 'failed'.
    """

    name: str
    status: Literal["ok", "failed"]
    message: str | None = None


class ReadinessResponse(BaseModel):
    """Response model for readiness probe."""

    status: Literal["ready", "not_ready"]
    checks: list[ReadinessCheck]


@router.get("/live", response_model=LivenessResponse)
async def liveness() -> LivenessResponse:
    """Liveness probe: succeeds while the process is running."""
    return LivenessResponse(status="alive")


@router.get("/ready", response_model=ReadinessResponse)
async def readiness(request: Request) -> JSONResponse:
    """Readiness probe.

    Checks that the index worker is running and that Solr answers its
    ping handler. Returns 200 if all checks pass, 503 otherwise.
    """
    runtime: SearchRuntime = request.app.state.runtime

    checks = [
        ReadinessCheck(name="index_scheduler", status="ok")
        if runtime.scheduler.is_running
        else ReadinessCheck(
            name="index_scheduler", status="failed", message="Worker not running"
        ),
    ]
    if await asyncio.to_thread(runtime.client.ping):
        checks.append(ReadinessCheck(name="solr", status="ok"))
    else:
        checks.append(
            ReadinessCheck(name="solr", status="failed", message="Ping failed")
        )

    all_ok = all(c.status == "ok" for c in checks)
    response = ReadinessResponse(
        status="ready" if all_ok else "not_ready",
        checks=checks,
    )
    code = status.HTTP_200_OK if all_ok else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(content=response.model_dump(), status_code=code)
