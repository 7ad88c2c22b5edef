"""
Word REST API: Health Check Routes
===================================

What:  Liveness and readiness probes.

    GET /health        200 "OK" (text/plain), never touches the database
    GET /health/ready  200 when SELECT 1 succeeds, 503 otherwise

Load balancers route on readiness; container restarts key off liveness.
"""

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from word_rest_api.exceptions import ServiceUnavailableError
from word_rest_api.schemas.common import ErrorResponse, ReadinessResponse


router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_class=PlainTextResponse,
    summary="Liveness probe",
    responses={200: {"content": {"text/plain": {"example": "OK"}}}},
)
async def health() -> str:
    return "OK"


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database unreachable", "model": ErrorResponse}},
    summary="Readiness probe (checks the database)",
)
async def readiness(request: Request) -> ReadinessResponse:
    if not await request.app.state.db.health_check():
        raise ServiceUnavailableError(
            message="Database is not reachable",
            context={"probe": "readiness"},
        )
    return ReadinessResponse(status="ready", database="connected")
