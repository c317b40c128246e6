"""
Travel API — Health & Diagnostics Routes
==========================================

What:  GET /health (liveness) and GET /api/test-db (datastore round trip).
Why:   Load balancers probe /health; operators hit /api/test-db to check the
       database without restarting the app.

Health Check Philosophy:
    /health reports process liveness only and never touches the datastore,
    so it answers "OK" even while MySQL is down. Datastore reachability is
    reported separately by /api/test-db.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from travel_api.database import Datastore, get_datastore
from travel_api.exceptions import driver_message
from travel_api.schemas.travel import DbTestResponse, HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service liveness check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="OK", message="Server is running")


@router.get(
    "/api/test-db",
    response_model=DbTestResponse,
    responses={500: {"description": "Datastore unreachable"}},
    summary="Datastore connectivity check",
    description="Runs SELECT 1 AS test through the pool and reports the outcome.",
)
async def test_db(
    request: Request,
    datastore: Datastore = Depends(get_datastore),
):
    """
    Round-trip a trivial query.

    Returns:
        200 {"connection": "Success", "test": {"test": 1}, "env": ...}
        500 {"error": ..., "connection": "Failed", "env": ...}
    """
    settings = request.app.state.settings
    try:
        row = await datastore.ping()
    except Exception as e:
        logger.warning("Datastore test failed: %s", e)
        message = driver_message(e) if settings.expose_errors else "Database connection failed"
        return JSONResponse(
            status_code=500,
            content={
                "error": message,
                "connection": "Failed",
                "env": settings.environment,
            },
        )

    return DbTestResponse(connection="Success", test=row, env=settings.environment)
