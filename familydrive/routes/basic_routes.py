"""Informational API routes."""

from fastapi import APIRouter, Request
from fastapi.routing import APIRoute

from familydrive import config
from familydrive.schemas.common import EndpointInfo, HealthResponse, StatusResponse
from familydrive.utils import utcnow

router = APIRouter(prefix=config.API_PREFIX, tags=["Basic"])


@router.get("/health", response_model=HealthResponse)
def health():
    """
    Health check endpoint.
    Returns 200 if service is alive.
    """
    return HealthResponse(status="Healthy", timestamp=utcnow(), environment=config.ENVIRONMENT)


@router.get("/status", response_model=StatusResponse)
def api_status(request: Request):
    """
    API status, version and the list of available endpoints.
    """
    endpoints = sorted(
        {
            (route.path, method, route.name)
            for route in request.app.routes
            if isinstance(route, APIRoute)
            for method in route.methods
        }
    )

    return StatusResponse(
        application_name=config.APPLICATION_NAME,
        version=config.APPLICATION_VERSION,
        timestamp=utcnow(),
        environment=config.ENVIRONMENT,
        available_endpoints=[
            EndpointInfo(path=path, method=method, name=name)
            for path, method, name in endpoints
        ],
    )
