"""Common schemas used across multiple endpoints."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Response model for errors."""
    detail: str
    code: str


class HealthResponse(BaseModel):
    """Response model for the health endpoint."""
    status: str
    timestamp: datetime
    environment: str


class EndpointInfo(BaseModel):
    path: str
    method: str
    name: Optional[str] = None


class StatusResponse(BaseModel):
    """Response model for the status endpoint."""
    application_name: str
    version: str
    timestamp: datetime
    environment: str
    available_endpoints: List[EndpointInfo]
