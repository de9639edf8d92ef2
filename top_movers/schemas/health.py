from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ProviderHealth(BaseModel):
    last_success: Optional[datetime] = None
    last_failure: Optional[datetime] = None
    last_error: Optional[str] = None


class ApiLatencyMetrics(BaseModel):
    request_count: int
    average: float
    max: float
    last: float


class HealthResponse(BaseModel):
    """Response model for the health check endpoint."""

    status: str
    service: str
    version: str
    credentials_configured: bool
    uptime_seconds: float
    providers: dict[str, ProviderHealth]
    api_latency_ms: ApiLatencyMetrics
    timestamp: datetime
