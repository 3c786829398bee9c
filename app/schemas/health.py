from pydantic import BaseModel, Field


class CircuitBreakerStatus(BaseModel):
    """Circuit breaker status model."""

    name: str
    state: str
    failure_count: int
    failure_threshold: int
    time_until_reset: float


class ServicesStatus(BaseModel):
    """Services status model for health check."""

    ai_client: str = Field(description="AI client initialization status")
    store: str = Field(description="Document store backend and reachability")
    ai_circuit_breaker: CircuitBreakerStatus
    store_circuit_breaker: CircuitBreakerStatus


class HealthCheckResponse(BaseModel):
    """Health check response model."""

    version: str = Field(description="API version")
    status: str = Field(description="Overall health status")
    timestamp: str = Field(description="Current timestamp")
    services: ServicesStatus = Field(description="Status of dependent services")
