"""Schemas de response."""
from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response del health check."""

    status: str = Field(..., examples=["healthy"])
    service: str = Field(..., examples=["FUTUISP Facturación"])
    version: str = Field(..., examples=["0.1.0"])
    database: str = Field(..., examples=["connected"])
    redis: str = Field(..., examples=["connected"])
