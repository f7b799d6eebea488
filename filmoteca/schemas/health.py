"""Health check response schema."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health."""

    success: bool = Field(default=True, description="True when the API process is serving")
    message: str = Field(..., description="Human-readable status")
    timestamp: datetime = Field(..., description="Server time (UTC)")
    database: Literal["connected", "disconnected"] = Field(
        ..., description="Database connectivity"
    )
