"""
API schemas for request/response validation.
"""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict


class HealthResponse(BaseModel):
    """Response for health check."""

    status: str
    timestamp: datetime
    services: Dict[str, bool]
    version: str


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    detail: Optional[str] = None
    status_code: int

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "No reviews provided.",
                "detail": "EmptyBatch",
                "status_code": 400,
            }
        }
    )
