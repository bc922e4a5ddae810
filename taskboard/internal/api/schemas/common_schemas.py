"""
Common API schemas shared across different endpoints.
"""

from pydantic import BaseModel, ConfigDict


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    time: str
    database: str

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "status": "ok",
                    "time": "2025-10-30T10:30:00+00:00",
                    "database": "connected",
                }
            ]
        }
    )
