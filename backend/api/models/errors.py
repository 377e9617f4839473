"""
Body returned for every ListkeeperError.
"""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Stable error code plus a human-readable message."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "VERIFICATION_RATE_LIMITED",
                "detail": "Too many verification requests. Please try again later.",
                "details": {"limit": 3, "window_seconds": 60},
            }
        }
    )

    error: str = Field(..., description="Machine-readable error code")
    detail: Optional[str] = Field(None, description="Message safe to show to the subscriber")
    details: Optional[dict[str, Any]] = None
