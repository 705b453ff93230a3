"""Common Pydantic schemas."""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    service: str = "shortcode-report-engine"
    version: str = "1.0.0"
