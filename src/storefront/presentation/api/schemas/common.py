"""Common schemas shared across API endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    message: str = Field(..., description="Error message")
    code: str = Field(..., description="Error code for programmatic handling")
    details: str | None = Field(None, description="Underlying failure, if any")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"message": "Product not found", "code": "PRODUCT_NOT_FOUND"},
        },
    )


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
