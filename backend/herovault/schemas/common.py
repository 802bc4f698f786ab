"""
HeroVault Backend - Shared Pydantic Schemas
============================================

What:  Building blocks shared by every entity's API contract, plus the
       error and health response models.
How:   JSON keys are camelCase (characterName, createdAt) through an alias
       generator; Python attributes stay snake_case and match the ORM
       column names one to one.
"""

from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


def _require_text(value: str) -> str:
    if not value.strip():
        raise PydanticCustomError("empty", "Field must not be empty")
    return value


# A string that has at least one non-whitespace character
NonEmptyStr = Annotated[str, AfterValidator(_require_text)]


def _reject_null(value: Any) -> Any:
    if value is None:
        raise PydanticCustomError("empty", "Field must not be null")
    return value


# Required field inside a partial update: may be omitted, never blank or null
PatchStr = Annotated[Optional[NonEmptyStr], AfterValidator(_reject_null)]


class CamelModel(BaseModel):
    """Base for every request/response schema: camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecordResponse(CamelModel):
    """Fields every serialized record carries."""

    id: str = Field(description="Store-assigned record identifier")
    created_at: datetime = Field(description="When the record was created (UTC ISO 8601)")
    updated_at: datetime = Field(description="When the record was last modified (UTC ISO 8601)")


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error body for every non-2xx response.

    Example:
        {
            "error": "not_found",
            "message": "Character with id 5f0c... not found",
            "details": null,
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
