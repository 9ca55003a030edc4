"""
Gif Catalog Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the JSON contract between client and API.
Why:   FastAPI uses them to parse request bodies, serialize responses and
       generate the OpenAPI document. The client components parse responses
       into the same models.

Design Decision:
    `GifCreate` deliberately accepts missing or null `name`/`url`. The
    presence and uniqueness rules live in GifStore so every caller gets the
    same Rails-style error list, whether it came through HTTP or not.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field, model_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class GifCreate(BaseModel):
    """
    Attributes a client may set on a new gif.

    Only these keys are permitted; anything else under `gif` is dropped.
    `likes` left out (or null) means "use the store default".
    """
    name: Optional[str] = Field(default=None, description="Unique display name")
    url: Optional[str] = Field(default=None, description="Media URL")
    likes: Optional[int] = Field(default=None, description="Initial like count (default 0)")

    model_config = {"extra": "ignore"}


class GifCreateRequest(BaseModel):
    """
    Body of POST /api/v1/gifs: `{"gif": {"name": ..., "url": ..., "likes": ...}}`.

    A flat body (`{"name": ..., "url": ...}`) is wrapped under `gif` before
    validation, so both shapes are accepted.
    """
    gif: GifCreate

    @model_validator(mode="before")
    @classmethod
    def wrap_flat_body(cls, data: Any) -> Any:
        if isinstance(data, dict) and "gif" not in data:
            return {"gif": data}
        return data


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class GifResponse(BaseModel):
    """
    A stored gif as returned by every endpoint.

    Used for single objects (create, show) and as list items (index).
    """
    id: int = Field(description="Server-assigned identifier")
    name: str = Field(description="Unique display name")
    url: str = Field(description="Media URL")
    likes: int = Field(description="Like count")

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    """
    Standardized error body for all handled API errors.

    `errors` is only present for validation failures.
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    errors: Optional[List[str]] = Field(default=None, description="Full validation messages")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response: service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
