"""
Base Schemas.

Shared schema building blocks and the standard error envelope.

Resource bodies are plain camelCase JSON objects. Timestamps are
serialized as ISO-8601 UTC strings with millisecond precision and a
trailing "Z".
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from planner.backend.core.utils import isoformat_utc, to_api_instant, utc_now

ApiDateTime = Annotated[
    datetime,
    AfterValidator(to_api_instant),
    PlainSerializer(isoformat_utc, return_type=str, when_used="json"),
]


class CamelModel(BaseModel):
    """Base for resource schemas: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ResponseMetadata(BaseModel):
    """Metadata included in error responses."""

    timestamp: datetime = Field(default_factory=utc_now)
    request_id: str | None = None


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str
    message: str
    details: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    success: bool = False
    data: None = None
    error: ErrorDetail
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)
