"""
Base Schemas.

Standard result envelope returned by services. Callers inspect
``success`` instead of catching storage exceptions.
"""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from noteku.core.exceptions import ApplicationError
from noteku.core.utils import utc_now

DataT = TypeVar("DataT")


class ResultMetadata(BaseModel):
    """Metadata included in every result."""

    timestamp: datetime = Field(default_factory=utc_now)


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str
    message: str
    details: dict[str, Any] | None = None

    @classmethod
    def from_exception(cls, exc: ApplicationError) -> "ErrorDetail":
        return cls(
            code=exc.code,
            message=exc.message,
            details=getattr(exc, "details", None) or None,
        )


class Result(BaseModel, Generic[DataT]):
    """
    Service result envelope.

    On failure ``data`` carries the degraded value (an empty list for
    reads) so display code can render without special-casing errors.
    """

    success: bool = True
    data: DataT | None = None
    error: ErrorDetail | None = None
    metadata: ResultMetadata = Field(default_factory=ResultMetadata)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @classmethod
    def ok(cls, data: Any = None) -> "Result":
        return cls(success=True, data=data)

    @classmethod
    def failed(cls, exc: ApplicationError, data: Any = None) -> "Result":
        return cls(success=False, data=data, error=ErrorDetail.from_exception(exc))
