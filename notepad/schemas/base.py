"""
Base Schemas.

Response envelope spoken by the remote notes backend:

    {"success": true, "data": ..., "error": null}
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

DataT = TypeVar("DataT")


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str
    message: str
    details: dict[str, Any] | None = None


class ApiResponse(BaseModel, Generic[DataT]):
    """
    Standard API response envelope.

    Unknown keys (metadata, pagination) are ignored.
    """

    success: bool = True
    data: DataT | None = None
    error: ErrorDetail | None = None

    model_config = ConfigDict(extra="ignore")
