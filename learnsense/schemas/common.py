"""
Common schemas for API responses.
"""
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error response schema."""

    detail: str
