"""
Error response schemas for API documentation.
Describes the body rendered by ErrorHandlerService for every handled failure.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Any, Dict


class ErrorDetail(BaseModel):
    """Schema for individual error detail."""

    field: Optional[str] = Field(None, description="Field name that caused the error")
    message: str = Field(..., description="Human-readable error message")
    type: Optional[str] = Field(None, description="Error type identifier")


class ErrorBody(BaseModel):
    """Structured error information."""

    code: str = Field(..., description="Error code identifier")
    message: str = Field(..., description="Human-readable error message")
    timestamp: str = Field(..., description="When the error occurred (ISO 8601)")
    request_id: Optional[str] = Field(None, description="Short id for log correlation")
    details: Optional[List[ErrorDetail]] = Field(None, description="Field level details")


class APIErrorResponse(BaseModel):
    """Top level error envelope."""

    success: bool = Field(False, description="Always false for errors")
    message: str = Field(..., description="Human-readable error message")
    error: ErrorBody


def _example(code: str, message: str) -> Dict[str, Any]:
    return {
        "success": False,
        "message": message,
        "error": {
            "code": code,
            "message": message,
            "timestamp": "2024-01-01T00:00:00Z",
            "request_id": "abc12345"
        }
    }


_ERROR_SPECS = {
    400: ("Bad Request - Invalid input", "VALIDATION_ERROR", "Numeric fields must be valid numbers"),
    401: ("Unauthorized - Authentication required", "UNAUTHORIZED", "Authentication required"),
    403: ("Forbidden - Not the owner", "FORBIDDEN", "Unauthorized: You do not own this property"),
    404: ("Not Found - Resource does not exist", "NOT_FOUND", "Property not found"),
    409: ("Conflict - Resource already exists", "CONFLICT", "User with identifier 'a@b.com' already exists"),
    500: ("Internal Server Error", "INTERNAL_SERVER_ERROR", "An unexpected error occurred. Please try again later."),
}

COMMON_ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    status_code: {
        "description": description,
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example(code, message)}},
    }
    for status_code, (description, code, message) in _ERROR_SPECS.items()
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Get error response schemas for specific status codes.

    Args:
        status_codes: HTTP status codes to include

    Returns:
        Dictionary of error response schemas
    """
    return {
        code: COMMON_ERROR_RESPONSES[code]
        for code in status_codes
        if code in COMMON_ERROR_RESPONSES
    }


def get_crud_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get error response schemas for CRUD operations."""
    return get_error_responses(400, 401, 403, 404, 500)
