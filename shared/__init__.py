"""Shared modules for the bolt generator and its kernel adapters."""

from .exceptions import (
    BoltGeneratorError,
    ValidationError,
    GeometryError,
    ResourceError,
    ErrorContext,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "BoltGeneratorError",
    "ValidationError",
    "GeometryError",
    "ResourceError",
    "ErrorContext",
    "ErrorDetail",
    "ErrorResponse",
]
