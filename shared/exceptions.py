"""Custom exception hierarchy for the bolt generator.

All errors are designed to be actionable - they say what was rejected and
how to change the inputs so the next build succeeds.
"""

from typing import Optional, List, Dict, Any
from dataclasses import dataclass


@dataclass
class ErrorContext:
    """Structured context for errors."""
    requested_id: Optional[str] = None
    valid_range: Optional[Dict[str, Optional[float]]] = None
    current_value: Optional[Any] = None
    affected_entities: Optional[List[str]] = None
    additional_info: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, excluding None values."""
        result: Dict[str, Any] = {}
        if self.requested_id is not None:
            result["requested_id"] = self.requested_id
        if self.valid_range is not None:
            result["valid_range"] = self.valid_range
        if self.current_value is not None:
            result["current_value"] = self.current_value
        if self.affected_entities is not None:
            result["affected_entities"] = self.affected_entities
        if self.additional_info is not None:
            result.update(self.additional_info)
        return result


@dataclass
class ErrorDetail:
    """Detailed error information."""
    type: str
    message: str
    suggestion: str
    context: Optional[ErrorContext] = None
    correlation_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result = {
            "type": self.type,
            "message": self.message,
            "suggestion": self.suggestion,
        }
        if self.context:
            ctx = self.context.to_dict()
            if ctx:
                result["context"] = ctx
        if self.correlation_id:
            result["correlation_id"] = self.correlation_id
        return result


@dataclass
class ErrorResponse:
    """Structured error response format."""
    success: bool = False
    error: Optional[ErrorDetail] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: Dict[str, Any] = {"success": self.success}
        if self.error:
            result["error"] = self.error.to_dict()
        return result


class BoltGeneratorError(Exception):
    """Base exception for all bolt generator errors."""

    error_type: str = "BoltGeneratorError"
    default_suggestion: str = "Check the bolt parameters and try again."

    def __init__(
        self,
        message: str,
        context: Optional[ErrorContext] = None,
        suggestion: Optional[str] = None,
        correlation_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()
        self.suggestion = suggestion or self.default_suggestion
        self.correlation_id = correlation_id

    def to_response(self) -> ErrorResponse:
        """Convert exception to structured error response."""
        return ErrorResponse(
            success=False,
            error=ErrorDetail(
                type=self.error_type,
                message=self.message,
                context=self.context,
                suggestion=self.suggestion,
                correlation_id=self.correlation_id,
            )
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return self.to_response().to_dict()


class ValidationError(BoltGeneratorError):
    """Raised when a bolt parameter is missing, malformed or out of range.

    Always raised before the geometry kernel is touched.
    """

    error_type = "ValidationError"
    default_suggestion = "Adjust the parameter value to be within the valid range."

    def __init__(
        self,
        parameter_name: str,
        value: Any,
        min_value: Optional[float] = None,
        max_value: Optional[float] = None,
        valid_values: Optional[List[Any]] = None,
        reason: Optional[str] = None,
        **kwargs,
    ):
        if reason:
            message = f"Invalid value for '{parameter_name}': {reason}"
        elif valid_values:
            message = f"Invalid value '{value}' for '{parameter_name}'. Valid values: {valid_values}"
        elif min_value is not None and max_value is not None:
            message = f"Value {value} for '{parameter_name}' must be between {min_value} and {max_value}"
        elif min_value is not None:
            message = f"Value {value} for '{parameter_name}' must be > {min_value}"
        elif max_value is not None:
            message = f"Value {value} for '{parameter_name}' must be < {max_value}"
        else:
            message = f"Invalid value '{value}' for parameter '{parameter_name}'"

        context = ErrorContext(
            requested_id=parameter_name,
            current_value=value,
            valid_range={"min": min_value, "max": max_value} if min_value is not None or max_value is not None else None,
        )
        if valid_values:
            context.additional_info = {"valid_values": valid_values}

        super().__init__(message, context=context, **kwargs)
        self.parameter_name = parameter_name


class GeometryError(BoltGeneratorError):
    """Raised when the kernel rejects an operation or it would create invalid geometry."""

    error_type = "GeometryError"
    default_suggestion = (
        "Check the bolt proportions. Chamfer and fillet sizes must fit inside the "
        "adjacent faces and the shank must fit inside the hexagon head."
    )

    def __init__(
        self,
        operation: str,
        reason: str,
        affected_entities: Optional[List[str]] = None,
        kernel_error: Optional[str] = None,
        **kwargs,
    ):
        message = f"Geometry error during {operation}: {reason}"
        context = ErrorContext(
            affected_entities=affected_entities,
            additional_info={"kernel_error": kernel_error} if kernel_error else None,
        )
        super().__init__(message, context=context, **kwargs)
        self.operation = operation


class ResourceError(BoltGeneratorError):
    """Raised when the component or kernel session needed for a build is unavailable."""

    error_type = "ResourceError"
    default_suggestion = "Ensure a design is open in the host application and that the kernel is available."

    def __init__(
        self,
        resource: str,
        reason: Optional[str] = None,
        **kwargs,
    ):
        message = f"Cannot acquire {resource}"
        if reason:
            message += f": {reason}"

        context = ErrorContext(additional_info={"resource": resource})
        super().__init__(message, context=context, **kwargs)
