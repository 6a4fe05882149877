# backend/modules/floor_plans/exceptions.py

"""
Custom exceptions for the floor plan editor module.

Validation errors are raised before any call to the persistence backend,
transport errors wrap failures of that backend. Neither ever leaves the
in-memory grid partially modified.
"""

from typing import Optional, Dict, Any


class FloorPlanBaseException(Exception):
    """Base exception for all floor plan editor errors"""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class FloorPlanValidationError(FloorPlanBaseException):
    """Raised when user input is rejected locally"""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None
    ):
        details = {"field": field, "value": value}
        super().__init__(message, "FLOOR_PLAN_VALIDATION_ERROR", details)


class InvalidGridSizeError(FloorPlanValidationError):
    """Raised when a resize falls outside the allowed grid bounds"""

    def __init__(self, width: int, height: int, min_size: int, max_size: int):
        message = (
            f"Grid dimensions must be between {min_size} and {max_size}, "
            f"got {width}x{height}"
        )
        super().__init__(message, field="size", value={"width": width, "height": height})
        self.error_code = "INVALID_GRID_SIZE"


class EmptyNameError(FloorPlanValidationError):
    """Raised when a table or floor rename is given a blank name"""

    def __init__(self, field: str):
        super().__init__(f"{field} must not be empty", field=field, value="")
        self.error_code = "EMPTY_NAME"


class FloorPlanTransportError(FloorPlanBaseException):
    """Raised when the persistence backend or availability feed fails"""

    def __init__(self, operation: str, reason: str, status_code: Optional[int] = None):
        message = f"Floor plan {operation} failed: {reason}"
        details = {"operation": operation, "status_code": status_code}
        super().__init__(message, "FLOOR_PLAN_TRANSPORT_ERROR", details)
        self.operation = operation
        self.status_code = status_code


class FloorPlanNotLoadedError(FloorPlanBaseException):
    """Raised when an editor operation runs before a plan was loaded"""

    def __init__(self):
        super().__init__("No floor plan loaded", "FLOOR_PLAN_NOT_LOADED")
