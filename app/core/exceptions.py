from fastapi import HTTPException
from app.constants.error_codes import ErrorCode


class AppException(HTTPException):
    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: ErrorCode,
        details: dict | None = None,
    ):
        super().__init__(status_code=status_code, detail=message)
        self.error_code = error_code
        self.details = details


class ValidationError(AppException):
    """Malformed or missing request data. Raised before any write."""

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ):
        super().__init__(400, message, error_code, details)


class NotFoundError(AppException):
    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.NOT_FOUND,
        details: dict | None = None,
    ):
        super().__init__(404, message, error_code, details)


class InsufficientStockError(AppException):
    def __init__(self, current_stock: int, requested_quantity: int):
        super().__init__(
            400,
            "Insufficient stock",
            ErrorCode.INSUFFICIENT_STOCK,
            {
                "message": (
                    f"Cannot remove {requested_quantity} units. "
                    f"Only {current_stock} units available."
                ),
                "currentStock": current_stock,
                "requestedQuantity": requested_quantity,
            },
        )
        self.current_stock = current_stock
        self.requested_quantity = requested_quantity


class ConsistencyError(AppException):
    """A location changed state between selection and the write transaction."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(400, message, ErrorCode.LOCATION_STATE_CHANGED, details)


class ConflictError(AppException):
    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFLICT,
        details: dict | None = None,
    ):
        super().__init__(409, message, error_code, details)
