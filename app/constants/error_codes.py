from enum import Enum


class ErrorCode(str, Enum):
    # ---------------- GENERIC ----------------
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    UNAUTHORIZED = "UNAUTHORIZED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # ---------------- CATALOG ----------------
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    PRODUCT_INACTIVE = "PRODUCT_INACTIVE"
    LOCATION_NOT_FOUND = "LOCATION_NOT_FOUND"
    LOCATION_INACTIVE = "LOCATION_INACTIVE"

    # ---------------- INVENTORY ----------------
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    LOCATION_STATE_CHANGED = "LOCATION_STATE_CHANGED"
    CONCURRENT_STOCK_UPDATE = "CONCURRENT_STOCK_UPDATE"
    BULK_OPERATION_TIMEOUT = "BULK_OPERATION_TIMEOUT"
    STOCK_TRANSFER_INVALID_LOCATION = "STOCK_TRANSFER_INVALID_LOCATION"
