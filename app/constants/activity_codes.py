from enum import Enum


class ActivityCode(str, Enum):
    # ---------------- INVENTORY ----------------
    ADJUST_STOCK = "ADJUST_STOCK"
    ADJUST_STOCK_MULTI_LOCATION = "ADJUST_STOCK_MULTI_LOCATION"
    BULK_ADD_STOCK = "BULK_ADD_STOCK"
    TRANSFER_STOCK = "TRANSFER_STOCK"

    # ---------------- CATALOG ----------------
    UPDATE_STOCK_POLICY = "UPDATE_STOCK_POLICY"
