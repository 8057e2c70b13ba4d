# app/constants/adjustment_type.py

from enum import Enum


class AdjustmentType(str, Enum):
    ADD = "add"
    REMOVE = "remove"
    SET = "set"
