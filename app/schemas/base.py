# app/schemas/base.py

from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

# Stock columns are 32-bit INTEGER on Postgres
MAX_STOCK_VALUE = 2**31 - 1


# Wire format is camelCase; python attributes stay snake_case
class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _reject_bool(value):
    # lax int mode would read true/false as 1/0
    if isinstance(value, bool):
        raise ValueError("must be an integer, not a boolean")
    return value


NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
ActorStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
ReasonStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]

StockCount = Annotated[int, BeforeValidator(_reject_bool), Field(le=MAX_STOCK_VALUE)]
