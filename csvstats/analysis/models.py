from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


def _json_number(value: Decimal) -> int | float:
    # integral values go out as exact ints, so 1e400 survives as a JSON number
    if value == value.to_integral_value():
        return int(value)
    return float(value)


Aggregate = Annotated[
    Decimal,
    PlainSerializer(_json_number, return_type=int | float, when_used="json"),
]


class DataType(str, Enum):
    STRING = "STRING"
    INTEGER = "INTEGER"
    DECIMAL = "DECIMAL"
    BOOLEAN = "BOOLEAN"


class ColumnStatistics(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    column_name: str
    null_count: int
    unique_count: int
    data_type: DataType
    # numeric aggregates, None unless the column holds a decimal-parseable value
    min: Aggregate | None = None
    max: Aggregate | None = None
    mean: Aggregate | None = None
    median: Aggregate | None = None


class AnalysisReport(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: int | None = None  # assigned by the store
    number_of_rows: int
    number_of_columns: int
    total_characters: int
    column_statistics: list[ColumnStatistics]
    created_at: datetime
