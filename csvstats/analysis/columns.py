"""Per-column accumulation, type inference and numeric aggregates."""

from dataclasses import dataclass, field
from decimal import Decimal

from csvstats.analysis.models import ColumnStatistics, DataType
from csvstats.analysis.parsing import is_boolean, is_decimal, is_integer, is_null


@dataclass
class ColumnAccumulator:
    """Running statistics for one column position during a single analysis."""

    name: str
    null_count: int = 0
    distinct: set[str] = field(default_factory=set)
    numbers: list[Decimal] = field(default_factory=list)

    def add(self, value: str) -> None:
        if is_null(value):
            self.null_count += 1
            return
        trimmed = value.strip()
        self.distinct.add(trimmed)
        if is_decimal(trimmed):
            self.numbers.append(Decimal(trimmed))

    def to_statistics(self) -> ColumnStatistics:
        return ColumnStatistics(
            column_name=self.name,
            null_count=self.null_count,
            unique_count=len(self.distinct),
            data_type=infer_data_type(self.distinct),
            **numeric_aggregates(self.numbers),
        )


def infer_data_type(values: set[str]) -> DataType:
    """Pick the narrowest type every distinct value fits.

    Precedence is BOOLEAN, INTEGER, DECIMAL, then STRING; an empty set is STRING.
    """
    if not values:
        return DataType.STRING
    if all(is_boolean(v) for v in values):
        return DataType.BOOLEAN
    if all(is_integer(v) for v in values):
        return DataType.INTEGER
    if all(is_decimal(v) for v in values):
        return DataType.DECIMAL
    return DataType.STRING


def numeric_aggregates(numbers: list[Decimal]) -> dict[str, Decimal | None]:
    """min/max/mean/median over all collected values, duplicates included.

    Computed on exact decimals so literals outside float range keep their value.
    """
    if not numbers:
        return {"min": None, "max": None, "mean": None, "median": None}
    ordered = sorted(numbers)
    middle = len(ordered) // 2
    if len(ordered) % 2:
        median = ordered[middle]
    else:
        low, high = ordered[middle - 1], ordered[middle]
        median = low + (high - low) / 2
    return {
        "min": ordered[0],
        "max": ordered[-1],
        "mean": sum(ordered) / len(ordered),
        "median": median,
    }
