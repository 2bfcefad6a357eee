"""Persistence contract for analysis reports, plus an in-process store.

A stored analysis keeps the original CSV text alongside the base column
statistics so numeric aggregates can be recomputed on demand.
"""

import itertools
import logging
from datetime import datetime
from typing import Protocol

from pydantic import BaseModel

from csvstats.analysis.models import AnalysisReport, ColumnStatistics, DataType

log = logging.getLogger(__name__)


class StoredColumn(BaseModel):
    column_name: str
    null_count: int
    unique_count: int
    data_type: DataType


class StoredAnalysis(BaseModel):
    id: int
    original_data: str
    number_of_rows: int
    number_of_columns: int
    total_characters: int
    created_at: datetime
    columns: list[StoredColumn] = []

    def to_report(self) -> AnalysisReport:
        """Report view of the stored row; numeric aggregates are left empty."""
        return AnalysisReport(
            id=self.id,
            number_of_rows=self.number_of_rows,
            number_of_columns=self.number_of_columns,
            total_characters=self.total_characters,
            column_statistics=[ColumnStatistics(**c.model_dump()) for c in self.columns],
            created_at=self.created_at,
        )


def stored_columns(report: AnalysisReport) -> list[StoredColumn]:
    return [
        StoredColumn(
            column_name=c.column_name,
            null_count=c.null_count,
            unique_count=c.unique_count,
            data_type=c.data_type,
        )
        for c in report.column_statistics
    ]


class AnalysisStore(Protocol):
    name: str

    def is_ready(self) -> bool:
        """True once open() has succeeded and until close()."""
        ...

    async def open(self) -> None: ...

    async def close(self) -> None: ...

    async def save(self, report: AnalysisReport, original_data: str) -> int:
        """Persist a report and its columns as one unit; return the new id."""
        ...

    async def fetch(self, analysis_id: int) -> StoredAnalysis | None: ...

    async def exists(self, analysis_id: int) -> bool: ...

    async def delete(self, analysis_id: int) -> bool:
        """Remove a report with all its columns. False if it didn't exist."""
        ...

    async def list_ids(self) -> list[int]: ...


class MemoryAnalysisStore:
    """Dict-backed store for local runs and tests. Ids start at 1."""

    name = "memory"

    def __init__(self) -> None:
        self._rows: dict[int, StoredAnalysis] = {}
        self._ids = itertools.count(1)
        self._open = False

    def is_ready(self) -> bool:
        return self._open

    async def open(self) -> None:
        self._open = True
        log.info("Using in-memory analysis store")

    async def close(self) -> None:
        self._open = False
        self._rows.clear()

    async def save(self, report: AnalysisReport, original_data: str) -> int:
        analysis_id = next(self._ids)
        self._rows[analysis_id] = StoredAnalysis(
            id=analysis_id,
            original_data=original_data,
            number_of_rows=report.number_of_rows,
            number_of_columns=report.number_of_columns,
            total_characters=report.total_characters,
            created_at=report.created_at,
            columns=stored_columns(report),
        )
        return analysis_id

    async def fetch(self, analysis_id: int) -> StoredAnalysis | None:
        row = self._rows.get(analysis_id)
        # hand out a copy so callers can't mutate what's stored
        return row.model_copy(deep=True) if row else None

    async def exists(self, analysis_id: int) -> bool:
        return analysis_id in self._rows

    async def delete(self, analysis_id: int) -> bool:
        return self._rows.pop(analysis_id, None) is not None

    async def list_ids(self) -> list[int]:
        return sorted(self._rows)
