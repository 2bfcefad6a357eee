import logging
from datetime import datetime, timezone

from csvstats.analysis.columns import ColumnAccumulator
from csvstats.analysis.models import AnalysisReport, ColumnStatistics, DataType
from csvstats.analysis.parsing import split_rows
from csvstats.errors import BadRequestError

__all__ = ["AnalysisReport", "ColumnStatistics", "DataType", "analyze"]

log = logging.getLogger(__name__)


def analyze(raw_text: str | None) -> AnalysisReport:
    """Profile raw CSV text column by column.

    The first line is the header. Every row must have exactly as many
    fields as the header; the first one that doesn't aborts the analysis
    with a BadRequestError naming its 1-based line (header is line 1).
    Columns are tracked by position, so repeated header names each get
    their own statistics.

    Nothing is persisted here; the returned report has no id.
    """
    if raw_text is None or not raw_text.strip():
        raise BadRequestError("CSV data must not be empty")

    rows = split_rows(raw_text)
    if not rows or not rows[0]:
        raise BadRequestError("Invalid CSV header")

    header = rows[0]
    number_of_columns = len(header)

    for i, row in enumerate(rows):
        if len(row) != number_of_columns:
            raise BadRequestError(
                f"Row {i + 1} has a different number of columns than the header"
            )

    columns = [ColumnAccumulator(name) for name in header]
    for row in rows[1:]:
        for column, value in zip(columns, row):
            column.add(value)

    report = AnalysisReport(
        number_of_rows=max(0, len(rows) - 1),
        number_of_columns=number_of_columns,
        total_characters=len(raw_text),
        column_statistics=[c.to_statistics() for c in columns],
        created_at=datetime.now(timezone.utc),
    )
    log.debug(
        "Analyzed CSV: %d rows x %d columns (%d chars)",
        report.number_of_rows,
        report.number_of_columns,
        report.total_characters,
    )
    return report
