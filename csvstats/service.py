"""Ingest, read and delete operations on stored analyses."""

import logging

from csvstats.analysis import AnalysisReport, analyze
from csvstats.config import settings
from csvstats.errors import BadRequestError, NotFoundError
from csvstats.store import AnalysisStore

log = logging.getLogger(__name__)


def check_content_rules(raw_text: str, forbidden: list[str] | None = None) -> None:
    for needle in settings.ingest.forbidden_substrings if forbidden is None else forbidden:
        if needle and needle in raw_text:
            log.warning("Rejected CSV upload containing forbidden text %r", needle)
            raise BadRequestError(f"CSV data containing '{needle}' is not allowed")


async def ingest_csv(store: AnalysisStore, raw_text: str) -> AnalysisReport:
    """Validate and analyze CSV text, then persist it. Returns the stored report."""
    check_content_rules(raw_text)
    report = analyze(raw_text)
    analysis_id = await store.save(report, raw_text)
    log.info(
        "Stored analysis %d (%d rows, %d columns)",
        analysis_id,
        report.number_of_rows,
        report.number_of_columns,
    )
    return report.model_copy(update={"id": analysis_id})


async def get_analysis(store: AnalysisStore, analysis_id: int) -> AnalysisReport:
    stored = await store.fetch(analysis_id)
    if stored is None:
        raise NotFoundError.for_analysis(analysis_id)
    return stored.to_report()


async def get_analysis_statistics(store: AnalysisStore, analysis_id: int) -> AnalysisReport:
    """Recompute full statistics, numeric aggregates included, from the stored CSV.

    Read-only: the result keeps the stored id and timestamp and nothing new
    is written.
    """
    stored = await store.fetch(analysis_id)
    if stored is None:
        raise NotFoundError.for_analysis(analysis_id)
    report = analyze(stored.original_data)
    return report.model_copy(update={"id": stored.id, "created_at": stored.created_at})


async def delete_analysis(store: AnalysisStore, analysis_id: int) -> None:
    if not await store.exists(analysis_id):
        raise NotFoundError.for_analysis(analysis_id)
    if not await store.delete(analysis_id):
        # removed between the check and the delete
        raise NotFoundError.for_analysis(analysis_id)
    log.info("Deleted analysis %d", analysis_id)


async def list_analyses(store: AnalysisStore) -> list[int]:
    return await store.list_ids()
