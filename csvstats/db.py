"""PostgreSQL-backed analysis store.

Reports live in ``data_analysis``; their per-column rows live in
``column_statistics`` and go away with the parent through ON DELETE CASCADE.
"""

import logging

from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from csvstats.analysis.models import AnalysisReport
from csvstats.config import DatabaseConfig, settings
from csvstats.store import StoredAnalysis, StoredColumn

log = logging.getLogger(__name__)

_SCHEMA_SQL = (
    """
    CREATE TABLE IF NOT EXISTS data_analysis (
        id BIGSERIAL PRIMARY KEY,
        original_data TEXT NOT NULL,
        number_of_rows INTEGER NOT NULL,
        number_of_columns INTEGER NOT NULL,
        total_characters BIGINT NOT NULL,
        created_at TIMESTAMPTZ NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS column_statistics (
        id BIGSERIAL PRIMARY KEY,
        data_analysis_id BIGINT NOT NULL
            REFERENCES data_analysis (id) ON DELETE CASCADE,
        position INTEGER NOT NULL,
        column_name TEXT NOT NULL,
        null_count INTEGER NOT NULL,
        unique_count INTEGER NOT NULL,
        data_type VARCHAR(16) NOT NULL
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS column_statistics_analysis_idx
        ON column_statistics (data_analysis_id, position)
    """,
)


class PostgresAnalysisStore:
    name = "postgres"

    def __init__(self, config: DatabaseConfig | None = None) -> None:
        self._config = config or settings.db
        self._pool: AsyncConnectionPool | None = None

    def is_ready(self) -> bool:
        return self._pool is not None

    async def open(self) -> None:
        self._pool = AsyncConnectionPool(
            conninfo=self._config.conninfo,
            min_size=self._config.pool_min_size,
            max_size=self._config.pool_max_size,
            open=False,
        )
        await self._pool.open()
        async with self._pool.connection() as conn:
            for sql in _SCHEMA_SQL:
                await conn.execute(sql)
        log.info(
            "Database pool opened (%s@%s:%d/%s)",
            self._config.user,
            self._config.host,
            self._config.port,
            self._config.name,
        )

    async def close(self) -> None:
        if self._pool:
            await self._pool.close()
            self._pool = None
            log.info("Database pool closed")

    def _get_pool(self) -> AsyncConnectionPool:
        if self._pool is None:
            raise RuntimeError("Database pool is not initialized")
        return self._pool

    async def save(self, report: AnalysisReport, original_data: str) -> int:
        pool = self._get_pool()
        async with pool.connection() as conn:
            async with conn.transaction():
                async with conn.cursor(row_factory=dict_row) as cur:
                    await cur.execute(
                        "INSERT INTO data_analysis (original_data, number_of_rows, "
                        "number_of_columns, total_characters, created_at) "
                        "VALUES (%s, %s, %s, %s, %s) RETURNING id",
                        (
                            original_data,
                            report.number_of_rows,
                            report.number_of_columns,
                            report.total_characters,
                            report.created_at,
                        ),
                    )
                    row = await cur.fetchone()
                    analysis_id = row["id"]
                    await cur.executemany(
                        "INSERT INTO column_statistics (data_analysis_id, position, "
                        "column_name, null_count, unique_count, data_type) "
                        "VALUES (%s, %s, %s, %s, %s, %s)",
                        [
                            (
                                analysis_id,
                                position,
                                c.column_name,
                                c.null_count,
                                c.unique_count,
                                c.data_type.value,
                            )
                            for position, c in enumerate(report.column_statistics)
                        ],
                    )
        return analysis_id

    async def fetch(self, analysis_id: int) -> StoredAnalysis | None:
        pool = self._get_pool()
        async with pool.connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(
                    "SELECT id, original_data, number_of_rows, number_of_columns, "
                    "total_characters, created_at FROM data_analysis WHERE id = %s",
                    (analysis_id,),
                )
                parent = await cur.fetchone()
                if parent is None:
                    return None
                await cur.execute(
                    "SELECT column_name, null_count, unique_count, data_type "
                    "FROM column_statistics WHERE data_analysis_id = %s ORDER BY position",
                    (analysis_id,),
                )
                columns = [StoredColumn(**r) for r in await cur.fetchall()]
        return StoredAnalysis(**parent, columns=columns)

    async def exists(self, analysis_id: int) -> bool:
        pool = self._get_pool()
        async with pool.connection() as conn:
            cur = await conn.execute(
                "SELECT 1 FROM data_analysis WHERE id = %s", (analysis_id,)
            )
            return await cur.fetchone() is not None

    async def delete(self, analysis_id: int) -> bool:
        pool = self._get_pool()
        async with pool.connection() as conn:
            cur = await conn.execute(
                "DELETE FROM data_analysis WHERE id = %s", (analysis_id,)
            )
            return cur.rowcount > 0

    async def list_ids(self) -> list[int]:
        pool = self._get_pool()
        async with pool.connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute("SELECT id FROM data_analysis ORDER BY id")
                return [r["id"] for r in await cur.fetchall()]
