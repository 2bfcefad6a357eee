import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse

from csvstats import service
from csvstats.analysis import AnalysisReport
from csvstats.config import settings
from csvstats.db import PostgresAnalysisStore
from csvstats.errors import AnalysisError
from csvstats.models import AnalysisIdList, HealthResponse
from csvstats.store import AnalysisStore, MemoryAnalysisStore

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

_CSV_CONTENT_TYPES = ("text/plain", "text/csv")


def _build_store() -> AnalysisStore:
    if settings.store.backend == "memory":
        return MemoryAnalysisStore()
    return PostgresAnalysisStore(settings.db)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = _build_store()
    await store.open()
    app.state.store = store
    log.info("Analysis store ready (backend=%s)", store.name)

    yield

    # Shutdown
    await store.close()


app = FastAPI(title="csvstats", version="0.1.0", lifespan=lifespan)


def get_store(request: Request) -> AnalysisStore:
    return request.app.state.store


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.get("/api/health", response_model=HealthResponse)
async def health(store: AnalysisStore = Depends(get_store)):
    return HealthResponse(status="ok", store=store.name, store_ready=store.is_ready())


@app.post("/api/analysis", response_model=AnalysisReport)
@app.post("/api/analysis/ingestCsv", response_model=AnalysisReport)
async def ingest_csv(request: Request, store: AnalysisStore = Depends(get_store)):
    """Analyze a raw CSV body (text/plain or text/csv) and store the result."""
    content_type = request.headers.get("content-type", "")
    if content_type.split(";")[0].strip().lower() not in _CSV_CONTENT_TYPES:
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported content type: {content_type or 'none'}",
        )
    body = await request.body()
    try:
        csv_content = body.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="CSV data must be UTF-8 encoded")
    return await service.ingest_csv(store, csv_content)


@app.get("/api/analysis", response_model=AnalysisIdList)
async def list_analyses(store: AnalysisStore = Depends(get_store)):
    return AnalysisIdList(ids=await service.list_analyses(store))


@app.get("/api/analysis/{analysis_id}", response_model=AnalysisReport)
async def get_analysis(analysis_id: int, store: AnalysisStore = Depends(get_store)):
    return await service.get_analysis(store, analysis_id)


@app.get("/api/analysis/{analysis_id}/statistics", response_model=AnalysisReport)
async def get_analysis_statistics(analysis_id: int, store: AnalysisStore = Depends(get_store)):
    """Full statistics, numeric aggregates included, recomputed from the stored CSV."""
    return await service.get_analysis_statistics(store, analysis_id)


@app.delete("/api/analysis/{analysis_id}", status_code=204)
async def delete_analysis(analysis_id: int, store: AnalysisStore = Depends(get_store)):
    await service.delete_analysis(store, analysis_id)
    return Response(status_code=204)
