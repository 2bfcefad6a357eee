from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    store: str
    store_ready: bool


class AnalysisIdList(BaseModel):
    ids: list[int] = []
