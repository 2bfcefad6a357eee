import os

# Must be set before csvstats.config builds its settings.
os.environ["CSVSTATS_STORE__BACKEND"] = "memory"

import pytest
from fastapi.testclient import TestClient

from csvstats.main import app
from csvstats.store import MemoryAnalysisStore


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def post_csv(client):
    def _post(text: str, content_type: str = "text/csv"):
        return client.post(
            "/api/analysis/ingestCsv",
            content=text.encode("utf-8"),
            headers={"Content-Type": content_type},
        )

    return _post


@pytest.fixture
def store():
    return MemoryAnalysisStore()
