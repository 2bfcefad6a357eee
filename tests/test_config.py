from csvstats.config import DatabaseConfig, Settings


def test_nested_env_overrides(monkeypatch):
    monkeypatch.setenv("CSVSTATS_STORE__BACKEND", "memory")
    monkeypatch.setenv("CSVSTATS_DB__PORT", "6543")
    monkeypatch.setenv("CSVSTATS_INGEST__FORBIDDEN_SUBSTRINGS", '["foo", "bar"]')
    s = Settings()
    assert s.store.backend == "memory"
    assert s.db.port == 6543
    assert s.ingest.forbidden_substrings == ["foo", "bar"]


def test_defaults(monkeypatch):
    monkeypatch.delenv("CSVSTATS_STORE__BACKEND", raising=False)
    s = Settings(_env_file=None)
    assert s.store.backend == "postgres"
    assert s.ingest.forbidden_substrings == ["Sonny Hayes"]


def test_conninfo_includes_password_only_when_set():
    cfg = DatabaseConfig(host="db", port=5433, name="stats", user="me")
    assert cfg.conninfo == "host=db port=5433 dbname=stats user=me connect_timeout=10"
    assert "password=pw" in DatabaseConfig(password="pw").conninfo
