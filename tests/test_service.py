import asyncio

import pytest

from csvstats import service
from csvstats.analysis import DataType
from csvstats.errors import BadRequestError, NotFoundError

CSV = "name,score,active\nann,1,true\nben,44,false\ncal,16,\n"


def run(coro):
    return asyncio.run(coro)


def test_ingest_assigns_id_and_persists(store):
    report = run(service.ingest_csv(store, CSV))
    assert report.id == 1
    assert run(store.list_ids()) == [1]
    stored = run(store.fetch(1))
    assert stored.original_data == CSV
    assert [c.column_name for c in stored.columns] == ["name", "score", "active"]


def test_invalid_csv_is_not_persisted(store):
    with pytest.raises(BadRequestError):
        run(service.ingest_csv(store, "a,b\n1"))
    assert run(store.list_ids()) == []


def test_forbidden_content_is_rejected(store):
    with pytest.raises(BadRequestError, match="Sonny Hayes"):
        run(service.ingest_csv(store, "driver\nSonny Hayes\n"))
    assert run(store.list_ids()) == []


def test_content_rules_with_explicit_list():
    service.check_content_rules("anything", forbidden=[])
    with pytest.raises(BadRequestError, match="'secret'"):
        service.check_content_rules("a\nsecret", forbidden=["secret"])


def test_get_round_trips_base_statistics(store):
    created = run(service.ingest_csv(store, CSV))
    fetched = run(service.get_analysis(store, created.id))
    assert fetched.id == created.id
    assert fetched.number_of_rows == created.number_of_rows == 3
    assert fetched.number_of_columns == created.number_of_columns
    assert fetched.total_characters == created.total_characters == len(CSV)
    assert fetched.created_at == created.created_at
    for got, want in zip(fetched.column_statistics, created.column_statistics):
        assert got.column_name == want.column_name
        assert got.null_count == want.null_count
        assert got.unique_count == want.unique_count
        assert got.data_type == want.data_type
        assert got.mean is None


def test_get_is_idempotent(store):
    created = run(service.ingest_csv(store, CSV))
    first = run(service.get_analysis(store, created.id))
    second = run(service.get_analysis(store, created.id))
    assert first == second


def test_get_missing_raises_not_found(store):
    with pytest.raises(NotFoundError, match="Analysis with id 99 not found"):
        run(service.get_analysis(store, 99))


def test_statistics_recomputes_aggregates_without_writing(store):
    created = run(service.ingest_csv(store, CSV))
    stats = run(service.get_analysis_statistics(store, created.id))
    assert stats.id == created.id
    assert stats.created_at == created.created_at
    score = stats.column_statistics[1]
    assert score.data_type == DataType.INTEGER
    assert score.min == 1
    assert score.max == 44
    assert float(score.mean) == 20.333333333333332
    assert score.median == 16
    assert run(store.list_ids()) == [created.id]


def test_statistics_missing_raises_not_found(store):
    with pytest.raises(NotFoundError):
        run(service.get_analysis_statistics(store, 5))


def test_delete_only_removes_target(store):
    x = run(service.ingest_csv(store, CSV))
    y = run(service.ingest_csv(store, "a,b\n1,2\n"))
    run(service.delete_analysis(store, x.id))

    with pytest.raises(NotFoundError):
        run(service.get_analysis(store, x.id))
    with pytest.raises(NotFoundError):
        run(service.delete_analysis(store, x.id))
    assert run(service.get_analysis(store, y.id)).number_of_columns == 2
    assert run(service.list_analyses(store)) == [y.id]


def test_memory_store_readiness_follows_open_and_close(store):
    assert not store.is_ready()
    run(store.open())
    assert store.is_ready()
    run(store.close())
    assert not store.is_ready()
