import asyncio

from rakshavaani.storage import HistoryStore
from stubs import make_settings, read_history


def test_records_are_appended_in_arrival_order(tmp_path):
    store = HistoryStore(make_settings(tmp_path))

    assert asyncio.run(store.record("chat", {"text": "first"})) is True
    assert asyncio.run(store.record("chat", {"text": "second"})) is True

    records = read_history(store)
    assert [r["payload"]["text"] for r in records] == ["first", "second"]
    assert all("timestamp" in r for r in records)
    assert store.path == tmp_path / "logs" / "history.jsonl"


def test_disabled_store_writes_nothing(tmp_path):
    store = HistoryStore(make_settings(tmp_path, history_enabled=False))

    assert asyncio.run(store.record("chat", {"text": "x"})) is False
    assert read_history(store) == []


def test_write_failure_is_reported_not_raised(tmp_path):
    target = tmp_path / "not-a-dir"
    target.write_text("occupied", encoding="utf-8")
    store = HistoryStore(make_settings(target))

    assert asyncio.run(store.record("chat", {"text": "x"})) is False
