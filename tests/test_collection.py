from __future__ import annotations

import json
from pathlib import Path

import pytest

from imazingtosbr.errors import CollectionLoadError, CollectionSaveError
from imazingtosbr.models import CallBatch, CallRecord, Collection, MessageBatch, MessageRecord
from imazingtosbr.store.collection import append_calls, append_messages, load_or_default, save


def _call(name: str, number: str = "+1") -> CallRecord:
    return CallRecord(
        contact_name=name,
        date="1704110400000",
        readable_date="2024-01-01 12:00:00",
        presentation=name,
        duration="00:01:00",
        data_from="iMazing",
        service_type="Phone",
        number=number,
        type="1",
    )


def _sms(body: str) -> MessageRecord:
    return MessageRecord(
        contact_name="Alice",
        subject="",
        body=body,
        date="1704110400000",
        readable_date="2024-01-01 12:00:00",
        address="+15550001",
        status="Read",
        type="1",
    )


def test_missing_collection_defaults_to_empty(tmp_path: Path) -> None:
    collection = load_or_default(tmp_path / "archive.json")
    assert collection == Collection()
    assert collection.to_dict() == {"key": "", "calls": [], "sms": [], "mms": []}


def test_malformed_collection_is_fatal(tmp_path: Path) -> None:
    path = tmp_path / "archive.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(CollectionLoadError):
        load_or_default(path)


@pytest.mark.parametrize("payload", ["[]", '{"calls": {}}', '{"sms": [1, 2]}', '{"key": 5}'])
def test_wrong_shape_is_fatal(tmp_path: Path, payload: str) -> None:
    path = tmp_path / "archive.json"
    path.write_text(payload, encoding="utf-8")
    with pytest.raises(CollectionLoadError):
        load_or_default(path)


def test_append_twice_is_additive(tmp_path: Path) -> None:
    batch = CallBatch(calls=[_call("A"), _call("B")], count="2")
    collection = Collection()

    assert append_calls(collection, batch) == 2
    assert append_calls(collection, batch) == 2
    assert [item["contactName"] for item in collection.calls] == ["A", "B", "A", "B"]


def test_append_keeps_existing_entries_untouched(tmp_path: Path) -> None:
    path = tmp_path / "archive.json"
    existing = {
        "key": "archive-key",
        "calls": [{"contactName": "Old", "number": "+0", "subscriptionId": "7"}],
        "sms": [{"body": "old sms"}],
        "mms": [{"m_id": "mid1", "parts": [{"ct": "text/plain", "text": "hi"}]}],
    }
    path.write_text(json.dumps(existing), encoding="utf-8")

    collection = load_or_default(path)
    append_calls(collection, CallBatch(calls=[_call("New")], count="1"))
    append_messages(collection, MessageBatch(sms=[_sms("new sms")]))
    save(collection, path)

    reloaded = json.loads(path.read_text(encoding="utf-8"))
    assert reloaded["key"] == "archive-key"
    assert reloaded["calls"][0] == existing["calls"][0]
    assert reloaded["calls"][1]["contactName"] == "New"
    assert [item["body"] for item in reloaded["sms"]] == ["old sms", "new sms"]
    assert reloaded["mms"] == existing["mms"]


def test_save_round_trip_and_no_temp_files(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "archive.json"
    collection = Collection()
    append_messages(collection, MessageBatch(sms=[_sms("héllo")]))
    save(collection, path)

    assert load_or_default(path) == collection
    assert "héllo" in path.read_text(encoding="utf-8")
    assert [p.name for p in path.parent.iterdir()] == ["archive.json"]


def test_save_overwrites_existing_file(tmp_path: Path) -> None:
    path = tmp_path / "archive.json"
    path.write_text(json.dumps({"calls": [{"contactName": "x"}] * 5}), encoding="utf-8")
    save(Collection(), path)
    assert json.loads(path.read_text(encoding="utf-8"))["calls"] == []


def test_save_into_unwritable_target_fails(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory", encoding="utf-8")
    with pytest.raises(CollectionSaveError):
        save(Collection(), blocker / "archive.json")
