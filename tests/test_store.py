"""Tests for the JSON snapshot store and the dedup index."""

from __future__ import annotations

import json

from eurlex_crawler.adapters.base import Record
from eurlex_crawler.store.dedup import DedupIndex
from eurlex_crawler.store.json_store import JSONSnapshotStore


def _record(internal_id: str, title: str = "Title") -> Record:
    return Record(title=title, link=f"https://eur-lex.europa.eu/{internal_id}", internal_id=internal_id)


class TestJSONSnapshotStore:
    def test_missing_file_loads_empty(self, tmp_path) -> None:
        assert JSONSnapshotStore(tmp_path / "absent.json").load() == []

    def test_corrupt_file_loads_empty(self, tmp_path) -> None:
        path = tmp_path / "results.json"
        path.write_text("{not json", encoding="utf-8")
        assert JSONSnapshotStore(path).load() == []

    def test_non_array_loads_empty(self, tmp_path) -> None:
        path = tmp_path / "results.json"
        path.write_text('{"title": "x"}', encoding="utf-8")
        assert JSONSnapshotStore(path).load() == []

    def test_malformed_entries_are_skipped(self, tmp_path) -> None:
        path = tmp_path / "results.json"
        path.write_text(
            json.dumps([{"title": "t", "link": "l", "internalId": "a"}, {"title": "no id"}, "junk"]),
            encoding="utf-8",
        )
        assert [r.internal_id for r in JSONSnapshotStore(path).load()] == ["a"]

    def test_save_writes_pretty_utf8_array(self, tmp_path) -> None:
        path = tmp_path / "nested" / "results.json"
        store = JSONSnapshotStore(path)

        assert store.save([_record("a", title="Règlement d'exécution")]) is True

        text = path.read_text(encoding="utf-8")
        assert "Règlement d'exécution" in text
        assert text.startswith("[\n  {")
        assert json.loads(text) == [
            {"title": "Règlement d'exécution", "link": "https://eur-lex.europa.eu/a", "internalId": "a"}
        ]
        assert not (tmp_path / "nested" / "results.json.tmp").exists()

    def test_save_replaces_whole_snapshot(self, tmp_path) -> None:
        store = JSONSnapshotStore(tmp_path / "results.json")
        store.save([_record("a"), _record("b")])
        store.save([_record("c")])
        assert [r.internal_id for r in store.load()] == ["c"]

    def test_save_failure_returns_false(self, tmp_path) -> None:
        target = tmp_path / "results.json"
        target.mkdir()
        store = JSONSnapshotStore(target)

        assert store.save([_record("a")]) is False
        assert target.is_dir()


class TestDedupIndex:
    def test_seeded_ids_are_known(self) -> None:
        index = DedupIndex(["a", "b"])
        assert index.contains("a")
        assert "b" in index
        assert not index.contains("c")
        assert len(index) == 2

    def test_add_is_idempotent(self) -> None:
        index = DedupIndex()
        assert index.add("a") is True
        assert index.add("a") is False
        assert len(index) == 1
