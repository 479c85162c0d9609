"""Tests for the in-memory record store."""

from __future__ import annotations

import threading

import pytest

from translate_spine.core.errors import RecordNotFoundError, StoreError
from translate_spine.core.models import Record, RecordRef, RecordSchema
from translate_spine.core.protocols import EntityStore
from translate_spine.store.memory import InMemoryEntityStore


class TestProtocol:
    def test_satisfies_entity_store(self, store):
        assert isinstance(store, EntityStore)


class TestReads:
    def test_read_field_case_insensitive(self, store, snippet_ref):
        assert store.read_field(snippet_ref, "Source_Text") == "Hello"

    def test_read_missing_field_or_record(self, store, snippet_ref):
        assert store.read_field(snippet_ref, "nope") is None
        assert store.read_field(RecordRef("translation_snippet", "missing"), "source_text") is None

    def test_query_records_by_equality_in_insertion_order(self, store):
        store.add_record("language_locale", "loc-de", localeid=1031, code="de")
        records = store.query_records("language_locale")
        assert [r.id for r in records] == ["loc-en", "loc-fr", "loc-de"]
        fr = store.query_records("language_locale", localeid=1036)
        assert [r.get("code") for r in fr] == ["fr"]

    def test_read_schema_default(self, store):
        schema = store.read_schema("unknown_type")
        assert schema.primary_key == "unknown_type_id"


class TestWrites:
    def test_write_fields_updates_only_given_fields(self, store, snippet_ref):
        store.write_fields(
            snippet_ref,
            {"translation_snippet_id": snippet_ref.id, "translated_text": "Bonjour"},
        )
        record = store.get_record(snippet_ref)
        assert record.get("translated_text") == "Bonjour"
        assert record.get("source_text") == "Hello"
        assert store.updates[0].fields == {"translated_text": "Bonjour"}

    def test_write_missing_record(self, store):
        with pytest.raises(RecordNotFoundError):
            store.write_fields(RecordRef("translation_snippet", "missing"), {"translated_text": "x"})

    def test_primary_key_mismatch(self, store, snippet_ref):
        with pytest.raises(StoreError, match="Primary key mismatch"):
            store.write_fields(snippet_ref, {"translation_snippet_id": "other", "translated_text": "x"})

    def test_unknown_field_rejected(self, store, snippet_ref):
        with pytest.raises(StoreError, match="Unknown field"):
            store.write_fields(snippet_ref, {"colour": "blue"})
        assert store.updates == []

    def test_create_record_is_recorded(self, store):
        ref = store.create_record("translation_mapping", {"job_id": "j-1"})
        assert store.operations[-1].kind == "create"
        assert store.read_field(ref, "job_id") == "j-1"

    def test_concurrent_creates(self):
        s = InMemoryEntityStore()

        def worker(n: int) -> None:
            for i in range(50):
                s.create_record("row", {"n": n, "i": i})

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(s.query_records("row")) == 400


class TestFixtures:
    def test_from_dict(self):
        s = InMemoryEntityStore.from_dict(
            {
                "schemas": {
                    "translation_snippet": {
                        "primary_key": "translation_snippet_id",
                        "fields": ["source_text", "translated_text"],
                    }
                },
                "records": {"translation_snippet": [{"id": "s-9", "source_text": "Hi"}]},
            }
        )
        assert s.read_schema("translation_snippet").fields == frozenset({"source_text", "translated_text"})
        assert s.read_field(RecordRef("translation_snippet", "s-9"), "source_text") == "Hi"


class TestModels:
    def test_record_get_is_case_insensitive(self):
        record = Record("t", "1", {"source_text": "Hi"})
        assert record.get("SOURCE_TEXT") == "Hi"
        assert record.to_ref() == RecordRef("t", "1")

    def test_schema_display_name(self):
        schema = RecordSchema("t", "t_id", display_names={"language_from": "Language From"})
        assert schema.display_name("language_from") == "Language From"
        assert schema.display_name("other") == "other"
