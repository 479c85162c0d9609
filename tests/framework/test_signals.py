"""Tests for execution signals."""

from __future__ import annotations

import dataclasses

import pytest

from translate_spine.core.models import Record, RecordRef
from translate_spine.framework.signals import ExecutionSignal, SignalPayload, Stage


class TestStage:
    def test_host_codes(self):
        assert [s.value for s in Stage] == [10, 20, 30, 40]

    @pytest.mark.parametrize("raw", [40, "40", "post_operation", "POST-OPERATION", Stage.POST_OPERATION])
    def test_parse(self, raw):
        assert Stage.parse(raw) is Stage.POST_OPERATION

    def test_parse_unknown(self):
        with pytest.raises((KeyError, ValueError)):
            Stage.parse("sometime")


class TestSignalPayload:
    def test_moniker_wins(self):
        payload = SignalPayload(
            target=Record("translation_snippet", "a"),
            moniker=RecordRef("translation_snippet", "b"),
        )
        assert payload.subject_ref().id == "b"

    def test_reference_derived_from_target_record(self):
        payload = SignalPayload(target=Record("translation_snippet", "a", {"source_text": "Hi"}))
        assert payload.subject_ref() == RecordRef("translation_snippet", "a")
        assert payload.target_record().get("source_text") == "Hi"

    def test_target_reference(self):
        payload = SignalPayload(target=RecordRef("translation_snippet", "a"))
        assert payload.subject_ref().id == "a"
        assert payload.target_record() is None

    def test_empty(self):
        assert SignalPayload().subject_ref() is None


class TestExecutionSignal:
    def test_frozen(self):
        signal = ExecutionSignal(stage=Stage.POST_OPERATION, operation_name="create")
        with pytest.raises(dataclasses.FrozenInstanceError):
            signal.depth = 5  # type: ignore[misc]

    def test_correlation_id_generated(self):
        a = ExecutionSignal(stage=Stage.POST_OPERATION, operation_name="create")
        b = ExecutionSignal(stage=Stage.POST_OPERATION, operation_name="create")
        assert a.correlation_id and a.correlation_id != b.correlation_id

    def test_from_dict_with_target_record(self):
        signal = ExecutionSignal.from_dict(
            {
                "stage": "post_operation",
                "operation": "Update",
                "record_type": "translation_snippet",
                "depth": 2,
                "target": {
                    "record_type": "translation_snippet",
                    "id": "s-1",
                    "fields": {"Source_Text": "Hello"},
                },
                "pre_image": {"record_type": "translation_snippet", "id": "s-1", "fields": {"language_to": 1036}},
                "correlation_id": "c-1",
                "initiating_user_id": "u-1",
            }
        )
        assert signal.stage is Stage.POST_OPERATION
        assert signal.operation_name == "Update"
        assert signal.depth == 2
        assert signal.payload.target_record().get("source_text") == "Hello"
        assert signal.payload.pre_image.get("language_to") == 1036
        assert signal.correlation_id == "c-1"
        assert signal.initiating_user_id == "u-1"

    def test_from_dict_with_reference_and_moniker(self):
        signal = ExecutionSignal.from_dict(
            {
                "stage": 40,
                "operation": "create",
                "target": {"record_type": "translation_snippet", "id": 7},
                "moniker": {"record_type": "translation_snippet", "id": "m-1"},
            }
        )
        assert signal.payload.target == RecordRef("translation_snippet", "7")
        assert signal.payload.subject_ref().id == "m-1"
        assert signal.depth == 1
        assert signal.record_type == ""
