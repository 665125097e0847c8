"""Tests for snapshot encoding and tolerant decoding."""

import json
import logging

import pytest

from focuscube.core import SnapshotCodec, default_snapshot
from focuscube.exceptions import SnapshotLoadError
from focuscube.models import DEFAULT_STORAGE_KEY, CaseMaterial, Mode
from focuscube.registry import ModeRegistry


def _blob(state: dict, version: int = 0) -> str:
    return json.dumps({"state": state, "version": version})


@pytest.fixture
def codec():
    return SnapshotCodec(DEFAULT_STORAGE_KEY)


class TestDecodeWholeRecord:
    """Whole-record failures fall back to defaults."""

    @pytest.mark.unit
    def test_missing_key_gives_defaults_without_problems(self, codec):
        snapshot, problems = codec.decode(None)
        assert snapshot == default_snapshot()
        assert problems == []

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", ["", "not json", "[1, 2]", '{"state": 5}', '{"version": "x"}'])
    def test_unparseable_record_gives_defaults(self, codec, raw):
        snapshot, problems = codec.decode(raw)

        assert snapshot == default_snapshot()
        assert len(problems) == 1
        assert isinstance(problems[0], SnapshotLoadError)
        assert problems[0].field is None
        assert problems[0].key == DEFAULT_STORAGE_KEY

    @pytest.mark.unit
    def test_encoded_snapshot_decodes_unchanged(self, codec):
        original = default_snapshot().model_copy(
            update={"current_mode": Mode.PARTY, "case_material": CaseMaterial.METAL}
        )
        snapshot, problems = codec.decode(codec.encode(original))

        assert snapshot == original
        assert problems == []


class TestFieldRecovery:
    """Each field is restored or defaulted independently."""

    @pytest.mark.unit
    def test_bad_fields_do_not_affect_good_ones(self, codec):
        raw = _blob({
            "caseColor": "#zzz",
            "caseMaterial": "metal",
            "customModeName": "Deep Work",
            "currentMode": "party",
            "modes": {
                "study": {"brightness": 500},
                "sleep": {"brightness": 10},
            },
        })

        snapshot, problems = codec.decode(raw)

        assert snapshot.case_color == ModeRegistry.default_case_color()
        assert snapshot.case_material is CaseMaterial.METAL
        assert snapshot.custom_mode_name == "Deep Work"
        assert snapshot.current_mode is Mode.PARTY
        assert snapshot.modes[Mode.STUDY] == ModeRegistry.defaults_for("study")
        assert snapshot.modes[Mode.SLEEP].brightness == 10
        assert snapshot.modes[Mode.SLEEP].led_color == "#ff4d00"

        assert sorted(p.field for p in problems) == ["caseColor", "modes.study"]

    @pytest.mark.unit
    def test_missing_fields_use_defaults_silently(self, codec):
        snapshot, problems = codec.decode(_blob({"currentMode": "sleep"}))

        assert snapshot.current_mode is Mode.SLEEP
        assert snapshot.modes == ModeRegistry.default_modes()
        assert problems == []

    @pytest.mark.unit
    def test_unknown_mode_and_material(self, codec):
        snapshot, problems = codec.decode(_blob({"currentMode": "disco", "caseMaterial": "wood"}))

        assert snapshot.current_mode is Mode.STUDY
        assert snapshot.case_material is CaseMaterial.MATTE
        assert {p.field for p in problems} == {"currentMode", "caseMaterial"}

    @pytest.mark.unit
    def test_long_custom_name_truncated(self, codec):
        snapshot, problems = codec.decode(_blob({"customModeName": "Late Night Coding"}))
        assert snapshot.custom_mode_name == "Late Night C"
        assert problems == []

    @pytest.mark.unit
    def test_non_string_custom_name(self, codec):
        snapshot, problems = codec.decode(_blob({"customModeName": 42}))
        assert snapshot.custom_mode_name == "My Mode"
        assert [p.field for p in problems] == ["customModeName"]

    @pytest.mark.unit
    def test_modes_not_an_object(self, codec):
        snapshot, problems = codec.decode(_blob({"modes": [1, 2, 3]}))
        assert snapshot.modes == ModeRegistry.default_modes()
        assert [p.field for p in problems] == ["modes"]

    @pytest.mark.unit
    def test_unknown_mode_entries_ignored(self, codec):
        snapshot, problems = codec.decode(_blob({"modes": {"turbo": {"brightness": 1}}}))
        assert set(snapshot.modes) == set(Mode)
        assert problems == []

    @pytest.mark.unit
    def test_mode_entry_not_an_object(self, codec):
        snapshot, problems = codec.decode(_blob({"modes": {"party": "loud"}}))
        assert snapshot.modes[Mode.PARTY] == ModeRegistry.defaults_for("party")
        assert [p.field for p in problems] == ["modes.party"]

    @pytest.mark.unit
    def test_other_version_restores_recognisable_fields(self, codec):
        snapshot, problems = codec.decode(_blob({"currentMode": "sleep"}, version=3))
        assert snapshot.current_mode is Mode.SLEEP
        assert problems == []

    @pytest.mark.unit
    @pytest.mark.parametrize("version", ["2x", 1.5, None])
    def test_malformed_version_keeps_valid_state(self, codec, version):
        raw = json.dumps({"state": {"caseColor": "#CC0033", "caseMaterial": "metal"}, "version": version})

        snapshot, problems = codec.decode(raw)

        assert snapshot.case_color == "#CC0033"
        assert snapshot.case_material is CaseMaterial.METAL
        assert problems == []

    @pytest.mark.unit
    def test_missing_version_keeps_valid_state(self, codec):
        snapshot, problems = codec.decode(json.dumps({"state": {"currentMode": "party"}}))
        assert snapshot.current_mode is Mode.PARTY
        assert problems == []

    @pytest.mark.unit
    def test_field_problems_logged_as_one_summary(self, codec, caplog):
        raw = _blob({"caseColor": "#zzz", "currentMode": "disco", "caseMaterial": "metal"})

        with caplog.at_level(logging.WARNING, logger="focuscube.core.snapshot"):
            codec.decode(raw)

        summaries = [r.message for r in caplog.records if r.message.startswith("Failed 2 of 3")]
        assert len(summaries) == 1
        assert "caseColor" in summaries[0]
        assert "currentMode" in summaries[0]
