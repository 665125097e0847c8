"""Encoding and tolerant decoding of the persisted snapshot.

Decoding never raises. Each top-level field, and each mode entry inside
`modes`, is restored independently; anything missing or invalid falls
back to its default, so a corrupt `modes` entry cannot cost the user
their case color.
"""

import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from focuscube.exceptions import ErrorCollector, SnapshotLoadError, collect_errors, wrap_validation_error
from focuscube.models import (
    CUSTOM_MODE_NAME_MAX_LENGTH,
    SNAPSHOT_VERSION,
    CaseMaterial,
    Mode,
    ModeSettings,
    PersistedSnapshot,
    normalize_hex,
)
from focuscube.registry import DEFAULT_CUSTOM_MODE_NAME, DEFAULT_MODE, ModeRegistry

logger = logging.getLogger(__name__)

_RECORD = TypeAdapter(dict[str, Any])


def default_snapshot() -> PersistedSnapshot:
    """Snapshot holding the factory value of every persisted field."""
    return PersistedSnapshot(
        case_color=ModeRegistry.default_case_color(),
        case_material=CaseMaterial.MATTE,
        modes=ModeRegistry.default_modes(),
        custom_mode_name=DEFAULT_CUSTOM_MODE_NAME,
        current_mode=DEFAULT_MODE,
    )


def _require_str(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{field} must be a string, got {type(value).__name__}")
    return value


class SnapshotCodec:
    """Converts PersistedSnapshot to and from the stored blob for one key."""

    def __init__(self, key: str):
        self.key = key

    def encode(self, snapshot: PersistedSnapshot) -> str:
        return snapshot.to_json()

    def decode(self, raw: str | None) -> tuple[PersistedSnapshot, list[SnapshotLoadError]]:
        """
        Restore a snapshot, falling back to defaults field by field.

        Args:
            raw: Stored blob, or None if the key was absent

        Returns:
            Tuple of (snapshot, problems). Problems are informational;
            the returned snapshot is always complete and valid.
        """
        defaults = default_snapshot()
        if raw is None:
            logger.info(f"No stored snapshot under '{self.key}', using defaults")
            return defaults, []

        try:
            record = _RECORD.validate_json(raw)
        except ValidationError as e:
            error = wrap_validation_error(e, self.key)
            logger.warning(error.technical_message)
            return defaults, [error]

        state = record.get("state")
        if not isinstance(state, dict):
            error = SnapshotLoadError(self.key, "'state' must be an object")
            logger.warning(error.technical_message)
            return defaults, [error]

        # A missing or malformed version is treated like any other mismatch
        version = record.get("version")
        if version != SNAPSHOT_VERSION:
            logger.warning(
                f"Snapshot '{self.key}' has version {version!r}, expected {SNAPSHOT_VERSION}; "
                "restoring recognisable fields only"
            )

        restored: dict[str, Any] = {}
        collector = collect_errors(f"restore snapshot '{self.key}'")

        # (wire key, model field, converter)
        fields = (
            ("caseColor", "case_color", lambda v: normalize_hex(_require_str(v, "caseColor"))),
            ("caseMaterial", "case_material", CaseMaterial.parse),
            ("customModeName", "custom_mode_name", self._decode_custom_name),
            ("currentMode", "current_mode", Mode.parse),
        )
        for wire_key, field, convert in fields:
            if wire_key not in state:
                continue
            with collector.try_operation(wire_key):
                restored[field] = convert(state[wire_key])

        restored["modes"] = self._decode_modes(state.get("modes"), collector)

        problems = [
            error if isinstance(error, SnapshotLoadError) else wrap_validation_error(error, self.key, field=name)
            for name, error in collector.errors
        ]
        if collector.has_errors:
            logger.warning(collector.get_summary())

        snapshot = defaults.model_copy(update=restored)
        logger.info(
            f"Restored snapshot '{self.key}' "
            f"({collector.success_count} field(s) restored, {collector.error_count} defaulted)"
        )
        return snapshot, problems

    def _decode_modes(self, raw_modes: Any, collector: ErrorCollector) -> dict[Mode, ModeSettings]:
        modes = ModeRegistry.default_modes()
        if raw_modes is None:
            return modes

        if not isinstance(raw_modes, dict):
            collector.errors.append(
                ("modes", SnapshotLoadError(self.key, "expected an object", field="modes"))
            )
            return modes

        for mode in Mode:
            entry = raw_modes.get(mode.value)
            if entry is None:
                continue
            with collector.try_operation(f"modes.{mode.value}"):
                if not isinstance(entry, dict):
                    raise TypeError(f"expected an object, got {type(entry).__name__}")
                # Fields missing from the stored entry keep their default
                merged = {**modes[mode].model_dump(by_alias=True), **entry}
                modes[mode] = ModeSettings.model_validate(merged)
        return modes

    @staticmethod
    def _decode_custom_name(value: Any) -> str:
        name = _require_str(value, "customModeName")
        return name[:CUSTOM_MODE_NAME_MAX_LENGTH]
