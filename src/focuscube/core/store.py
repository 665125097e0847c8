"""Configuration store: the single owner of all configurator state."""

import logging
import math
from collections.abc import Mapping
from threading import Lock
from typing import Any

from pydantic import ValidationError

from focuscube.exceptions import (
    SettingsError,
    SnapshotLoadError,
    SnapshotWriteError,
    ValueOutOfRangeError,
    handle_errors,
)
from focuscube.models import (
    CUSTOM_MODE_NAME_MAX_LENGTH,
    DEFAULT_STORAGE_KEY,
    SETTING_BOUNDS,
    CaseMaterial,
    ConnectionStatus,
    HardwareConfig,
    Mode,
    ModeSettings,
    Part,
    PersistedSnapshot,
    normalize_hex,
)
from focuscube.persistence import InMemorySnapshotStore, SnapshotStore
from focuscube.protocols import StoreEvent, StoreObserver
from focuscube.registry import ModeRegistry
from focuscube.utils import ObserverManager

from .snapshot import SnapshotCodec, default_snapshot

logger = logging.getLogger(__name__)

# brightness 100% maps to this emissive intensity in the renderer
EMISSION_INTENSITY_SCALE = 4.0

# camelCase wire name -> field name, for update_mode_settings keys
_SETTINGS_ALIASES = {
    info.alias: name for name, info in ModeSettings.model_fields.items() if info.alias
}


class ConfigStore:
    """
    Mutable state container for the configurator.

    Owns the active mode, per-mode settings, case configuration, view flags
    and connection status. Consumers read through properties and change
    state only through commands; nothing else holds a copy that can drift.

    Persistence:
        The persisted subset (case color/material, modes, custom mode name,
        current mode) is loaded once at construction and written after
        every command that changes it. Loading never fails: missing or
        invalid fields fall back to defaults individually. Write failures
        are logged and swallowed.

    Validation:
        Unknown modes/materials and malformed colors raise immediately and
        leave state unchanged. Out-of-range numbers (and custom names over
        12 characters) are clamped with a VALUE_CLAMPED event, or rejected
        with ValueOutOfRangeError when clamp_out_of_range is False.

    Threading:
        Every command runs atomically under _lock. Observers are notified
        after the lock is released, so they may read from the store. Writes
        are serialized under _write_lock and tagged with a revision, so an
        older snapshot never overwrites a newer one.

    Usage Example:
        ```python
        store = ConfigStore(FileSnapshotStore(Path("~/.focuscube/storage")))
        store.register_observer(renderer)

        store.set_mode("sleep")
        store.update_mode_settings(brightness=40)
        store.effective_brightness_intensity()  # 1.6
        ```
    """

    def __init__(
        self,
        snapshots: SnapshotStore | None = None,
        storage_key: str = DEFAULT_STORAGE_KEY,
        clamp_out_of_range: bool = True,
    ):
        """
        Initialize the store and restore the persisted snapshot.

        Args:
            snapshots: Key-value backend (defaults to an in-memory store)
            storage_key: Key the snapshot is stored under
            clamp_out_of_range: Clamp (True) or reject (False) out-of-range values
        """
        self._snapshots = snapshots if snapshots is not None else InMemorySnapshotStore()
        self._codec = SnapshotCodec(storage_key)
        self._clamp = clamp_out_of_range

        self._lock = Lock()
        self._write_lock = Lock()
        self._revision = 0
        self._written_revision = 0

        # ObserverManager has its own lock - notifying happens after _lock is released
        self._observers = ObserverManager[StoreObserver](observer_type_name="store")

        snapshot, problems = self._load_snapshot()
        self.load_problems: list[SnapshotLoadError] = problems

        # Persisted
        self._current_mode: Mode = snapshot.current_mode
        self._custom_mode_name: str = snapshot.custom_mode_name
        self._modes: dict[Mode, ModeSettings] = dict(snapshot.modes)
        self._hardware = HardwareConfig(
            case_color=snapshot.case_color, case_material=snapshot.case_material
        )

        # Ephemeral
        self._highlighted_part_id: str | None = None
        self._is_exploded = False
        self._is_ghost_mode = False
        self._connection_status = ConnectionStatus.IDLE
        self._show_notification = False

        logger.info(
            f"ConfigStore initialized (mode={self._current_mode.value}, key='{storage_key}')"
        )

    # =================================================================
    # Event System
    # =================================================================

    def register_observer(self, observer: StoreObserver) -> None:
        self._observers.register(observer)

    def unregister_observer(self, observer: StoreObserver) -> None:
        self._observers.unregister(observer)

    def _notify(self, event: StoreEvent, **kwargs: Any) -> None:
        self._observers.notify("on_store_event", event, **kwargs)

    # =================================================================
    # Reads
    # =================================================================

    @property
    def current_mode(self) -> Mode:
        with self._lock:
            return self._current_mode

    @property
    def custom_mode_name(self) -> str:
        with self._lock:
            return self._custom_mode_name

    @property
    def modes(self) -> dict[Mode, ModeSettings]:
        """Copy of the modes table (entries are immutable)."""
        with self._lock:
            return dict(self._modes)

    @property
    def hardware_config(self) -> HardwareConfig:
        with self._lock:
            return self._hardware

    @property
    def case_color(self) -> str:
        with self._lock:
            return self._hardware.case_color

    @property
    def case_material(self) -> CaseMaterial:
        with self._lock:
            return self._hardware.case_material

    @property
    def highlighted_part_id(self) -> str | None:
        with self._lock:
            return self._highlighted_part_id

    @property
    def is_exploded(self) -> bool:
        with self._lock:
            return self._is_exploded

    @property
    def is_ghost_mode(self) -> bool:
        with self._lock:
            return self._is_ghost_mode

    @property
    def connection_status(self) -> ConnectionStatus:
        with self._lock:
            return self._connection_status

    @property
    def show_notification(self) -> bool:
        with self._lock:
            return self._show_notification

    def settings_for(self, mode: Mode | str) -> ModeSettings:
        mode = Mode.parse(mode)
        with self._lock:
            return self._modes[mode]

    def current_settings(self) -> ModeSettings:
        """Settings row for the active mode."""
        with self._lock:
            return self._modes[self._current_mode]

    def effective_led_color(self) -> str:
        return self.current_settings().led_color

    def effective_brightness_intensity(self) -> float:
        """Emissive intensity for the LED strip: brightness / 100 * 4."""
        return self.current_settings().brightness / 100 * EMISSION_INTENSITY_SCALE

    def mode_label(self) -> str:
        """Display label: the custom name for the custom mode, otherwise the mode name."""
        with self._lock:
            if self._current_mode is Mode.CUSTOM:
                return self._custom_mode_name
            return self._current_mode.value

    def highlighted_part(self) -> Part | None:
        """Catalog entry for the highlighted part, or None if unset or not in the catalog."""
        part_id = self.highlighted_part_id
        return ModeRegistry.find_part(part_id) if part_id is not None else None

    def snapshot(self) -> PersistedSnapshot:
        with self._lock:
            return self._snapshot_locked()

    # =================================================================
    # Persisted Commands
    # =================================================================

    def set_mode(self, mode: Mode | str) -> None:
        """
        Switch the active mode. The modes table is not touched.

        Raises:
            UnknownModeError: If mode is not one of the fixed modes
        """
        mode = Mode.parse(mode)
        with self._lock:
            self._current_mode = mode
            revision, snapshot = self._commit_locked()

        self._notify(StoreEvent.MODE_CHANGED, mode=mode)
        self._persist(revision, snapshot)
        logger.debug(f"Mode set to {mode.value}")

    def set_custom_mode_name(self, name: str) -> str:
        """
        Set the custom mode's display name (max 12 characters).

        Returns:
            The name actually stored (truncated under the clamp policy)

        Raises:
            TypeError: If name is not a string
            ValueOutOfRangeError: If name is too long and clamping is disabled
        """
        if not isinstance(name, str):
            raise TypeError(f"custom mode name must be a string, got {type(name).__name__}")

        clamped: list[ValueOutOfRangeError] = []
        if len(name) > CUSTOM_MODE_NAME_MAX_LENGTH:
            stored = name[:CUSTOM_MODE_NAME_MAX_LENGTH]
            error = ValueOutOfRangeError(
                "custom_mode_name",
                name,
                maximum=CUSTOM_MODE_NAME_MAX_LENGTH,
                clamped_to=stored if self._clamp else None,
            )
            if not self._clamp:
                raise error
            clamped.append(error)
            name = stored

        with self._lock:
            self._custom_mode_name = name
            revision, snapshot = self._commit_locked()

        self._notify(StoreEvent.CUSTOM_NAME_CHANGED, name=name)
        self._report_clamped(clamped)
        self._persist(revision, snapshot)
        return name

    def update_mode_settings(
        self, partial: Mapping[str, Any] | None = None, **fields: Any
    ) -> ModeSettings:
        """
        Merge fields into the active mode's settings.

        Unspecified fields and other modes are left untouched. Keys may be
        given as field names (``brightness``) or wire names (``ledColor``).

        Args:
            partial: Mapping of field -> value
            **fields: Field values as keyword arguments

        Returns:
            The active mode's settings after the update

        Raises:
            AttributeError: If a key is not a ModeSettings field
            ValueOutOfRangeError: If a value is out of bounds and clamping is disabled
            InvalidColorFormatError: If ledColor is malformed
            SettingsError: If a value has the wrong type
        """
        changes = self._resolve_setting_keys({**(partial or {}), **fields})
        if not changes:
            return self.current_settings()

        changes, clamped = self._check_bounds(changes)

        with self._lock:
            mode = self._current_mode
            merged = {**self._modes[mode].model_dump(), **changes}
            try:
                settings = ModeSettings.model_validate(merged)
            except ValidationError as e:
                raise SettingsError(
                    user_message=f"Invalid settings for mode '{mode.value}'",
                    technical_message=f"ModeSettings validation failed for {changes}: {e}",
                    recoverable=True,
                ) from e
            self._modes[mode] = settings
            revision, snapshot = self._commit_locked()

        self._notify(StoreEvent.SETTINGS_UPDATED, mode=mode, keys=list(changes), settings=settings)
        self._report_clamped(clamped)
        self._persist(revision, snapshot)
        logger.debug(f"Updated {mode.value} settings: {list(changes)}")
        return settings

    def reset_current_mode(self) -> ModeSettings:
        """
        Restore the active mode's settings to factory defaults.

        Other modes and the custom mode name are unaffected. Idempotent.
        """
        with self._lock:
            mode = self._current_mode
            settings = ModeRegistry.defaults_for(mode).model_copy()
            self._modes[mode] = settings
            revision, snapshot = self._commit_locked()

        self._notify(StoreEvent.MODE_RESET, mode=mode, settings=settings)
        self._persist(revision, snapshot)
        logger.info(f"Reset {mode.value} settings to defaults")
        return settings

    def set_case_config(self, color: str, material: CaseMaterial | str) -> None:
        """
        Set the case color and material. Modes are not affected.

        Any well-formed hex color is accepted, not only catalog colors.

        Raises:
            InvalidColorFormatError: If color is malformed
            UnknownMaterialError: If material is not one of the fixed materials
        """
        hardware = HardwareConfig(
            case_color=normalize_hex(color), case_material=CaseMaterial.parse(material)
        )
        if ModeRegistry.find_product_color(hardware.case_color) is None:
            logger.debug(f"Case color {hardware.case_color} is not a catalog color")

        with self._lock:
            self._hardware = hardware
            revision, snapshot = self._commit_locked()

        self._notify(
            StoreEvent.CASE_CONFIG_CHANGED,
            color=hardware.case_color,
            material=hardware.case_material,
        )
        self._persist(revision, snapshot)

    # =================================================================
    # Ephemeral Commands
    # =================================================================

    def set_highlighted_part(self, part_id: str | None) -> None:
        """
        Highlight a part, or clear the highlight with None.

        Any string is accepted; membership in the part catalog is not checked.
        """
        if part_id is not None and not isinstance(part_id, str):
            raise TypeError(f"part id must be a string or None, got {type(part_id).__name__}")

        with self._lock:
            if self._highlighted_part_id == part_id:
                return
            self._highlighted_part_id = part_id

        self._notify(StoreEvent.HIGHLIGHT_CHANGED, part_id=part_id)

    def toggle_exploded(self) -> bool:
        with self._lock:
            self._is_exploded = not self._is_exploded
            enabled = self._is_exploded

        self._notify(StoreEvent.EXPLODED_TOGGLED, enabled=enabled)
        return enabled

    def toggle_ghost_mode(self) -> bool:
        with self._lock:
            self._is_ghost_mode = not self._is_ghost_mode
            enabled = self._is_ghost_mode

        self._notify(StoreEvent.GHOST_MODE_TOGGLED, enabled=enabled)
        return enabled

    def apply_connection_state(
        self,
        status: ConnectionStatus | None = None,
        show_notification: bool | None = None,
    ) -> None:
        """
        Publish a connection transition. Called by ConnectionController.

        Args:
            status: New status (None = unchanged)
            show_notification: New popup visibility (None = unchanged)
        """
        with self._lock:
            previous = self._connection_status
            was_visible = self._show_notification
            if status is not None:
                self._connection_status = status
            if show_notification is not None:
                self._show_notification = show_notification
            current = self._connection_status
            visible = self._show_notification

        if current is not previous:
            self._notify(StoreEvent.CONNECTION_CHANGED, status=current, previous=previous)
        if visible != was_visible:
            self._notify(StoreEvent.NOTIFICATION_CHANGED, visible=visible)

    # =================================================================
    # Validation Helpers
    # =================================================================

    @staticmethod
    def _resolve_setting_keys(values: Mapping[str, Any]) -> dict[str, Any]:
        resolved = {}
        for key, value in values.items():
            name = _SETTINGS_ALIASES.get(key, key)
            if name not in ModeSettings.model_fields:
                raise AttributeError(f"'ModeSettings' has no field '{key}'")
            resolved[name] = value
        return resolved

    def _check_bounds(
        self, changes: dict[str, Any]
    ) -> tuple[dict[str, Any], list[ValueOutOfRangeError]]:
        """Clamp (or reject) numeric values outside SETTING_BOUNDS."""
        checked = dict(changes)
        clamped: list[ValueOutOfRangeError] = []

        for name, value in changes.items():
            if name not in SETTING_BOUNDS:
                continue
            # Non-numbers and NaN are left for model validation to reject
            if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
                continue

            minimum, maximum = SETTING_BOUNDS[name]
            # Infinity has no JSON form; rejected under either policy
            if math.isinf(value):
                raise ValueOutOfRangeError(name, value, minimum=minimum, maximum=maximum)

            bounded = value
            if minimum is not None:
                bounded = max(bounded, minimum)
            if maximum is not None:
                bounded = min(bounded, maximum)
            if bounded == value:
                continue

            if not self._clamp:
                raise ValueOutOfRangeError(name, value, minimum=minimum, maximum=maximum)
            clamped.append(
                ValueOutOfRangeError(name, value, minimum=minimum, maximum=maximum, clamped_to=bounded)
            )
            checked[name] = bounded

        return checked, clamped

    def _report_clamped(self, clamped: list[ValueOutOfRangeError]) -> None:
        if not clamped:
            return
        for error in clamped:
            logger.warning(error.user_message)
        self._notify(StoreEvent.VALUE_CLAMPED, errors=clamped)

    # =================================================================
    # Persistence
    # =================================================================

    def _snapshot_locked(self) -> PersistedSnapshot:
        return PersistedSnapshot(
            case_color=self._hardware.case_color,
            case_material=self._hardware.case_material,
            modes=dict(self._modes),
            custom_mode_name=self._custom_mode_name,
            current_mode=self._current_mode,
        )

    def _commit_locked(self) -> tuple[int, PersistedSnapshot]:
        """Bump the revision and capture the persisted subset. Call with _lock held."""
        self._revision += 1
        return self._revision, self._snapshot_locked()

    def _load_snapshot(self) -> tuple[PersistedSnapshot, list[SnapshotLoadError]]:
        raw = self._read_snapshot()
        if raw is _READ_FAILED:
            error = SnapshotLoadError(self._codec.key, "backing store could not be read")
            return default_snapshot(), [error]
        return self._codec.decode(raw)

    def _read_snapshot(self) -> Any:
        try:
            return self._snapshots.get(self._codec.key)
        except Exception as e:
            logger.error(f"Failed to read snapshot '{self._codec.key}': {e}", exc_info=True)
            return _READ_FAILED

    def _persist(self, revision: int, snapshot: PersistedSnapshot) -> None:
        with self._write_lock:
            if revision <= self._written_revision:
                logger.debug(f"Skipping stale snapshot revision {revision}")
                return
            if not self._write_snapshot(snapshot):
                return
            self._written_revision = revision

        self._notify(StoreEvent.SNAPSHOT_SAVED, key=self._codec.key)

    @handle_errors(operation_name="save snapshot", re_raise=False, fallback_value=False)
    def _write_snapshot(self, snapshot: PersistedSnapshot) -> bool:
        try:
            self._snapshots.set(self._codec.key, self._codec.encode(snapshot))
        except Exception as e:
            raise SnapshotWriteError(self._codec.key, str(e)) from e
        return True


_READ_FAILED = object()
