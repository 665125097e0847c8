"""Store events for the observer pattern.

Each ConfigStore command emits exactly one event after its mutation is
applied. Persistent events touch the saved snapshot; the others describe
ephemeral view or connection state.
"""

from enum import Enum


class StoreEvent(Enum):
    """Events emitted by ConfigStore."""

    # Persistent (written to the snapshot)
    MODE_CHANGED = "mode_changed"                  # currentMode switched
    CUSTOM_NAME_CHANGED = "custom_name_changed"    # Custom mode display name changed
    SETTINGS_UPDATED = "settings_updated"          # Fields of the current mode's settings changed
    MODE_RESET = "mode_reset"                      # Current mode restored to defaults
    CASE_CONFIG_CHANGED = "case_config_changed"    # Case color/material changed

    # Ephemeral (view state)
    HIGHLIGHT_CHANGED = "highlight_changed"        # Highlighted part set or cleared
    EXPLODED_TOGGLED = "exploded_toggled"          # Exploded view toggled
    GHOST_MODE_TOGGLED = "ghost_mode_toggled"      # Ghost mode toggled

    # Ephemeral (connection)
    CONNECTION_CHANGED = "connection_changed"      # Connection status changed
    NOTIFICATION_CHANGED = "notification_changed"  # Connection popup shown or hidden

    # Diagnostics
    VALUE_CLAMPED = "value_clamped"                # Out-of-range input was clamped
    SNAPSHOT_SAVED = "snapshot_saved"              # Snapshot written to the backing store
