"""Observer protocol for store changes."""

from typing import Protocol, runtime_checkable

from .events import StoreEvent


@runtime_checkable
class StoreObserver(Protocol):
    """
    Observer that receives ConfigStore events.

    The rendering layer and other consumers implement this to react to
    state changes without polling.
    """

    def on_store_event(self, event: StoreEvent, **kwargs) -> None:
        """
        Handle a store event.

        Args:
            event: The type of store event
            **kwargs: Event-specific data:
                - MODE_CHANGED: 'mode'
                - CUSTOM_NAME_CHANGED: 'name'
                - SETTINGS_UPDATED: 'mode', 'keys' (changed field names), 'settings'
                - MODE_RESET: 'mode', 'settings'
                - CASE_CONFIG_CHANGED: 'color', 'material'
                - HIGHLIGHT_CHANGED: 'part_id' (None when cleared)
                - EXPLODED_TOGGLED / GHOST_MODE_TOGGLED: 'enabled'
                - CONNECTION_CHANGED: 'status', 'previous'
                - NOTIFICATION_CHANGED: 'visible'
                - VALUE_CLAMPED: 'errors' (list of ValueOutOfRangeError)
                - SNAPSHOT_SAVED: 'key'

        Threading:
            Called on the thread that issued the command (or the scheduler
            thread for connection transitions), after the store lock is
            released. It is safe to read from the store here.

        Error Handling:
            Exceptions raised by observers are caught and logged. They do not
            propagate to the caller.
        """
        ...
