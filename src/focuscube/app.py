"""
Composition root for the Smart Focus Cube configurator.

Builds the snapshot backend, the ConfigStore and the ConnectionController
from an AppConfig and hands them out together. There is no module-level
store; every caller that needs one gets it from create_app().
"""

import logging
from dataclasses import dataclass

from focuscube.core import ConfigStore, ConnectionController, RandomSource, Scheduler
from focuscube.exceptions import ErrorContext
from focuscube.models import AppConfig
from focuscube.persistence import FileSnapshotStore, SnapshotStore
from focuscube.utils import setup_logging

logger = logging.getLogger(__name__)


@dataclass
class FocusCubeApp:
    """
    Container for the wired-up components.

    Architecture:
        FocusCubeApp
        ├── config: AppConfig
        ├── snapshots: SnapshotStore (file-backed by default)
        ├── store: ConfigStore (owns all configurator state)
        └── connection: ConnectionController (publishes into store)
    """

    config: AppConfig
    snapshots: SnapshotStore
    store: ConfigStore
    connection: ConnectionController

    def shutdown(self) -> None:
        """Cancel pending connection timers."""
        logger.info("Shutting down FocusCubeApp")
        self.connection.close()


def create_app(
    config: AppConfig | None = None,
    snapshots: SnapshotStore | None = None,
    scheduler: Scheduler | None = None,
    rng: RandomSource | None = None,
    configure_logging: bool = True,
) -> FocusCubeApp:
    """
    Build the application components.

    Args:
        config: Application configuration (defaults to AppConfig())
        snapshots: Snapshot backend (defaults to FileSnapshotStore(config.storage_dir))
        scheduler: Timer source for the connection simulation
        rng: Random source for connection outcomes
        configure_logging: Attach the rotating log file from config.log_level
            and config.log_file. Pass False when the host application owns
            logging setup.

    Returns:
        FocusCubeApp holding the store and connection controller
    """
    config = config or AppConfig()
    if configure_logging:
        setup_logging(config.log_level, config.log_file)

    with ErrorContext("build focuscube application", logger_instance=logger):
        if snapshots is None:
            snapshots = FileSnapshotStore(config.storage_dir)

        store = ConfigStore(
            snapshots,
            storage_key=config.storage_key,
            clamp_out_of_range=config.clamp_out_of_range,
        )
        connection = ConnectionController(
            store,
            scheduler=scheduler,
            rng=rng,
            latency=config.connect_latency,
            failure_probability=config.failure_probability,
            notification_timeout=config.notification_timeout,
        )

    if store.load_problems:
        logger.warning(
            f"Restored snapshot with {len(store.load_problems)} field(s) reset to defaults"
        )

    return FocusCubeApp(config=config, snapshots=snapshots, store=store, connection=connection)
