"""Smart Focus Cube configurator: state, persistence and connection simulation."""

__version__ = "0.1.0"

from focuscube.app import FocusCubeApp, create_app
from focuscube.core import ConfigStore, ConnectionController
from focuscube.models import AppConfig, CaseMaterial, ConnectionStatus, Mode, ModeSettings

__all__ = [
    "AppConfig",
    "CaseMaterial",
    "ConfigStore",
    "ConnectionController",
    "ConnectionStatus",
    "FocusCubeApp",
    "Mode",
    "ModeSettings",
    "create_app",
]
