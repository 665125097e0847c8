"""
Custom exception hierarchy for FocusCube.

## Exception Hierarchy

```
FocusCubeError (base)
├── ColorError
│   └── InvalidColorFormatError
├── ConfigurationError
│   ├── ConfigFileInvalidError
│   └── ConfigValidationError
├── SettingsError
│   ├── ValueOutOfRangeError
│   ├── UnknownModeError
│   └── UnknownMaterialError
└── SnapshotError
    ├── SnapshotLoadError
    └── SnapshotWriteError
```

All custom exceptions inherit from `FocusCubeError`, which provides
`user_message`, `technical_message`, `recoverable` and `recovery_hint`.

Color and settings errors are raised to the caller of the command that
received the bad value; the store's state is left unchanged. Snapshot
errors never escape the store: they are logged and defaults are used.
A failed device connection is not an error at all, it is the `failed`
connection status.

See `focuscube.exceptions.handlers` for utilities to handle these exceptions systematically.
"""

from .base import FocusCubeError
from .color import ColorError, InvalidColorFormatError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .handlers import (
    ErrorCollector,
    ErrorContext,
    collect_errors,
    handle_errors,
    wrap_pydantic_error,
    wrap_validation_error,
)
from .settings import SettingsError, UnknownMaterialError, UnknownModeError, ValueOutOfRangeError
from .snapshot import SnapshotError, SnapshotLoadError, SnapshotWriteError

__all__ = [
    # Base
    "FocusCubeError",
    # Color
    "ColorError",
    "InvalidColorFormatError",
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # Settings
    "SettingsError",
    "UnknownMaterialError",
    "UnknownModeError",
    "ValueOutOfRangeError",
    # Snapshot
    "SnapshotError",
    "SnapshotLoadError",
    "SnapshotWriteError",
    # Handlers
    "ErrorCollector",
    "ErrorContext",
    "collect_errors",
    "handle_errors",
    "wrap_pydantic_error",
    "wrap_validation_error",
]
