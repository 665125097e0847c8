"""
Centralized error handling utilities.

Layers:

1. **Custom Exceptions** - Typed, user-friendly error classes (see base, color, settings, snapshot)
2. **Error Context** - Preserve technical details for logging, show friendly messages to users
3. **Error Isolation** - One failure shouldn't cascade to others

## Handling Patterns

| Pattern | Code |
|---------|------|
| Log and swallow (persistence writes) | `@handle_errors(operation_name="save snapshot", re_raise=False)` |
| Log and re-raise | `@handle_errors(operation_name="init", re_raise=True)` |
| Try multiple ops, collect errors | `collector = collect_errors("restore snapshot"); with collector.try_operation(...): ...` |
| Critical section with auto-logging | `with ErrorContext("build store"): ...` |

## Example: Field-by-field Recovery

```python
from focuscube.exceptions import collect_errors

collector = collect_errors("restore snapshot")
for name in ("caseColor", "caseMaterial"):
    with collector.try_operation(name):
        restored[name] = validate(name, raw[name])

if collector.has_errors:
    logger.warning(collector.get_summary())
```
"""

import logging
from functools import wraps
from typing import Callable, Optional, TypeVar

from .base import FocusCubeError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .snapshot import SnapshotLoadError


logger = logging.getLogger(__name__)

T = TypeVar('T')


def handle_errors(
    *,
    operation_name: str,
    fallback_value: Optional[T] = None,
    re_raise: bool = True,
    log_level: int = logging.ERROR
) -> Callable:
    """
    Decorator for consistent error handling.

    Args:
        operation_name: Name of the operation for logging (e.g., "save snapshot")
        fallback_value: Value to return if error occurs and re_raise=False
        re_raise: Whether to re-raise the exception after handling
        log_level: Logging level for the error (default: ERROR)

    Example:
        ```python
        @handle_errors(operation_name="save snapshot", re_raise=False)
        def _write_snapshot(self, payload: str) -> None:
            self._snapshots.set(self._key, payload)
        ```

    Returns:
        Decorated function
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)

            except FocusCubeError as e:
                logger.log(log_level, f"Failed to {operation_name}: {e.technical_message}")

                if re_raise:
                    raise
                return fallback_value

            except Exception as e:
                logger.log(
                    log_level,
                    f"Unexpected error during {operation_name}: {e}",
                    exc_info=True
                )

                if re_raise:
                    raise
                return fallback_value

        return wrapper
    return decorator


class ErrorContext:
    """
    Context manager for error handling with automatic logging.

    Example:
        ```python
        with ErrorContext("build application") as ctx:
            app = create_app(config)

        if ctx.error:
            print(f"Failed: {ctx.error}")
        ```
    """

    def __init__(
        self,
        operation: str,
        logger_instance: Optional[logging.Logger] = None,
        re_raise: bool = True
    ):
        """
        Initialize error context.

        Args:
            operation: Description of the operation
            logger_instance: Logger to use (defaults to module logger)
            re_raise: Whether to re-raise exceptions
        """
        self.operation = operation
        self.logger = logger_instance or logger
        self.re_raise = re_raise
        self.error: Optional[Exception] = None

    def __enter__(self):
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.logger.debug(f"Completed: {self.operation}")
            return False

        self.error = exc_val

        if isinstance(exc_val, FocusCubeError):
            self.logger.error(
                f"Failed to {self.operation}: {exc_val.technical_message}"
            )
        else:
            self.logger.error(
                f"Failed to {self.operation}: {exc_val}",
                exc_info=True
            )

        # True suppresses the exception
        return not self.re_raise


def wrap_pydantic_error(error: Exception, file_path: str) -> ConfigurationError:
    """
    Convert Pydantic validation errors raised while loading a config file.

    Args:
        error: The Pydantic ValidationError
        file_path: Path to the config file that failed validation

    Returns:
        A ConfigurationError with appropriate type and message
    """
    from pydantic import ValidationError

    error_msg = str(error)

    # Format: "Invalid JSON: <actual error> [type=json_invalid, ..."
    if "Invalid JSON" in error_msg or "json_invalid" in error_msg:
        if "Invalid JSON:" in error_msg:
            parse_error = error_msg.split("Invalid JSON:")[1].split("[type=")[0].strip()
        else:
            parse_error = error_msg

        return ConfigFileInvalidError(file_path, parse_error)

    if isinstance(error, ValidationError):
        errors = error.errors()
        if len(errors) == 1:
            first_error = errors[0]
            field = ".".join(str(loc) for loc in first_error.get('loc', ('unknown',)))
            return ConfigValidationError(
                field=field,
                value=first_error.get('input', None),
                error_msg=first_error.get('msg', 'validation failed'),
                file_path=file_path
            )
        if errors:
            error_lines = []
            for err in errors:
                field = ".".join(str(loc) for loc in err.get('loc', ('unknown',)))
                error_lines.append(f"  - {field}: {err.get('msg', 'validation failed')}")

            return ConfigValidationError(
                field="multiple fields",
                value=None,
                error_msg=f"{len(errors)} validation errors:\n" + "\n".join(error_lines),
                file_path=file_path
            )

    return ConfigValidationError(field="unknown", value=None, error_msg=error_msg, file_path=file_path)


def wrap_validation_error(error: Exception, key: str, field: Optional[str] = None) -> SnapshotLoadError:
    """
    Convert a Pydantic validation or JSON error into a SnapshotLoadError.

    Args:
        error: The original exception (usually pydantic.ValidationError)
        key: Storage key of the snapshot being restored
        field: Snapshot field that failed, or None for the whole record

    Returns:
        A SnapshotLoadError describing the first problem found
    """
    from pydantic import ValidationError

    if isinstance(error, ValidationError):
        errors = error.errors()
        if errors:
            first_error = errors[0]
            loc = ".".join(str(part) for part in first_error.get('loc', ()))
            reason = first_error.get('msg', 'validation failed')
            if loc:
                reason = f"{loc}: {reason}"
            if len(errors) > 1:
                reason += f" (and {len(errors) - 1} more)"
            return SnapshotLoadError(key, reason, field=field)

    return SnapshotLoadError(key, str(error) or type(error).__name__, field=field)


def collect_errors(operation: str) -> "ErrorCollector":
    """
    Create an error collector for batch operations.

    Args:
        operation: Description of the overall operation

    Returns:
        ErrorCollector instance
    """
    return ErrorCollector(operation)


class ErrorCollector:
    """
    Collects multiple errors during batch operations.

    Allows operations to continue even if some fail, then
    report all failures at once.
    """

    def __init__(self, operation: str):
        self.operation = operation
        self.errors: list[tuple[str, Exception]] = []
        self.success_count = 0

    @property
    def has_errors(self) -> bool:
        """Check if any errors were collected."""
        return len(self.errors) > 0

    @property
    def error_count(self) -> int:
        """Get the number of errors collected."""
        return len(self.errors)

    def try_operation(self, sub_operation: str):
        """
        Context manager for a single operation within the batch.

        Args:
            sub_operation: Description of this specific operation

        Returns:
            Context manager that catches and stores errors
        """
        return self._OperationContext(self, sub_operation)

    def get_summary(self) -> str:
        """Get a multi-line summary of collected errors."""
        if not self.has_errors:
            return f"All operations completed successfully ({self.success_count} total)"

        summary = f"Failed {self.error_count} of {self.error_count + self.success_count} operations while trying to {self.operation}:\n"
        for sub_op, error in self.errors:
            if isinstance(error, FocusCubeError):
                summary += f"  - {sub_op}: {error.user_message}\n"
            else:
                summary += f"  - {sub_op}: {error}\n"

        return summary.rstrip()

    class _OperationContext:
        """Internal context manager for individual operations."""

        def __init__(self, collector: "ErrorCollector", sub_operation: str):
            self.collector = collector
            self.sub_operation = sub_operation

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            if exc_type is None:
                self.collector.success_count += 1
                return False

            self.collector.errors.append((self.sub_operation, exc_val))
            return True
