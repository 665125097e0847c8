"""Unit tests for utility functions."""

import logging
import logging.handlers
from pathlib import Path
from unittest.mock import Mock

import pytest

from focuscube.protocols import StoreEvent, StoreObserver
from focuscube.utils import ObserverManager, setup_logging


class TestObserverManager:
    """Test ObserverManager."""

    @pytest.mark.unit
    def test_register_is_idempotent(self):
        manager = ObserverManager[StoreObserver](observer_type_name="store")
        observer = Mock(spec=StoreObserver)

        manager.register(observer)
        manager.register(observer)

        assert len(manager) == 1
        assert observer in manager

    @pytest.mark.unit
    def test_notify_passes_arguments(self):
        manager = ObserverManager[StoreObserver]()
        observer = Mock(spec=StoreObserver)
        manager.register(observer)

        manager.notify("on_store_event", StoreEvent.MODE_RESET, mode="study")

        observer.on_store_event.assert_called_once_with(StoreEvent.MODE_RESET, mode="study")

    @pytest.mark.unit
    def test_failing_observer_does_not_block_others(self):
        manager = ObserverManager[StoreObserver]()
        broken = Mock(spec=StoreObserver)
        broken.on_store_event.side_effect = RuntimeError("boom")
        healthy = Mock(spec=StoreObserver)
        manager.register(broken)
        manager.register(healthy)

        manager.notify("on_store_event", StoreEvent.EXPLODED_TOGGLED, enabled=True)

        healthy.on_store_event.assert_called_once()

    @pytest.mark.unit
    def test_missing_callback_logged(self, caplog):
        manager = ObserverManager[object](observer_type_name="store")
        manager.register(object())

        with caplog.at_level(logging.ERROR):
            manager.notify("on_store_event", StoreEvent.MODE_RESET)

        assert "has no method 'on_store_event'" in caplog.text

    @pytest.mark.unit
    def test_unregister_and_clear(self):
        manager = ObserverManager[StoreObserver]()
        first, second = Mock(spec=StoreObserver), Mock(spec=StoreObserver)
        manager.register(first)
        manager.register(second)

        manager.unregister(first)
        manager.unregister(first)
        assert first not in manager

        manager.clear()
        assert len(manager) == 0

    @pytest.mark.unit
    def test_observer_may_unregister_during_notify(self):
        manager = ObserverManager[StoreObserver]()

        class OneShot:
            def __init__(self):
                self.calls = 0

            def on_store_event(self, event, **kwargs):
                self.calls += 1
                manager.unregister(self)

        observer = OneShot()
        manager.register(observer)
        manager.notify("on_store_event", StoreEvent.MODE_RESET)
        manager.notify("on_store_event", StoreEvent.MODE_RESET)

        assert observer.calls == 1


class TestSetupLogging:
    """Test setup_logging."""

    @pytest.mark.unit
    def test_writes_to_given_file(self, temp_dir, restore_root_logger):
        log_path = setup_logging("DEBUG", temp_dir / "logs" / "focuscube.log")

        logging.getLogger("focuscube.test").debug("hello from test")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert log_path == temp_dir / "logs" / "focuscube.log"
        assert "hello from test" in log_path.read_text()
        assert logging.getLogger().level == logging.DEBUG

    @pytest.mark.unit
    def test_rotating_handler_limits(self, temp_dir, restore_root_logger):
        setup_logging("info", temp_dir / "app.log")

        handler = logging.getLogger().handlers[-1]
        assert isinstance(handler, logging.handlers.RotatingFileHandler)
        assert handler.maxBytes == 10 * 1024 * 1024
        assert handler.backupCount == 5

    @pytest.mark.unit
    def test_unknown_level(self, temp_dir):
        with pytest.raises(ValueError):
            setup_logging("LOUD", temp_dir / "app.log")

    @pytest.mark.unit
    def test_repeat_call_does_not_duplicate_handler(self, temp_dir, restore_root_logger):
        log_path = temp_dir / "app.log"
        setup_logging("INFO", log_path)
        setup_logging("DEBUG", log_path)

        handlers = [
            h for h in logging.getLogger().handlers
            if isinstance(h, logging.handlers.RotatingFileHandler)
            and Path(h.baseFilename).resolve() == log_path.resolve()
        ]
        assert len(handlers) == 1
        assert handlers[0].level == logging.DEBUG

        logging.getLogger("focuscube.test").warning("logged once")
        handlers[0].flush()
        assert log_path.read_text().count("logged once") == 1
