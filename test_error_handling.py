#!/usr/bin/env python3
"""
Tests for error reporting and logging setup
"""

import logging
import os
from unittest.mock import Mock

import pytest
from pydantic import ValidationError

from gradient_editor import logging_config
from gradient_editor.config import InitialStop
from gradient_editor.utils.error_handling import ErrorCategory, ErrorHandlingSystem, ErrorSeverity


def raise_and_capture(exception):
    try:
        raise exception
    except Exception as e:
        return e


def test_errors_are_classified():
    errors = ErrorHandlingSystem({'log_errors': False})

    record = errors.handle_error(raise_and_capture(KeyError('abc')), 'Store', 'find')
    assert record.category == ErrorCategory.STORE
    assert record.severity == ErrorSeverity.WARNING
    assert record.user_friendly_message == 'Color stop not found.'
    assert 'KeyError' in record.stack_trace

    record = errors.handle_error(RuntimeError('boom'), 'View', 'redraw', category=ErrorCategory.RENDERING)
    assert record.category == ErrorCategory.RENDERING
    assert record.severity == ErrorSeverity.ERROR


def test_validation_errors_are_configuration_errors():
    errors = ErrorHandlingSystem({'log_errors': False})

    with pytest.raises(ValidationError) as info:
        InitialStop(rgba=(0, 0, 0, 1.0), offset=-1)

    assert errors.handle_error(info.value).category == ErrorCategory.CONFIGURATION


def test_history_is_bounded_and_filterable():
    errors = ErrorHandlingSystem({'log_errors': False, 'max_error_history': 3})

    for index in range(5):
        errors.handle_error(ValueError(str(index)), 'Store', 'update')
    errors.handle_error(ZeroDivisionError(), 'Geometry', 'project')

    history = errors.get_error_history()
    assert len(history) == 3
    assert [record.message for record in history[:2]] == ['3', '4']
    assert len(errors.get_error_history(category=ErrorCategory.GEOMETRY)) == 1
    assert len(errors.get_error_history(limit=1)) == 1

    stats = errors.get_error_statistics()
    assert stats['total_errors'] == 6
    assert stats['by_component'] == {'Store': 5, 'Geometry': 1}


def test_clear_history():
    errors = ErrorHandlingSystem({'log_errors': False})
    errors.handle_error(ValueError('bad'))

    errors.clear_error_history()
    assert errors.get_error_history() == []
    assert errors.get_error_statistics()['total_errors'] == 0


def test_notification_failures_are_contained():
    errors = ErrorHandlingSystem({'log_errors': False})
    healthy = Mock()
    errors.add_notification_callback(Mock(side_effect=RuntimeError('listener down')))
    errors.add_notification_callback(healthy)

    record = errors.handle_error(ValueError('bad'))

    healthy.assert_called_once_with(record)


def test_errors_are_logged(caplog):
    errors = ErrorHandlingSystem()

    with caplog.at_level(logging.WARNING, logger='gradient_editor.utils.error_handling'):
        record = errors.handle_error(KeyError('abc'), 'Store', 'find')

    assert record.error_id in caplog.text
    assert 'Component: Store' in caplog.text


@pytest.fixture
def fresh_logging(monkeypatch):
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    monkeypatch.setattr(logging_config, '_LOGGING_INITIALIZED', False)
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def test_init_logging_creates_file_and_prunes_old_logs(tmp_path, fresh_logging):
    for index in range(4):
        old = tmp_path / f"gradient_editor_2020010{index}_000000.log"
        old.write_text("old")
        os.utime(old, (1_600_000_000 + index, 1_600_000_000 + index))

    log_file = logging_config.init_logging(tmp_path, keep_count=2)

    assert log_file is not None and log_file.exists()
    remaining = sorted(path.name for path in tmp_path.glob("gradient_editor_*.log"))
    assert "gradient_editor_20200102_000000.log" in remaining
    assert "gradient_editor_20200103_000000.log" in remaining
    assert "gradient_editor_20200100_000000.log" not in remaining
    assert len(remaining) == 3

    assert logging_config.init_logging(tmp_path) is None


def test_pointer_chatter_is_filtered():
    chatter_filter = logging_config._SuppressPointerChatterFilter()

    def record(message):
        return logging.LogRecord('test', logging.DEBUG, __file__, 1, message, None, None)

    assert not chatter_filter.filter(record("Dropped pointer-down on end: container origin unavailable"))
    assert not chatter_filter.filter(record("update_offset ignored unknown stop abc"))
    assert chatter_filter.filter(record("Added color stop abc at 50%"))
