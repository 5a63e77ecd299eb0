"""
Error Handling Utilities
This module provides centralized, fail-soft error reporting for the editor.

Pointer handlers and store subscribers never let exceptions escape into the
interaction loop; failures are classified, logged and kept in a bounded
history instead.
"""

import logging
import traceback
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Error severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for classification."""
    GEOMETRY = "geometry"
    STORE = "store"
    INTERACTION = "interaction"
    RENDERING = "rendering"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


@dataclass
class ErrorContext:
    """Context information for an error."""
    component: str
    operation: str
    additional_data: Optional[Dict[str, Any]] = None


@dataclass
class ErrorRecord:
    """Record of an error occurrence."""
    error_id: str
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    original_exception: Optional[BaseException]
    context: ErrorContext
    timestamp: datetime
    stack_trace: Optional[str] = None
    user_friendly_message: Optional[str] = None


# exception type name -> (category, severity, user message)
ERROR_TRANSLATIONS: Dict[str, Tuple[ErrorCategory, ErrorSeverity, str]] = {
    'ZeroDivisionError': (
        ErrorCategory.GEOMETRY, ErrorSeverity.WARNING,
        'Gradient axis geometry could not be evaluated.',
    ),
    'KeyError': (
        ErrorCategory.STORE, ErrorSeverity.WARNING,
        'Color stop not found.',
    ),
    'ValueError': (
        ErrorCategory.STORE, ErrorSeverity.ERROR,
        'Invalid color stop data.',
    ),
    'ValidationError': (
        ErrorCategory.CONFIGURATION, ErrorSeverity.ERROR,
        'Editor settings are invalid.',
    ),
}


class ErrorHandlingSystem:
    """
    Centralized error handling system for editor components.
    Classifies errors, logs them and notifies registered callbacks.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the error handling system.

        Args:
            config: Configuration dictionary
        """
        self.config = config or {}

        self.error_history: List[ErrorRecord] = []
        self.max_history_size = self.config.get('max_error_history', 100)
        self.error_statistics: Dict[str, Any] = self._empty_statistics()

        self.log_errors = self.config.get('log_errors', True)
        self.notification_callbacks: List[Callable[[ErrorRecord], None]] = []
        self._counter = 0

        logger.debug("ErrorHandlingSystem initialized")

    @staticmethod
    def _empty_statistics() -> Dict[str, Any]:
        return {
            'total_errors': 0,
            'by_category': {},
            'by_severity': {},
            'by_component': {},
        }

    def handle_error(self,
                     exception: BaseException,
                     component: str = "unknown",
                     operation: str = "unknown",
                     category: Optional[ErrorCategory] = None,
                     additional_data: Optional[Dict[str, Any]] = None) -> ErrorRecord:
        """
        Record an error without raising it.

        Args:
            exception: The exception that occurred
            component: Component where error occurred
            operation: Operation being performed
            category: Explicit category, overriding classification
            additional_data: Additional context data

        Returns:
            ErrorRecord with all error information
        """
        self._counter += 1
        error_id = f"ERR_{int(datetime.now().timestamp())}_{self._counter}"

        guessed_category, severity, user_message = self._classify_error(exception)

        error_record = ErrorRecord(
            error_id=error_id,
            category=category or guessed_category,
            severity=severity,
            message=str(exception),
            original_exception=exception,
            context=ErrorContext(component, operation, additional_data),
            timestamp=datetime.now(),
            stack_trace=''.join(traceback.format_exception(
                type(exception), exception, exception.__traceback__)),
            user_friendly_message=user_message,
        )

        self._store_error(error_record)
        self._log_error(error_record)
        self._send_notifications(error_record)
        return error_record

    def _classify_error(self, exception: BaseException) -> Tuple[ErrorCategory, ErrorSeverity, str]:
        """Classify error and generate user-friendly message."""
        for cls in type(exception).__mro__:
            if cls.__name__ in ERROR_TRANSLATIONS:
                return ERROR_TRANSLATIONS[cls.__name__]
        return ErrorCategory.UNKNOWN, ErrorSeverity.ERROR, f"An error occurred: {exception}"

    def _store_error(self, error_record: ErrorRecord):
        """Store error record in history."""
        self.error_history.append(error_record)
        if len(self.error_history) > self.max_history_size:
            self.error_history.pop(0)

        stats = self.error_statistics
        stats['total_errors'] += 1
        for key, value in (('by_category', error_record.category.value),
                           ('by_severity', error_record.severity.value),
                           ('by_component', error_record.context.component)):
            stats[key][value] = stats[key].get(value, 0) + 1

    def _log_error(self, error_record: ErrorRecord):
        """Log error with appropriate level."""
        if not self.log_errors:
            return

        log_message = (f"{error_record.error_id} [{error_record.category.value}] {error_record.message}"
                       f" (Component: {error_record.context.component},"
                       f" Operation: {error_record.context.operation})")

        if error_record.severity == ErrorSeverity.CRITICAL:
            logger.critical(log_message)
        elif error_record.severity == ErrorSeverity.ERROR:
            logger.error(log_message)
        elif error_record.severity == ErrorSeverity.WARNING:
            logger.warning(log_message)
        else:
            logger.info(log_message)

        if error_record.stack_trace and error_record.severity in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL):
            logger.debug(f"Stack trace for {error_record.error_id}:\n{error_record.stack_trace}")

    def _send_notifications(self, error_record: ErrorRecord):
        """Send error notifications to registered callbacks."""
        for callback in self.notification_callbacks:
            try:
                callback(error_record)
            except Exception as e:
                logger.error(f"Error in notification callback: {e}")

    def add_notification_callback(self, callback: Callable[[ErrorRecord], None]):
        """Add a callback for error notifications."""
        self.notification_callbacks.append(callback)

    def get_error_history(self, limit: Optional[int] = None,
                          category: Optional[ErrorCategory] = None) -> List[ErrorRecord]:
        """
        Get error history with optional filtering.

        Args:
            limit: Maximum number of errors to return
            category: Filter by error category

        Returns:
            Filtered list of error records
        """
        errors = list(self.error_history)
        if category:
            errors = [e for e in errors if e.category == category]
        if limit:
            errors = errors[-limit:]
        return errors

    def get_error_statistics(self) -> Dict[str, Any]:
        """Get error statistics."""
        return {key: (dict(value) if isinstance(value, dict) else value)
                for key, value in self.error_statistics.items()}

    def clear_error_history(self):
        """Clear error history and statistics."""
        self.error_history = []
        self.error_statistics = self._empty_statistics()
        logger.info("Error history cleared")
