"""
Utilities Package for the Gradient Editor
This package provides helper classes shared by the editor components.
"""

from .error_handling import (
    ErrorHandlingSystem,
    ErrorSeverity,
    ErrorCategory,
    ErrorContext,
    ErrorRecord,
)

__all__ = [
    # Error Handling
    'ErrorHandlingSystem',
    'ErrorSeverity',
    'ErrorCategory',
    'ErrorContext',
    'ErrorRecord',
]
