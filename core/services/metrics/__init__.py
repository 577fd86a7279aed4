"""
Structured logging for parsing and generation events.
"""
from .logger import LOGGER_NAMESPACE, StructuredLogger, StructuredFormatter, configure_logging

__all__ = [
    'LOGGER_NAMESPACE',
    'StructuredLogger',
    'StructuredFormatter',
    'configure_logging'
]
