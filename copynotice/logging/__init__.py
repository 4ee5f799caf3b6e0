"""
copynotice Logging Module

Provides structured JSON logging.
"""

from .logger import configure_logging, get_logger, set_level, StructuredFormatter

__all__ = ['configure_logging', 'get_logger', 'set_level', 'StructuredFormatter']
