"""
copynotice Core Module

Provides the lifecycle base class, data models and the error taxonomy.
"""

from .base_class import AlgorithmBase
from .exceptions import CopyNoticeError, ConfigError, TraversalError, NoticeIOError
from .models import (
    DirectoryPair, FileTask, OverwriteMode, OverwritePolicy,
    DEFAULT_PREFIX, MAX_PREFIX_LENGTH, MAX_EXTENSION_LENGTH, NEWLINE
)

__all__ = [
    'AlgorithmBase',
    'CopyNoticeError', 'ConfigError', 'TraversalError', 'NoticeIOError',
    'DirectoryPair', 'FileTask', 'OverwriteMode', 'OverwritePolicy',
    'DEFAULT_PREFIX', 'MAX_PREFIX_LENGTH', 'MAX_EXTENSION_LENGTH', 'NEWLINE'
]
