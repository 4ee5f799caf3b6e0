"""
copynotice Utilities

Configuration loading and filesystem helpers.
"""

from .config_loader import ConfigLoader
from .fs import ensure_directory, is_directory, is_hidden, listing_root

__all__ = ['ConfigLoader', 'ensure_directory', 'is_directory', 'is_hidden', 'listing_root']
