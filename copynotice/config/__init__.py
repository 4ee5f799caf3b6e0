"""
copynotice Config Module

Run settings and their validation.
"""

from .settings import RunSettings, build_settings, parse_directory, read_notice_file

__all__ = ['RunSettings', 'build_settings', 'parse_directory', 'read_notice_file']
