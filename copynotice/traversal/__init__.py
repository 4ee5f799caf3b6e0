"""
copynotice Traversal Module

Directory expansion and file matching.
"""

from .directory_matcher import DirectoryMatcher
from .match_scanner import MatchScanner

__all__ = ['DirectoryMatcher', 'MatchScanner']
