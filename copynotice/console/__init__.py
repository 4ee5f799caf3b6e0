"""
copynotice Console Module
"""

from .console import Console

__all__ = ['Console']
