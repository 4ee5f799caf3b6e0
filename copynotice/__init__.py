"""
copynotice — Source Code Notice Writer

Copies source trees into mirrored output trees, writing a comment notice
at the top of every matched file.
"""

from .__version__ import __version__

__all__ = [
    '__version__',
    'core',
    'config',
    'console',
    'logging',
    'rewriter',
    'traversal',
    'utils'
]
