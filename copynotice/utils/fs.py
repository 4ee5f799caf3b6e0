"""
Filesystem Helpers

Host-semantics checks shared by the directory matcher and the match scanner.
"""

import os
import stat

# Windows FILE_ATTRIBUTE_HIDDEN; st_file_attributes only exists there
_HIDDEN_ATTRIBUTE = getattr(stat, "FILE_ATTRIBUTE_HIDDEN", 0x2)


def is_hidden(entry: os.DirEntry) -> bool:
    """Dot-files everywhere, plus the hidden attribute on Windows."""
    if entry.name.startswith("."):
        return True
    if os.name != "nt":
        return False
    try:
        attributes = getattr(entry.stat(follow_symlinks=False), "st_file_attributes", 0)
    except OSError:
        return False
    return bool(attributes & _HIDDEN_ATTRIBUTE)


def is_directory(entry: os.DirEntry, follow_symlinks: bool = True) -> bool:
    """
    Raises:
        OSError: If the entry cannot be inspected (e.g. ELOOP)
    """
    return entry.is_dir(follow_symlinks=follow_symlinks)


def listing_root(path: str) -> str:
    """Directory to enumerate for `path`; empty means the working directory."""
    return path or os.curdir


def ensure_directory(path: str) -> bool:
    """
    Create `path` (not its parents).

    Returns:
        True if the directory was created, False if it already existed

    Raises:
        OSError: Any failure other than "already exists"
    """
    try:
        os.mkdir(path)
    except FileExistsError:
        if not os.path.isdir(path):
            raise
        return False
    return True
