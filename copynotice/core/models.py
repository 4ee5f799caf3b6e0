"""
copynotice Data Models

Dataclasses shared by the traversal and rewrite components.
"""

import os
from dataclasses import dataclass
from enum import Enum

NEWLINE = b"\r\n"
DEFAULT_PREFIX = b"// "
MAX_PREFIX_LENGTH = 15  # bytes
MAX_EXTENSION_LENGTH = 15  # characters
ILLEGAL_PATH_CHARS = '<>:"|?*'
ILLEGAL_EXTENSION_CHARS = '<>:"/\\|?*.'


class OverwriteMode(Enum):
    """Whether existing destination files need confirmation"""
    ASK = "ask"
    ALWAYS = "always"


@dataclass
class OverwritePolicy:
    """
    Sticky overwrite decision for a single run.

    Starts in ASK mode; once the user confirms an overwrite it switches to
    ALWAYS and stays there for the remainder of the run.
    """
    mode: OverwriteMode = OverwriteMode.ASK

    def __post_init__(self):
        if isinstance(self.mode, str):
            self.mode = OverwriteMode(self.mode)

    @property
    def always(self) -> bool:
        return self.mode is OverwriteMode.ALWAYS

    def set_always(self) -> None:
        self.mode = OverwriteMode.ALWAYS


@dataclass(frozen=True)
class DirectoryPair:
    """Source directory and the destination directory mirroring it"""
    source: str  # Empty means the current working directory
    destination: str

    def child(self, name: str) -> "DirectoryPair":
        """Pair for the subdirectory `name` of both sides."""
        return DirectoryPair(
            source=os.path.join(self.source, name) if self.source else name,
            destination=os.path.join(self.destination, name)
        )

    def source_path(self, filename: str) -> str:
        return os.path.join(self.source, filename) if self.source else filename

    def destination_path(self, filename: str) -> str:
        return os.path.join(self.destination, filename)

    def pattern(self, extension: str) -> str:
        """Display form of the search pattern, e.g. ``src/*.h``."""
        return self.source_path(f"*.{extension}")


@dataclass(frozen=True)
class FileTask:
    """A matched file waiting to be rewritten"""
    pair: DirectoryPair
    filename: str
    extension: str

    @property
    def source_path(self) -> str:
        return self.pair.source_path(self.filename)
