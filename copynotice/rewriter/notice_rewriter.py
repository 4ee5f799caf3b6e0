"""
Notice Rewriter

Copies one source file to its destination, writing the comment notice
ahead of the original content.

Layout of a destination file:
    <prefix><notice line 1>\\r\\n
    ...
    <prefix><notice line N>\\r\\n
    <first code line of the source, with its own terminator>
    <every remaining source byte, unchanged>

The notice is split on CRLF only, so a notice ending in CRLF produces a
final, empty comment line. When replace_existing is set, the leading run of
source lines that start with the prefix is dropped; otherwise an existing
comment block stays in place below the new notice.

The source is read line by line for the header and then streamed in
fixed-size chunks, so memory use does not grow with file size.
"""

import os
import shutil
from typing import BinaryIO, Optional

from copynotice.console import Console
from copynotice.core.exceptions import NoticeIOError
from copynotice.core.models import DirectoryPair, OverwritePolicy, DEFAULT_PREFIX, NEWLINE
from copynotice.logging import get_logger

logger = get_logger(__name__)


def format_notice(notice: bytes, prefix: bytes = DEFAULT_PREFIX) -> bytes:
    """One ``prefix + segment + CRLF`` line per CRLF-separated notice segment."""
    return b"".join(prefix + segment + NEWLINE for segment in notice.split(NEWLINE))


class NoticeRewriter:
    """
    Writes the notice into destination copies of source files.

    Args:
        notice: Notice text, CRLF-delimited
        prefix: Comment prefix written before every notice line
        replace_existing: Drop a leading block of prefix-comment lines from the source
        console: Console for progress and the overwrite prompt
        verbose: Report every file opened and created
        buffer_size: Chunk size used to stream the source body
    """

    BUFFER_SIZE = 64

    def __init__(self, notice: bytes, prefix: bytes = DEFAULT_PREFIX, replace_existing: bool = False,
                 console: Optional[Console] = None, verbose: bool = False,
                 buffer_size: int = BUFFER_SIZE):
        self.notice = notice
        self.prefix = prefix
        self.replace_existing = replace_existing
        self.console = console if console is not None else Console()
        self.verbose = verbose
        self.buffer_size = buffer_size
        self.notice_block = format_notice(notice, prefix)

    def _read_line(self, src: BinaryIO, path: str) -> bytes:
        try:
            return src.readline()
        except OSError as e:
            raise NoticeIOError(f"Could not read \"{path}\": {e}", path=path) from e

    def first_code_line(self, src: BinaryIO, path: str) -> Optional[bytes]:
        """
        Read the header of `src` and return the first line to keep.

        Returns:
            None if the file is empty; b"" if replace_existing consumed every
            line; otherwise the first kept line including its terminator
        """
        line = self._read_line(src, path)
        if not line:
            return None

        if self.replace_existing and line.startswith(self.prefix):
            stripped = 0
            while line.startswith(self.prefix):
                stripped += 1
                line = self._read_line(src, path)
                if not line:
                    break
            logger.debug(f"Stripped {stripped} existing comment line(s) from {path}")

        return line

    def is_same_file(self, src_path: str, dst_path: str) -> bool:
        """True when writing `dst_path` would truncate `src_path`."""
        if not os.path.exists(dst_path):
            return False
        try:
            return os.path.samefile(src_path, dst_path)
        except OSError as e:
            raise NoticeIOError(f"Could not compare \"{src_path}\" with \"{dst_path}\": {e}", path=dst_path) from e

    def confirm_overwrite(self, path: str, policy: OverwritePolicy) -> bool:
        """
        Decide whether an existing destination may be replaced.

        A "yes" switches the policy to always-overwrite for the rest of the run.
        """
        if policy.always:
            return True
        self.console.write("File ", "prompt").write(f"\"{path}\"", "path").line(" already exists.", "prompt")
        self.console.line("Do you want to overwrite this file and future files? (y/n)")
        if not self.console.ask_yes_no():
            logger.info(f"Skipped existing file {path}")
            return False
        policy.set_always()
        logger.info("Overwrite policy set to always")
        return True

    def rewrite(self, pair: DirectoryPair, filename: str, policy: OverwritePolicy) -> bool:
        """
        Write the destination copy of `filename` with the notice prepended.

        Args:
            pair: Source and destination directories
            filename: Name of the file inside pair.source
            policy: Overwrite policy, updated in place when the user confirms

        Returns:
            True if a destination file was produced; False if the source is
            empty or the user declined to overwrite

        Raises:
            NoticeIOError: If either file cannot be opened, read, written or
                           closed, or if the destination is the source itself
        """
        src_path = pair.source_path(filename)
        dst_path = pair.destination_path(filename)

        if self.verbose:
            self.console.write(" Opening  ", "muted").write(f"\"{src_path}\"", "path").write("... ", "muted")
        try:
            src = open(src_path, "rb")
        except OSError as e:
            raise NoticeIOError(f"Could not open source file \"{src_path}\": {e}", path=src_path) from e
        if self.verbose:
            self.console.line("Done.", "muted")

        with src:
            first_line = self.first_code_line(src, src_path)
            if first_line is None:
                self.console.line(f"Source file {filename} is empty.", "error")
                logger.warning(f"Source file {src_path} is empty")
                return False

            if self.is_same_file(src_path, dst_path):
                raise NoticeIOError(
                    f"Destination \"{dst_path}\" is the source file itself", path=dst_path
                )

            if os.path.exists(dst_path) and not self.confirm_overwrite(dst_path, policy):
                return False

            if self.verbose:
                self.console.write(" Creating ", "muted").write(f"\"{dst_path}\"", "path").write("... ", "muted")
            try:
                with open(dst_path, "wb") as dst:
                    if self.verbose:
                        self.console.line("Done.", "muted")
                    dst.write(self.notice_block)
                    dst.write(first_line)
                    shutil.copyfileobj(src, dst, self.buffer_size)
            except OSError as e:
                raise NoticeIOError(f"Could not write \"{dst_path}\" from \"{src_path}\": {e}", path=dst_path) from e

        logger.info(
            f"Wrote {dst_path}",
            extra={'extra_fields': {'source': src_path, 'destination': dst_path}}
        )
        return True
