"""
Match Scanner

Finds the files in a source directory that match ``*.<extension>`` and
hands each one to the notice rewriter.
"""

import fnmatch
import os
from typing import List, Optional

from copynotice.console import Console
from copynotice.core.exceptions import TraversalError
from copynotice.core.models import DirectoryPair, FileTask, OverwritePolicy
from copynotice.logging import get_logger
from copynotice.utils.fs import is_directory, is_hidden, listing_root

logger = get_logger(__name__)


class MatchScanner:
    """Enumerates matching files for a directory pair and extension"""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console
        self.verbose = verbose

    def find(self, pair: DirectoryPair, extension: str) -> List[str]:
        """
        File names in pair.source matching ``*.<extension>``.

        Hidden entries and directories are skipped. Name matching follows the
        host's case rules. An empty result is not an error.

        Raises:
            TraversalError: If the source directory cannot be enumerated
        """
        pattern = f"*.{extension}"
        root = listing_root(pair.source)
        try:
            with os.scandir(root) as entries:
                return [
                    entry.name
                    for entry in entries
                    if fnmatch.fnmatch(entry.name, pattern)
                    and not is_hidden(entry)
                    and not is_directory(entry)
                ]
        except OSError as e:
            logger.error(f"Could not search {pair.pattern(extension)}: {e}")
            raise TraversalError(f"Could not search \"{pair.pattern(extension)}\": {e}", path=root) from e

    def tasks(self, pair: DirectoryPair, extension: str) -> List[FileTask]:
        return [FileTask(pair, filename, extension) for filename in self.find(pair, extension)]

    def process(self, pair: DirectoryPair, extension: str, rewriter, policy: OverwritePolicy) -> int:
        """
        Rewrite every match of ``*.<extension>`` in `pair`.

        Args:
            pair: Directory pair to search
            extension: Target extension, without the dot
            rewriter: NoticeRewriter that writes each destination file
            policy: Overwrite policy shared by the whole run

        Returns:
            Number of destination files created
        """
        target = pair.pattern(extension)
        if self.verbose and self.console is not None:
            self.console.line()
            self.console.write("Executing for target: ", "info").line(f"\"{target}\"", "path")

        tasks = self.tasks(pair, extension)
        if not tasks:
            if self.console is not None:
                self.console.write("Could not find a target file for target: ", "info").line(f"\"{target}\"", "path")
            logger.info(f"No files match {target}")
            return 0

        files_created = 0
        for task in tasks:
            logger.debug(f"Matched {task.source_path}")
            if rewriter.rewrite(task.pair, task.filename, policy):
                files_created += 1

        if self.console is not None:
            self.console.line(f"Finished target \"{target}\": Created {files_created} file(s)", "success")
        logger.info(
            f"Finished target {target}",
            extra={'extra_fields': {'target': target, 'matched': len(tasks), 'created': files_created}}
        )
        return files_created
