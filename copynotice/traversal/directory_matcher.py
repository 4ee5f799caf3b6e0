"""
Directory Matcher

Expands a configured directory pair into the pairs for all of its
non-hidden subdirectories, mirroring the structure under the destination.

Expansion uses an explicit stack of child listings instead of recursion, so
discovered pairs accumulate in a plain list that nothing else iterates while
it grows. Children are emitted before their own descendants (pre-order);
siblings keep filesystem enumeration order.
"""

import os
from typing import Iterable, Iterator, List, Optional

from copynotice.console import Console
from copynotice.core.exceptions import TraversalError
from copynotice.core.models import DirectoryPair
from copynotice.logging import get_logger
from copynotice.utils.fs import is_directory, is_hidden, listing_root

logger = get_logger(__name__)


class DirectoryMatcher:
    """Finds subdirectory pairs below configured directory pairs"""

    def __init__(self, console: Optional[Console] = None):
        self.console = console

    def _announce(self, pair: DirectoryPair) -> None:
        if self.console is not None:
            self.console.write("Target directory: ", "muted").write(f"\"{pair.source}\"", "path")
            self.console.write(". Output directory: ", "muted").line(f"\"{pair.destination}\"", "path")

    def child_pairs(self, pair: DirectoryPair) -> List[DirectoryPair]:
        """
        Pairs for the immediate, non-hidden subdirectories of pair.source.

        Symlinked directories are not followed, so a link back to an
        ancestor cannot expand forever.

        Raises:
            TraversalError: If the directory cannot be listed
        """
        root = listing_root(pair.source)
        try:
            with os.scandir(root) as entries:
                return [
                    pair.child(entry.name)
                    for entry in entries
                    if entry.name not in (os.curdir, os.pardir)
                    and is_directory(entry, follow_symlinks=False)
                    and not is_hidden(entry)
                ]
        except OSError as e:
            logger.error(f"Could not list directory {root}: {e}")
            raise TraversalError(f"Could not list directory \"{root}\": {e}", path=root) from e

    def expand(self, pair: DirectoryPair, recurse: bool) -> List[DirectoryPair]:
        """
        All descendant directory pairs of `pair`, depth-first.

        Args:
            pair: Configured pair to expand
            recurse: When False nothing is expanded and the result is empty

        Returns:
            Discovered pairs, not including `pair` itself

        Raises:
            TraversalError: If any directory in the tree cannot be listed
        """
        self._announce(pair)
        if not recurse:
            return []

        discovered: List[DirectoryPair] = []
        stack: List[Iterator[DirectoryPair]] = [iter(self.child_pairs(pair))]
        while stack:
            child = next(stack[-1], None)
            if child is None:
                stack.pop()
                continue
            self._announce(child)
            discovered.append(child)
            stack.append(iter(self.child_pairs(child)))

        logger.debug(
            f"Expanded {pair.source or os.curdir}",
            extra={'extra_fields': {'source': pair.source, 'discovered': len(discovered)}}
        )
        return discovered

    def merge(self, configured: Iterable[DirectoryPair],
              discovered: Iterable[DirectoryPair]) -> List[DirectoryPair]:
        """
        Configured pairs followed by discovered pairs with a new source.

        A discovered pair whose source is already targeted is reported and
        dropped; the first pair for a source wins.
        """
        merged = list(configured)
        known = {pair.source for pair in merged}
        for pair in discovered:
            if pair.source in known:
                if self.console is not None:
                    self.console.write("Directory ", "muted").write(f"\"{pair.source}\"", "path")
                    self.console.line(" is already targeted.", "muted")
                logger.info(f"Directory {pair.source} is already targeted")
                continue
            known.add(pair.source)
            merged.append(pair)
        return merged

    def resolve(self, configured: Iterable[DirectoryPair], recurse: bool) -> List[DirectoryPair]:
        """Expand every configured pair, then merge the results."""
        configured = list(configured)
        discovered: List[DirectoryPair] = []
        for pair in configured:
            discovered.extend(self.expand(pair, recurse))
        return self.merge(configured, discovered)
