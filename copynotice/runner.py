"""
copynotice Run

Drives one complete run following the AlgorithmBase lifecycle:

    initialize  expand and deduplicate directory pairs, create output directories
    execute     scan every pair for every extension and rewrite the matches
    finalize    return the result payload
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from copynotice.config.settings import RunSettings
from copynotice.console import Console
from copynotice.core.base_class import AlgorithmBase
from copynotice.core.exceptions import NoticeIOError
from copynotice.core.models import DirectoryPair, OverwritePolicy
from copynotice.logging import get_logger
from copynotice.rewriter import NoticeRewriter
from copynotice.traversal import DirectoryMatcher, MatchScanner
from copynotice.utils.fs import ensure_directory

logger = get_logger(__name__)


class CopyNoticeRun(AlgorithmBase):
    """
    One run over the configured directories.

    Context keys:
        settings: Validated RunSettings (required)
        console: Console collaborator (default: stdout/stdin console)
        policy: OverwritePolicy to start from (default: ask every time)
    """

    def __init__(self):
        super().__init__()
        self.settings: Optional[RunSettings] = None
        self.console: Optional[Console] = None
        self.policy = OverwritePolicy()
        self.directories: List[DirectoryPair] = []
        self.files_created = 0

    def initialize(self, context: Dict[str, Any]) -> None:
        settings = context.get('settings')
        if not isinstance(settings, RunSettings):
            raise ValueError("Context must provide 'settings' as RunSettings")

        self.settings = settings
        self.console = context.get('console') or Console()
        self.policy = context.get('policy') or OverwritePolicy()

        matcher = DirectoryMatcher(self.console)
        self.directories = matcher.resolve(settings.directories, settings.recurse)
        self.create_output_directories()

        logger.info(
            "Run initialized",
            extra={'extra_fields': {
                'directories': len(self.directories),
                'extensions': settings.extensions
            }}
        )
        self._initialized = True

    def create_output_directories(self) -> None:
        """
        Create each destination directory; existing ones are left alone.

        Raises:
            NoticeIOError: If a directory cannot be created, e.g. because an
                           intermediate directory is missing
        """
        for pair in self.directories:
            try:
                created = ensure_directory(pair.destination)
            except OSError as e:
                raise NoticeIOError(
                    f"Could not create output directory \"{pair.destination}\". "
                    f"Ensure intermediate directories exist: {e}",
                    path=pair.destination
                ) from e
            if created:
                self.console.write("Created output directory ", "muted").line(f"\"{pair.destination}\"", "path")

    def execute(self) -> int:
        super().execute()  # Check initialization

        rewriter = NoticeRewriter(
            notice=self.settings.notice,
            prefix=self.settings.prefix,
            replace_existing=self.settings.replace,
            console=self.console,
            verbose=self.settings.verbose
        )
        scanner = MatchScanner(self.console, verbose=self.settings.verbose)

        self.files_created = 0
        for pair in self.directories:
            for extension in self.settings.extensions:
                self.files_created += scanner.process(pair, extension, rewriter, self.policy)

        self.console.line(f"Done. Created {self.files_created} file(s)", "success")
        logger.info(f"Run finished, created {self.files_created} file(s)")
        self._executed = True
        return self.files_created

    def finalize(self) -> Dict[str, Any]:
        super().finalize()  # Check execution
        return {
            "status": "complete",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "result": {
                "files_created": self.files_created,
                "directories": len(self.directories),
                "overwrite_mode": self.policy.mode.value
            }
        }
