"""
AlgorithmBase — Run Lifecycle Pattern

Base interface for copynotice runs following the three-phase lifecycle:
initialize → execute → finalize

Design notes:
- initialize() receives all external data via `context` and stores it as instance
    variables. execute() and finalize() operate on that stored state.
- Each instance is single-use: initialize → execute → finalize. The entry point
    instantiates a fresh object for every run.
- Runs are NOT thread-safe. Files are processed strictly one after another and the
    overwrite policy is owned by the run's single thread of control.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class AlgorithmBase(ABC):
    """
    Base lifecycle interface for copynotice runs.

    Subclasses must implement the three required methods.
    """

    def __init__(self):
        self._initialized = False
        self._executed = False

    @abstractmethod
    def initialize(self, context: Dict[str, Any]) -> None:
        """
        Prepare the run for execution.

        Store all necessary state as instance variables. execute() will use this state.

        Args:
            context: A dictionary containing all inputs the run needs:
                     "settings" (validated RunSettings), optionally "console"
                     and a starting "policy" (OverwritePolicy).

        Raises:
            ValueError: If required context fields are missing or invalid.
        """

    @abstractmethod
    def execute(self) -> Any:
        """
        Rewrite every matching file of every directory pair.

        Uses state stored during initialize(). Does not accept parameters;
        all inputs must be loaded in initialize().

        Returns:
            Number of destination files created.

        Raises:
            RuntimeError: If execute() is called before initialize().
        """
        if not self._initialized:
            raise RuntimeError("initialize() must be called before execute()")

    @abstractmethod
    def finalize(self) -> Dict[str, Any]:
        """
        Return the run summary.

        Returns:
            A dictionary with at minimum:
            {
                "status": "complete",
                "timestamp": ISO-8601 string,
                "result": {
                    "files_created": int,
                    "directories": int,      # pairs processed after expansion
                    "overwrite_mode": "ask" | "always"
                }
            }

        Raises:
            RuntimeError: If finalize() is called before execute().
        """
        if not self._executed:
            raise RuntimeError("execute() must be called before finalize()")
