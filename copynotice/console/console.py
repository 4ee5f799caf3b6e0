"""
Console

Line-output sink and line-input source used by the traversal and rewrite
components. Colour is written as ANSI escape sequences when the output
stream is a terminal.
"""

import sys
from typing import Optional, TextIO

from copynotice.__version__ import __version__

# ANSI styles keyed by role
STYLES = {
    "title": "\033[1;4;32m",
    "muted": "\033[90m",
    "path": "\033[33m",
    "info": "\033[32m",
    "success": "\033[32;1m",
    "prompt": "\033[94m",
    "error": "\033[1;31m",
}
RESET = "\033[0m"

YES = ("y", "yes")
NO = ("n", "no")


class Console:
    """
    Console collaborator.

    Args:
        output: Stream for progress and diagnostic lines (default: stdout)
        input: Stream the yes/no answers are read from (default: stdin)
        use_color: Force colour on or off; auto-detected from output when None
    """

    def __init__(self, output: Optional[TextIO] = None, input: Optional[TextIO] = None,
                 use_color: Optional[bool] = None):
        self.output = output if output is not None else sys.stdout
        self.input = input if input is not None else sys.stdin
        if use_color is None:
            use_color = hasattr(self.output, "isatty") and self.output.isatty()
        self.use_color = use_color

    def write(self, text: str, style: Optional[str] = None) -> "Console":
        if style and self.use_color:
            text = f"{STYLES[style]}{text}{RESET}"
        self.output.write(text)
        return self

    def line(self, text: str = "", style: Optional[str] = None) -> "Console":
        self.write(text, style)
        self.output.write("\n")
        self.output.flush()
        return self

    def read(self) -> str:
        """
        Read one line of input after a ``> `` prompt.

        Raises:
            EOFError: If the input stream is exhausted
        """
        self.write("> ")
        self.output.flush()
        raw = self.input.readline()
        if not raw:
            raise EOFError("No more console input")
        return raw.rstrip("\r\n")

    def ask_yes_no(self) -> bool:
        """Re-prompt until the answer is y/yes or n/no (case-sensitive)."""
        while True:
            answer = self.read()
            if answer in YES:
                return True
            if answer in NO:
                return False
            self.line("Invalid input. Enter yes or no.")

    def banner(self) -> None:
        self.line(f"copynotice (Source Code Notice Writer) v{__version__}", "title")

    def report_exception(self, message: str) -> None:
        self.line(message, "error")
