"""
Indentation-aware text buffer for code generation.

Generators append text and lines to an ``IndentedEmitter`` and open nested
blocks with the ``indent()`` context manager, which restores the previous
depth on every exit path.
"""

from contextlib import contextmanager
from typing import Iterator, List

DEFAULT_INDENT = "\t"
DEFAULT_LINE_ENDING = "\n"


class IndentedEmitter:
    """Append-only text buffer with a scoped indentation depth."""

    def __init__(
        self, indent_unit: str = DEFAULT_INDENT, line_ending: str = DEFAULT_LINE_ENDING
    ):
        """
        Initialize an empty emitter.

        Args:
            indent_unit: Text written once per indentation level
            line_ending: Terminator written by append_line()
        """
        self.indent_unit = indent_unit
        self.line_ending = line_ending
        self._parts: List[str] = []
        self._depth = 0

    @property
    def depth(self) -> int:
        """Current indentation level."""
        return self._depth

    def append(self, text: str, indent: bool = False) -> None:
        """
        Append text without a line terminator.

        Args:
            text: Text to append
            indent: Write the current indentation before the text
        """
        if indent:
            self._write_indent()
        self._parts.append(text)

    def append_line(self, text: str = "", indent: bool = True) -> None:
        """
        Append text followed by the line terminator.

        Args:
            text: Line content
            indent: Write the current indentation before the text
        """
        if indent:
            self._write_indent()
        self._parts.append(text)
        self._parts.append(self.line_ending)

    @contextmanager
    def indent(self, should_indent: bool = True) -> Iterator["IndentedEmitter"]:
        """
        Open an indentation scope.

        The scope remembers whether it incremented the depth and only undoes
        its own increment, so ``should_indent=False`` leaves the depth alone.

        Args:
            should_indent: Whether lines inside the scope get one more level
        """
        entered = bool(should_indent)
        if entered:
            self._depth += 1
        try:
            yield self
        finally:
            if entered:
                self._depth -= 1

    def render(self) -> str:
        """Return the accumulated text without resetting the buffer."""
        return "".join(self._parts)

    def __str__(self) -> str:
        return self.render()

    def _write_indent(self) -> None:
        if self._depth:
            self._parts.append(self.indent_unit * self._depth)
