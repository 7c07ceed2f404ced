"""Terminal output spans that know their visible width, ignoring colour codes."""

from __future__ import annotations

import abc
import enum
import io
import os
from dataclasses import dataclass, field
from typing import Callable, Optional, TextIO

from .table import TableCalculator


class Span(abc.ABC):
    """A chunk of output that knows its apparent width on the terminal."""

    @abc.abstractmethod
    def visual_length(self) -> int:
        """Return the width the user sees, ignoring escape sequences."""

    @abc.abstractmethod
    def write_to(self, out: TextIO) -> None:
        """Write the full contents of the span to ``out``."""


class Attribute(enum.IntEnum):
    """SGR attributes usable in a Decoration."""

    RESET = 0
    BOLD = 1
    FAINT = 2
    ITALIC = 3
    UNDERLINE = 4
    CROSSED_OUT = 9
    FG_BLACK = 30
    FG_RED = 31
    FG_GREEN = 32
    FG_YELLOW = 33
    FG_BLUE = 34
    FG_MAGENTA = 35
    FG_CYAN = 36
    FG_WHITE = 37


_RESET_SEQUENCE = "\x1b[0m"


@dataclass(frozen=True)
class Text(Span):
    """Raw text."""

    text: str

    def visual_length(self) -> int:
        return len(self.text)

    def write_to(self, out: TextIO) -> None:
        out.write(self.text)


@dataclass
class Table(Span):
    """A span laid out as a table, sized by a TableCalculator.

    Rows are built with ``start_row``, some ``column`` calls and ``end_row``.
    """

    sizing: TableCalculator = field(default_factory=TableCalculator)
    _cells_by_row: list[list[Span]] = field(default_factory=list, init=False, repr=False)
    _col_sizes: Optional[list[int]] = field(default=None, init=False, repr=False)

    def start_row(self) -> None:
        """Begin a new row; it must be finished with ``end_row``."""
        self._cells_by_row.append([])

    def end_row(self) -> None:
        """Finish the current row, registering its cell widths."""
        last_row = self._cells_by_row[-1]
        self.sizing.add_row_sizes(*(cell.visual_length() for cell in last_row))

    def column(self, contents: Span) -> None:
        """Add a cell to the current row."""
        self._cells_by_row[-1].append(contents)

    def skip_row(self, contents: Span) -> None:
        """Add a row that does not count towards the column widths."""
        self._cells_by_row.append([contents])

    def _column_sizes(self) -> list[int]:
        if self._col_sizes is None:
            self._col_sizes = self.sizing.column_widths()
        return self._col_sizes

    def write_to(self, out: TextIO) -> None:
        col_sizes = self._column_sizes()
        for cells in self._cells_by_row:
            for col_size, cell in zip(col_sizes, cells, strict=False):
                cell.write_to(out)
                diff = col_size - cell.visual_length()
                if diff > 0:
                    out.write(" " * diff)
            if len(cells) > len(col_sizes):
                raise IndexError("table row has more cells than sized columns")
            out.write("\n")

    def visual_length(self) -> int:
        return sum(self._column_sizes())


@dataclass
class _Indented(Span):
    amount: int
    content: Span

    def visual_length(self) -> int:
        return self.content.visual_length()

    def write_to(self, out: TextIO) -> None:
        for index, text in enumerate(render(self.content).split("\n")):
            if index:
                out.write("\n")
            if not text:
                continue
            out.write("\t" * self.amount)
            out.write(text)


def indented(amount: int, content: Span) -> Span:
    """Return a span that indents every non-empty line by ``amount`` tabs."""
    return _Indented(amount, content)


class _FromWriter(Span):
    def __init__(self, run: Callable[[TextIO], None]) -> None:
        self._run = run
        self._cache: Optional[str] = None
        self._cache_error: Optional[BaseException] = None

    def visual_length(self) -> int:
        if self._cache is None:
            buf = io.StringIO()
            try:
                self._run(buf)
            except Exception as err:  # kept and raised again on write
                self._cache_error = err
            self._cache = buf.getvalue()
        return len(self._cache)

    def write_to(self, out: TextIO) -> None:
        if self._cache is not None:
            if self._cache_error is not None:
                raise self._cache_error
            out.write(self._cache)
            return
        self._run(out)


def from_writer(run: Callable[[TextIO], None]) -> Span:
    """Return a span whose content is produced by ``run(out)``."""
    return _FromWriter(run)


def _colour_enabled(out: TextIO) -> bool:
    if os.environ.get("NO_COLOR", ""):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    isatty = getattr(out, "isatty", None)
    return bool(isatty and isatty())


class Decoration:
    """A set of terminal attributes.

    With ``enabled`` left as None, colour is used only when the output is a
    terminal and neither NO_COLOR nor TERM=dumb says otherwise.
    """

    def __init__(self, *attributes: int, enabled: Optional[bool] = None) -> None:
        self.attributes = tuple(int(a) for a in attributes)
        self.enabled = enabled

    def sequence(self) -> str:
        """Return the escape sequence that switches these attributes on."""
        return "\x1b[" + ";".join(str(a) for a in self.attributes) + "m"

    def active_for(self, out: TextIO) -> bool:
        """Tell whether escape sequences are written to ``out``."""
        if self.enabled is not None:
            return self.enabled
        return _colour_enabled(out)

    def containing(self, contents: Span) -> Span:
        """Return a span showing ``contents`` with this decoration."""
        return _Decorated(contents, self)

    def __repr__(self) -> str:
        return f"Decoration{self.attributes!r}"


@dataclass
class _Decorated(Span):
    contents: Span
    decoration: Decoration

    def visual_length(self) -> int:
        return self.contents.visual_length()

    def write_to(self, out: TextIO) -> None:
        active = self.decoration.active_for(out)
        if active:
            out.write(self.decoration.sequence())
        try:
            self.contents.write_to(out)
        finally:
            if active:
                out.write(_RESET_SEQUENCE)


@dataclass
class SpanWriter(Span):
    """A span made of several spans, written one after another."""

    contents: list[Span] = field(default_factory=list)

    def print(self, span: Span) -> None:
        """Append a span."""
        self.contents.append(span)

    def visual_length(self) -> int:
        return sum(span.visual_length() for span in self.contents)

    def write_to(self, out: TextIO) -> None:
        for span in self.contents:
            span.write_to(out)


@dataclass
class _Lines(Span):
    amount_before: int
    content: Optional[Span] = None

    def visual_length(self) -> int:
        return 0 if self.content is None else self.content.visual_length()

    def write_to(self, out: TextIO) -> None:
        out.write("\n" * self.amount_before)
        if self.content is not None:
            self.content.write_to(out)


def newlines(amount: int) -> Span:
    """Return a span holding only ``amount`` newlines."""
    return _Lines(amount)


def line(content: Span) -> Span:
    """Return a span writing a newline followed by ``content``."""
    return _Lines(1, content)


def render(span: Span) -> str:
    """Write a span into a string and return it."""
    buf = io.StringIO()
    span.write_to(buf)
    return buf.getvalue()