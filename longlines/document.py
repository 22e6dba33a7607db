"""Text buffer with per-break hard/soft attributes.

The document owns its text, the set of break positions carrying the hard
attribute, and the markers (point and window start) that must follow edits.
Every mutation goes through :meth:`Document.replace` so attributes and
markers never drift from the text they describe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from itertools import groupby
from typing import NamedTuple, Protocol

logger = logging.getLogger(__name__)

BREAK = "\n"


class ChangeListener(Protocol):
    """Called after each edit with the span now covered by the new text."""

    def __call__(self, doc: Document, start: int, end: int) -> None: ...


class Paragraph(NamedTuple):
    """Maximal run of non-blank lines.

    ``start`` is the first character of the first line and ``end`` the
    position of the terminating break (or the document length).
    """

    start: int
    end: int


@dataclass
class SaveHooks:
    """Zero-argument callables run around a write."""

    before_write: list[Callable[[], None]] = field(default_factory=list)
    after_write: list[Callable[[], None]] = field(default_factory=list)


def _line_spans(text: str) -> Iterator[tuple[int, int]]:
    start = 0
    while True:
        end = text.find(BREAK, start)
        if end < 0:
            yield start, len(text)
            return
        yield start, end
        start = end + 1


def _shift(marker: int, start: int, end: int, inserted: int) -> int:
    if marker >= end:
        return marker + inserted - (end - start)
    if marker > start:
        return start + min(marker - start, inserted)
    return marker


@dataclass(eq=False)
class Document:
    _text: str = ""
    hard: set[int] = field(default_factory=set)
    modified: bool = False
    point: int = 0
    window_start: int = 0
    hooks: SaveHooks = field(default_factory=SaveHooks)
    _listeners: list[ChangeListener] = field(default_factory=list)
    _quiet: int = 0

    @classmethod
    def from_text(cls, text: str, *, hard: Iterable[int] = ()) -> Document:
        """Build an unmodified document; breaks carry no attribute unless listed."""
        doc = cls(_text=text)
        doc.hard = {pos for pos in hard if doc.is_break(pos)}
        return doc

    @property
    def text(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def char_at(self, pos: int) -> str:
        return self._text[pos] if 0 <= pos < len(self._text) else ""

    def is_break(self, pos: int) -> bool:
        return self.char_at(pos) == BREAK

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def replace(self, start: int, end: int, new: str, *, hard: bool = True) -> None:
        """Replace ``[start, end)`` with ``new``.

        Breaks inside ``new`` are marked hard unless ``hard`` is False;
        text typed by a person defaults to hard breaks.
        """
        size = len(self._text)
        start, end = sorted((max(0, min(start, size)), max(0, min(end, size))))
        delta = len(new) - (end - start)
        self._text = self._text[:start] + new + self._text[end:]
        kept = {pos if pos < start else pos + delta for pos in self.hard if not start <= pos < end}
        inserted = {start + i for i, ch in enumerate(new) if ch == BREAK} if hard else set()
        self.hard = kept | inserted
        self.point = _shift(self.point, start, end, len(new))
        self.window_start = _shift(self.window_start, start, end, len(new))
        self.modified = True
        if not self._quiet:
            for listener in tuple(self._listeners):
                listener(self, start, start + len(new))

    def insert(self, pos: int, new: str, *, hard: bool = True) -> None:
        self.replace(pos, pos, new, hard=hard)

    def delete(self, start: int, end: int) -> None:
        self.replace(start, end, "")

    def add_listener(self, listener: ChangeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @contextmanager
    def listeners_suspended(self) -> Iterator[None]:
        """Edits made inside the block do not notify change listeners."""
        self._quiet += 1
        try:
            yield
        finally:
            self._quiet -= 1

    # ------------------------------------------------------------------
    # Lines
    # ------------------------------------------------------------------

    def line_start(self, pos: int) -> int:
        return self._text.rfind(BREAK, 0, max(0, pos)) + 1

    def line_end(self, pos: int) -> int:
        end = self._text.find(BREAK, max(0, pos))
        return len(self._text) if end < 0 else end

    def is_blank_line(self, pos: int) -> bool:
        return not self._text[self.line_start(pos) : self.line_end(pos)].strip()

    def lines(self) -> tuple[tuple[int, int], ...]:
        """``(start, end)`` of every display line, ``end`` excluding the break."""
        return tuple(_line_spans(self._text))

    # ------------------------------------------------------------------
    # Paragraphs
    # ------------------------------------------------------------------

    def paragraphs(self) -> tuple[Paragraph, ...]:
        text = self._text
        runs = groupby(_line_spans(text), key=lambda span: bool(text[span[0] : span[1]].strip()))
        return tuple(
            Paragraph(spans[0][0], spans[-1][1])
            for filled, group in runs
            if filled
            for spans in (list(group),)
        )

    def paragraph_at(self, pos: int) -> Paragraph | None:
        """Paragraph containing ``pos``, else the next one, else None."""
        return next((p for p in self.paragraphs() if pos <= p.end), None)

    def next_paragraph_start(self, pos: int) -> int | None:
        return next((p.start for p in self.paragraphs() if p.start > pos), None)

    def previous_paragraph_start(self, pos: int) -> int | None:
        starts = [p.start for p in self.paragraphs() if p.start < pos]
        return starts[-1] if starts else None


@contextmanager
def preserved_modified(doc: Document) -> Iterator[None]:
    """Restore ``doc.modified`` after edits that are not meaningful to saving."""
    flag = doc.modified
    try:
        yield
    finally:
        doc.modified = flag
