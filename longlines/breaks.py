"""Hard/soft classification of individual line breaks."""

from __future__ import annotations

from collections.abc import Iterator

from longlines.document import BREAK, Document


def set_hard(doc: Document, pos: int, value: bool = True) -> None:
    """Mark the break at ``pos``; positions that are not breaks are ignored."""
    if not doc.is_break(pos):
        return
    if value:
        doc.hard.add(pos)
    else:
        doc.hard.discard(pos)


def is_hard(doc: Document, pos: int) -> bool:
    return doc.is_break(pos) and pos in doc.hard


def break_positions(doc: Document, start: int = 0, end: int | None = None) -> Iterator[int]:
    """Yield break positions in ``[start, end)`` of the current text."""
    text = doc.text
    stop = len(text) if end is None else min(end, len(text))
    pos = text.find(BREAK, max(0, start), stop)
    while pos >= 0:
        yield pos
        pos = text.find(BREAK, pos + 1, stop)


def joinable(doc: Document, pos: int) -> bool:
    """True when the break ends a non-blank line and precedes non-whitespace.

    Breaks before indented text, blank lines or the end of the document are
    paragraph structure regardless of their attribute.
    """
    if pos <= 0 or not doc.is_break(pos):
        return False
    following = doc.char_at(pos + 1)
    if not following or following.isspace():
        return False
    return not doc.is_blank_line(pos)
