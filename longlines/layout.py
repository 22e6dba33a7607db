"""Display layout: turn spaces into soft breaks and back.

``TextWrapLayout`` only ever swaps a single space for a soft break or a soft
break for a single space, so refilling never changes the document length and
never touches a hard break.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from longlines.breaks import break_positions, is_hard, joinable
from longlines.document import Document

logger = logging.getLogger(__name__)


@runtime_checkable
class LayoutEngine(Protocol):
    def wrap_display(self, doc: Document, width: int, start: int = 0, end: int | None = None) -> None:
        """Lay out ``[start, end)`` for display at ``width`` columns."""
        ...

    def enable_continuous(self, doc: Document, width: int) -> None: ...

    def disable_continuous(self, doc: Document) -> None: ...


def _break_point(text: str, start: int, end: int, width: int) -> int | None:
    """Space in ``text[start:end]`` to replace so the line fits ``width``."""
    line = text[start:end]
    indent = len(line) - len(line.lstrip())
    candidates = [
        start + i for i in range(indent + 1, len(line) - 1) if line[i] == " " and not line[i + 1].isspace()
    ]
    fitting = [i for i in candidates if i - start <= width]
    if fitting:
        return fitting[-1]
    return candidates[0] if candidates else None


class TextWrapLayout:
    """Reference layout engine wrapping at spaces."""

    def __init__(self) -> None:
        self.width: int | None = None

    def wrap_display(self, doc: Document, width: int, start: int = 0, end: int | None = None) -> None:
        start = doc.line_start(start)
        end = doc.line_end(len(doc) if end is None else end)
        with doc.listeners_suspended():
            merged = self._merge_soft_breaks(doc, start, end)
            inserted = self._break_long_lines(doc, start, end, width)
        logger.debug(f"wrap_display [{start}, {end}) width={width}: merged {merged}, inserted {inserted}")

    def _merge_soft_breaks(self, doc: Document, start: int, end: int) -> int:
        soft = [pos for pos in break_positions(doc, start, end) if not is_hard(doc, pos) and joinable(doc, pos)]
        for pos in soft:
            doc.replace(pos, pos + 1, " ", hard=False)
        return len(soft)

    def _break_long_lines(self, doc: Document, start: int, end: int, width: int) -> int:
        inserted = 0
        line = start
        while line <= end:
            line_end = doc.line_end(line)
            pos = _break_point(doc.text, line, line_end, width) if line_end - line > width else None
            if pos is None:
                line = line_end + 1
                continue
            doc.replace(pos, pos + 1, "\n", hard=False)
            inserted += 1
            line = pos + 1
        return inserted

    # ------------------------------------------------------------------
    # Continuous wrapping
    # ------------------------------------------------------------------

    def enable_continuous(self, doc: Document, width: int) -> None:
        self.width = width
        doc.add_listener(self._on_change)

    def disable_continuous(self, doc: Document) -> None:
        doc.remove_listener(self._on_change)
        self.width = None

    def _on_change(self, doc: Document, start: int, end: int) -> None:
        if self.width is None:
            return
        first = doc.paragraph_at(doc.line_start(start))
        last = doc.paragraph_at(end)
        region_start = min(first.start, start) if first else start
        region_end = max(last.end, end) if last else end
        self.wrap_display(doc, self.width, region_start, region_end)
