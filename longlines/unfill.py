"""Merge soft-wrapped lines back into logical lines.

``unfill_paragraph`` joins the soft breaks of one paragraph, choosing the
inter-word spacing from the text before each break. ``unfill_buffer`` walks
the document from its end toward its start so that edits never disturb the
positions of paragraphs still to be visited.
"""

from __future__ import annotations

import logging
import re

from longlines.breaks import is_hard, joinable
from longlines.config import WrapSettings
from longlines.document import BREAK, Document

logger = logging.getLogger(__name__)

PREVIEW_LEN = 60

_ENDS_SENTENCE = re.compile(r"[.?!…‽][\"'”’)\]}»›]*$")
_ENDS_COLON = re.compile(r":$")


def _preview(s: str, n: int = PREVIEW_LEN) -> str:
    return repr(s[:n])


def join_spacing(line: str, settings: WrapSettings) -> int:
    """Number of spaces that replace a soft break ending ``line``."""
    if _ENDS_SENTENCE.search(line):
        return 2 if settings.double_space_after_sentence else 1
    if _ENDS_COLON.search(line):
        return 2 if settings.double_space_after_colon else 1
    return 1


def _skip_blank_lines(doc: Document, pos: int, end: int) -> int:
    while pos < end and doc.is_blank_line(pos):
        pos = doc.line_end(pos) + 1
    return pos


def unfill_paragraph(
    doc: Document,
    start: int,
    end: int,
    *,
    settings: WrapSettings | None = None,
) -> int:
    """Join the soft breaks in ``[start, end)`` and return the length delta.

    Hard breaks and breaks followed by whitespace are left in place.
    """
    if settings is None:
        settings = WrapSettings()
    pos = _skip_blank_lines(doc, start, end)
    delta = 0
    while pos < end:
        brk = doc.text.find(BREAK, pos, end)
        if brk < 0:
            break
        if is_hard(doc, brk) or not joinable(doc, brk):
            pos = brk + 1
            continue
        spacing = join_spacing(doc.text[doc.line_start(brk) : brk], settings)
        doc.replace(brk, brk + 1, " " * spacing, hard=False)
        end += spacing - 1
        delta += spacing - 1
        pos = brk + spacing
    return delta


def unfill_buffer(doc: Document, *, settings: WrapSettings | None = None) -> None:
    """Unfill every paragraph, last to first.

    Point and window start follow the edits through ``Document.replace``.
    """
    if settings is None:
        settings = WrapSettings()
    logger.debug(f"unfill_buffer called with {len(doc)} chars")
    logger.debug(f"Input text preview: {_preview(doc.text)}")
    pos = len(doc)
    visited = 0
    delta = 0
    while True:
        start = doc.previous_paragraph_start(pos)
        if start is None or start >= pos:
            break
        paragraph = doc.paragraph_at(start)
        if paragraph is None:
            break
        delta += unfill_paragraph(doc, paragraph.start, paragraph.end, settings=settings)
        visited += 1
        pos = start
    logger.debug(f"unfill_buffer visited {visited} paragraphs, delta {delta}")
