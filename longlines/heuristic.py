"""Decide, on activation, which existing breaks are hard."""

from __future__ import annotations

import logging
from typing import Literal

from longlines.breaks import break_positions, set_hard
from longlines.document import Document

logger = logging.getLogger(__name__)

Classification = Literal[
    "all",  # every existing break is hard
    "paragraph-ends",  # only the break terminating each paragraph is hard
]


def has_overlong_lines(doc: Document, width: int) -> bool:
    return any(end - start > width for start, end in doc.lines())


def has_hard_breaks(doc: Document) -> bool:
    return any(doc.is_break(pos) for pos in doc.hard)


def choose_classification(force_all_hard: bool, overlong: bool, has_hard: bool) -> Classification:
    """Overlong lines without any hard break mean every break is intentional."""
    if force_all_hard or (overlong and not has_hard):
        return "all"
    return "paragraph-ends"


def mark_all_hard(doc: Document) -> None:
    for pos in tuple(break_positions(doc)):
        set_hard(doc, pos)


def mark_paragraph_ends(doc: Document) -> None:
    """Mark each paragraph's terminating break; other breaks keep their attribute."""
    for paragraph in doc.paragraphs():
        set_hard(doc, paragraph.end)


def classify_buffer(doc: Document, width: int, *, force_all_hard: bool = False) -> Classification:
    overlong = has_overlong_lines(doc, width)
    has_hard = has_hard_breaks(doc)
    classification = choose_classification(force_all_hard, overlong, has_hard)
    logger.debug(
        "classify_buffer: force_all_hard=%s overlong=%s has_hard=%s -> %s",
        force_all_hard,
        overlong,
        has_hard,
        classification,
    )
    if classification == "all":
        mark_all_hard(doc)
    else:
        mark_paragraph_ends(doc)
    return classification
