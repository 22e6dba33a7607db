"""Word-wrap mode state machine.

While the mode is on, the document shows soft-wrapped prose and the save
pipeline strips soft breaks before writing and restores them afterwards:

    controller = WordWrapController(doc, settings=load_settings())
    controller.activate(viewport_width=100)
    save_document(doc, path)   # hooks unfill, write, refill
    controller.deactivate()    # leaves only hard breaks
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from longlines.audit import BreakIssue, audit_breaks
from longlines.breaks import break_positions, set_hard
from longlines.config import WrapSettings
from longlines.document import Document, preserved_modified
from longlines.heuristic import Classification, classify_buffer
from longlines.layout import LayoutEngine, TextWrapLayout
from longlines.unfill import unfill_buffer, unfill_paragraph

logger = logging.getLogger(__name__)

SAVE_NOTICE = "Saved without soft line breaks"


class ModeState(Enum):
    OFF = "off"
    ON = "on"


def _log_notice(message: str) -> None:
    logger.info(message)


@dataclass(eq=False)
class WordWrapController:
    """Per-document word-wrap mode.

    Attributes:
        document: the buffer being edited
        settings: global options; ``force_all_returns_hard`` is read on activation
        layout: engine that inserts and merges soft breaks for display
        notify: receives informational notices after saves
        state: ``ModeState.OFF`` or ``ModeState.ON``
        wrap_width: display width while on, else None
        classification: heuristic outcome of the last activation
    """

    document: Document
    settings: WrapSettings = field(default_factory=WrapSettings)
    layout: LayoutEngine = field(default_factory=TextWrapLayout)
    notify: Callable[[str], None] = _log_notice
    state: ModeState = ModeState.OFF
    wrap_width: int | None = None
    classification: Classification | None = None

    @property
    def active(self) -> bool:
        return self.state is ModeState.ON

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def activate(self, viewport_width: int | None = None) -> None:
        if self.active:
            logger.debug("activate ignored: word wrap already on")
            return
        doc = self.document
        if viewport_width is None:
            viewport_width = self.settings.viewport_width
        width = max(1, viewport_width - 1)
        with preserved_modified(doc):
            self.layout.enable_continuous(doc, width)
            self.classification = classify_buffer(
                doc, width, force_all_hard=self.settings.force_all_returns_hard
            )
            with doc.listeners_suspended():
                unfill_buffer(doc, settings=self.settings)
            self.wrap_width = width
            self.layout.wrap_display(doc, width)
        doc.hooks.before_write.append(self.before_write)
        doc.hooks.after_write.append(self.after_write)
        self.state = ModeState.ON
        logger.debug(f"word wrap on at width {width} ({self.classification})")

    def deactivate(self) -> None:
        if not self.active:
            logger.debug("deactivate ignored: word wrap already off")
            return
        doc = self.document
        with preserved_modified(doc), doc.listeners_suspended():
            unfill_buffer(doc, settings=self.settings)
        _discard(doc.hooks.before_write, self.before_write)
        _discard(doc.hooks.after_write, self.after_write)
        self.layout.disable_continuous(doc)
        self.state = ModeState.OFF
        self.wrap_width = None
        self.classification = None
        logger.debug("word wrap off")

    def toggle(self, viewport_width: int | None = None) -> None:
        if self.active:
            self.deactivate()
        else:
            self.activate(viewport_width)

    toggle_word_wrap = toggle

    # ------------------------------------------------------------------
    # Save hooks
    # ------------------------------------------------------------------

    def before_write(self) -> None:
        if not self.active:
            return
        doc = self.document
        issues = self.audit()
        if issues:
            logger.debug(f"writing with {len(issues)} inconsistent breaks: {', '.join(map(str, issues))}")
        with preserved_modified(doc), doc.listeners_suspended():
            unfill_buffer(doc, settings=self.settings)

    def after_write(self) -> None:
        if not self.active:
            return
        self.rewrap()
        self.document.modified = False
        self.notify(SAVE_NOTICE)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def rewrap(self) -> None:
        """Refill the whole document at the current width."""
        if not self.active or self.wrap_width is None:
            logger.debug("rewrap ignored: word wrap off")
            return
        self.layout.wrap_display(self.document, self.wrap_width)

    def unfill_current_paragraph(self) -> None:
        if not self.active or self.wrap_width is None:
            logger.debug("unfill_current_paragraph ignored: word wrap off")
            return
        doc = self.document
        paragraph = doc.paragraph_at(doc.point)
        if paragraph is None:
            return
        with doc.listeners_suspended():
            delta = unfill_paragraph(doc, paragraph.start, paragraph.end, settings=self.settings)
        self.layout.wrap_display(doc, self.wrap_width, paragraph.start, paragraph.end + delta)

    def unfill_whole_document(self) -> None:
        with self.document.listeners_suspended():
            unfill_buffer(self.document, settings=self.settings)
        self.rewrap()

    def convert_breaks_to_soft(self, start: int, end: int) -> None:
        doc = self.document
        start, end = sorted((start, end))
        for pos in tuple(break_positions(doc, start, end)):
            set_hard(doc, pos, False)
        if self.active and self.wrap_width is not None:
            self.layout.wrap_display(doc, self.wrap_width, start, end)

    def audit(self) -> tuple[BreakIssue, ...]:
        return audit_breaks(self.document, self.classification or "paragraph-ends")


def _discard(hooks: list[Callable[[], None]], hook: Callable[[], None]) -> None:
    if hook in hooks:
        hooks.remove(hook)
