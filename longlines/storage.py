"""Load and save documents around the two-phase write contract."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from longlines.document import Document

logger = logging.getLogger(__name__)


def load_document(path: str | os.PathLike) -> Document:
    """Read ``path`` as UTF-8; loaded breaks carry no attribute."""
    text = Path(path).read_text(encoding="utf-8")
    logger.debug(f"loaded {len(text)} chars from {path}")
    return Document.from_text(text)


def save_document(doc: Document, path: str | os.PathLike) -> None:
    """Run ``before_write`` hooks, write the text, then ``after_write`` hooks."""
    for hook in tuple(doc.hooks.before_write):
        hook()
    Path(path).write_text(doc.text, encoding="utf-8")
    doc.modified = False
    logger.debug(f"wrote {len(doc)} chars to {path}")
    for hook in tuple(doc.hooks.after_write):
        hook()
