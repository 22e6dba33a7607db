from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Iterable

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from longlines.document import Document  # noqa: E402


@pytest.fixture
def document() -> Callable[..., Document]:
    def _make(text: str, hard: Iterable[int] = ()) -> Document:
        return Document.from_text(text, hard=hard)

    return _make


@pytest.fixture
def notices() -> list[str]:
    return []
