"""Detect break attributes that disagree with the paragraph structure.

Nothing here changes the document: unfill keeps treating every hard break as
structural. The report only makes such breaks visible.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from longlines.breaks import break_positions, is_hard
from longlines.document import Document
from longlines.heuristic import Classification

IssueKind = Literal[
    "hard-mid-paragraph",  # hard break between two lines of one paragraph
    "soft-paragraph-end",  # paragraph terminator without the hard attribute
]


@dataclass(frozen=True)
class BreakIssue:
    position: int
    kind: IssueKind

    def __str__(self) -> str:
        return f"{self.kind} at {self.position}"


def audit_breaks(doc: Document, classification: Classification = "paragraph-ends") -> tuple[BreakIssue, ...]:
    issues: list[BreakIssue] = []
    for paragraph in doc.paragraphs():
        if classification == "paragraph-ends":
            issues.extend(
                BreakIssue(pos, "hard-mid-paragraph")
                for pos in break_positions(doc, paragraph.start, paragraph.end)
                if is_hard(doc, pos)
            )
        if doc.is_break(paragraph.end) and not is_hard(doc, paragraph.end):
            issues.append(BreakIssue(paragraph.end, "soft-paragraph-end"))
    return tuple(issues)
