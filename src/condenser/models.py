"""Data models for section-aware document compression."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SectionType(str, Enum):
    """Kinds of section found in an academic paper."""

    ABSTRACT = "abstract"
    INTRODUCTION = "introduction"
    METHOD = "method"
    EXPERIMENT = "experiment"
    RESULT = "result"
    DISCUSSION = "discussion"
    CONCLUSION = "conclusion"
    RELATED_WORK = "related_work"
    REFERENCE = "reference"
    APPENDIX = "appendix"
    OTHER = "other"


@dataclass(frozen=True)
class Section:
    """A contiguous span of a source document.

    ``start_line`` and ``end_line`` are zero-based and inclusive. For a
    section opened by a heading, ``start_line`` is the heading line itself
    and ``content`` holds the lines after it. Sections without a heading in
    the source (the whole-document fallback, or text before the first
    heading) carry a made-up title and ``synthetic_title=True``.

    ``title`` is the heading with surrounding whitespace stripped, so
    ``source_text`` rebuilds the heading from ``heading`` when one is set.
    """

    type: SectionType
    title: str
    content: str
    start_line: int
    end_line: int
    token_count: int
    synthetic_title: bool = False
    heading: str = ""  # raw heading line, when it differs from the title

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1

    def source_text(self) -> str:
        """Return the section as it appeared in the document, heading included."""
        if self.synthetic_title:
            return self.content
        heading = self.heading or self.title
        return f"{heading}\n{self.content}" if self.line_count > 1 else heading
