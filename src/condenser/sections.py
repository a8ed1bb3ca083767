"""Split extracted paper text into typed sections by heading lines."""

from __future__ import annotations

import re

from condenser.models import Section, SectionType
from condenser.tokens import count_tokens

# Optional section numbering: "2", "2.", "3.1", "3.1.", "IV.", "A."
_NUMBERING = r"(?:(?:\d+(?:\.\d+)*\.?|(?:[IVX]+|[A-Z])\.)\s*)?"

# English keywords must end at a word boundary; CJK keywords need not.
_HEADING_KEYWORDS: list[tuple[SectionType, str, str]] = [
    (SectionType.ABSTRACT, r"abstract", r"摘要"),
    (SectionType.INTRODUCTION, r"introduction", r"引言|绪论"),
    (SectionType.METHOD, r"methods?|methodology|approach", r"方法"),
    (SectionType.EXPERIMENT, r"experiments?|experimental|evaluation", r"实验|评估"),
    (SectionType.RESULT, r"results?|findings", r"结果"),
    (SectionType.DISCUSSION, r"discussion", r"讨论"),
    (SectionType.CONCLUSION, r"conclusions?|summary", r"结论|总结"),
    (SectionType.RELATED_WORK, r"related\s+works?|background", r"相关工作|背景"),
    (SectionType.REFERENCE, r"references?|bibliography", r"参考文献"),
    (SectionType.APPENDIX, r"appendix|appendices", r"附录"),
]

# Checked in order; the first match wins.
_HEADING_RE: list[tuple[SectionType, re.Pattern[str]]] = [
    (
        section_type,
        re.compile(rf"^{_NUMBERING}(?:(?:{english})(?![a-z])|(?:{cjk}))", re.IGNORECASE),
    )
    for section_type, english, cjk in _HEADING_KEYWORDS
]

# Lines longer than this are running prose, not headings.
MAX_HEADING_LENGTH = 80

FULL_TEXT_TITLE = "Full Text"
PREAMBLE_TITLE = "Front Matter"


def match_heading(line: str) -> SectionType | None:
    """Return the section type a heading line opens, or ``None``."""
    stripped = line.strip()
    if not stripped or len(stripped) > MAX_HEADING_LENGTH:
        return None
    for section_type, pattern in _HEADING_RE:
        if pattern.match(stripped):
            return section_type
    return None


def classify_sections(text: str, model: str | None = None) -> list[Section]:
    """Partition ``text`` into ordered, non-overlapping sections.

    Every line of the input belongs to exactly one section. Text before the
    first recognised heading becomes an ``OTHER`` section titled
    ``Front Matter``; a document with no recognised heading at all becomes a
    single ``OTHER`` section titled ``Full Text``. Never returns an empty list.

    Args:
        text: Plain document text.
        model: Model hint passed to the token counter.
    """
    lines = text.split("\n")
    sections: list[Section] = []

    current_type: SectionType | None = None
    current_title = PREAMBLE_TITLE
    current_start = 0
    current_synthetic = True
    current_heading = ""
    current_lines: list[str] = []

    def close(end_line: int) -> None:
        content = "\n".join(current_lines)
        sections.append(
            Section(
                type=current_type or SectionType.OTHER,
                title=current_title,
                content=content,
                start_line=current_start,
                end_line=end_line,
                token_count=count_tokens(content, model),
                synthetic_title=current_synthetic,
                heading=current_heading,
            )
        )

    for i, line in enumerate(lines):
        matched = match_heading(line)
        if matched is None:
            current_lines.append(line)
            continue

        # Lines before the first heading get their own section
        if current_type is not None or i > 0:
            close(i - 1)

        current_type = matched
        current_title = line.strip()
        current_heading = line if line != current_title else ""
        current_start = i
        current_synthetic = False
        current_lines = []

    if current_type is None:
        return [
            Section(
                type=SectionType.OTHER,
                title=FULL_TEXT_TITLE,
                content=text,
                start_line=0,
                end_line=len(lines) - 1,
                token_count=count_tokens(text, model),
                synthetic_title=True,
            )
        ]

    close(len(lines) - 1)
    return sections
