"""How much of each section type is worth keeping."""

from __future__ import annotations

from types import MappingProxyType

from condenser.models import SectionType

# Retention ratio per section type. References are dropped outright.
SECTION_IMPORTANCE = MappingProxyType({
    SectionType.ABSTRACT: 1.0,
    SectionType.INTRODUCTION: 0.9,
    SectionType.METHOD: 1.0,
    SectionType.EXPERIMENT: 0.8,
    SectionType.RESULT: 0.8,
    SectionType.DISCUSSION: 0.6,
    SectionType.CONCLUSION: 0.9,
    SectionType.RELATED_WORK: 0.5,
    SectionType.REFERENCE: 0.0,
    SectionType.APPENDIX: 0.3,
    SectionType.OTHER: 0.7,
})


def importance(section_type: SectionType) -> float:
    """Return the retention ratio for ``section_type``."""
    return SECTION_IMPORTANCE[section_type]
