"""Section-aware compression of long papers to fit an LLM context window."""

from condenser.aggregator import rolling_compress
from condenser.compressor import compress_section
from condenser.models import Section, SectionType
from condenser.pipeline import CompressionPipeline, maybe_compress
from condenser.sections import classify_sections
from condenser.tokens import TokenCounter, count_tokens

__all__ = [
    "CompressionPipeline",
    "Section",
    "SectionType",
    "TokenCounter",
    "classify_sections",
    "compress_section",
    "count_tokens",
    "maybe_compress",
    "rolling_compress",
]
