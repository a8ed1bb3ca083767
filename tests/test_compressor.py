"""Tests for single-section compression and its truncation fallback."""

import asyncio

import pytest

from condenser.compressor import (
    MIN_SECTION_TOKENS,
    REFERENCE_PLACEHOLDER,
    TRUNCATION_MARKER,
    compress_buffer,
    compress_section,
    desired_length,
    truncate_section,
)
from condenser.importance import SECTION_IMPORTANCE, importance
from condenser.models import SectionType


class TestImportance:
    def test_table_covers_every_type(self):
        assert set(SECTION_IMPORTANCE) == set(SectionType)

    def test_references_dropped_and_others_kept(self):
        assert importance(SectionType.REFERENCE) == 0.0
        assert importance(SectionType.ABSTRACT) == 1.0
        assert importance(SectionType.METHOD) == 1.0
        for section_type in SectionType:
            if section_type != SectionType.REFERENCE:
                assert 0.0 < importance(section_type) <= 1.0

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            SECTION_IMPORTANCE[SectionType.OTHER] = 0.1


class TestDesiredLength:
    @pytest.mark.parametrize(
        "section_type,expected",
        [
            (SectionType.ABSTRACT, 1000),
            (SectionType.EXPERIMENT, 800),
            (SectionType.OTHER, 700),
            (SectionType.RELATED_WORK, 500),
            (SectionType.APPENDIX, 300),
        ],
    )
    def test_scaled_by_importance(self, make_section, section_type, expected):
        assert desired_length(make_section(section_type, 5000), 1000) == expected

    def test_never_below_minimum_retention(self, make_section):
        # References have importance 0 but still get the 30% floor
        assert desired_length(make_section(SectionType.REFERENCE, 5000), 1000) == 300

    def test_non_positive_target(self, make_section):
        assert desired_length(make_section(SectionType.METHOD, 5000), -50) == 0


class TestCompressSection:
    async def test_reference_replaced_without_llm(self, fake_llm, make_section):
        section = make_section(SectionType.REFERENCE, 500)
        assert await compress_section(section, 10, fake_llm) == REFERENCE_PLACEHOLDER
        assert fake_llm.requests == []

    async def test_fits_returns_content_unchanged(self, fake_llm, make_section):
        section = make_section(SectionType.DISCUSSION, 200)
        assert await compress_section(section, 200, fake_llm) == section.content
        assert fake_llm.requests == []

    async def test_too_long_calls_llm_once(self, fake_llm, make_section):
        fake_llm.reply = "the short version"
        section = make_section(SectionType.OTHER, 50_000)

        result = await compress_section(section, 2000, fake_llm)

        assert result == "the short version"
        assert len(fake_llm.requests) == 1
        request = fake_llm.requests[0]
        assert "about 1400 tokens" in request.system
        assert request.temperature == 0.3
        assert [m.role for m in request.messages] == ["system", "user"]
        assert section.content in request.messages[1].content

    @pytest.mark.parametrize(
        "section_type,phrase",
        [
            (SectionType.METHOD, "core algorithm"),
            (SectionType.EXPERIMENT, "experimental setup"),
            (SectionType.ABSTRACT, "original wording"),
            (SectionType.CONCLUSION, "original wording"),
            (SectionType.RELATED_WORK, "most relevant prior work"),
            (SectionType.APPENDIX, "essential supplementary"),
        ],
    )
    async def test_instruction_depends_on_type(self, fake_llm, make_section, section_type, phrase):
        await compress_section(make_section(section_type, 1000), 100, fake_llm)
        assert phrase in fake_llm.requests[0].system

    async def test_failure_truncates_proportionally(self, fake_llm, make_section):
        fake_llm.fail_with = RuntimeError("rate limited")
        section = make_section(SectionType.OTHER, 50_000)

        result = await compress_section(section, 2000, fake_llm)

        # 200,000 chars * 1400 / 50,000 tokens
        assert result == "x" * 5600 + TRUNCATION_MARKER

    async def test_failure_logs_warning(self, fake_llm, make_section, caplog):
        fake_llm.fail_with = ConnectionError("network down")
        await compress_section(make_section(SectionType.METHOD, 1000), 100, fake_llm)
        assert "truncating" in caplog.text
        assert "network down" in caplog.text

    async def test_timeout_truncates(self, fake_llm, make_section):
        fake_llm.delay = 1.0
        section = make_section(SectionType.METHOD, 1000)

        result = await compress_section(section, 100, fake_llm, timeout=0.01)

        assert result == "x" * 400 + TRUNCATION_MARKER

    async def test_empty_response_truncates(self, fake_llm, make_section):
        fake_llm.reply = "   "
        result = await compress_section(make_section(SectionType.APPENDIX, 1000), 100, fake_llm)
        # Appendix keeps 30% of the 100-token target
        assert result == "x" * 120 + TRUNCATION_MARKER

    async def test_no_room_still_asks_for_a_short_version(self, fake_llm, make_section):
        fake_llm.reply = "gist"
        result = await compress_section(make_section(SectionType.CONCLUSION, 1000), -200, fake_llm)
        assert result == "gist"
        assert len(fake_llm.requests) == 1
        assert f"about {MIN_SECTION_TOKENS} tokens" in fake_llm.requests[0].system

    async def test_no_room_failure_keeps_a_short_prefix(self, fake_llm, make_section):
        fake_llm.fail_with = RuntimeError("down")
        result = await compress_section(make_section(SectionType.CONCLUSION, 1000), 0, fake_llm)
        assert result == "x" * (MIN_SECTION_TOKENS * 4) + TRUNCATION_MARKER

    async def test_empty_section_with_no_room(self, fake_llm, make_section):
        section = make_section(SectionType.OTHER, 0)
        assert await compress_section(section, -10, fake_llm) == ""
        assert fake_llm.requests == []

    async def test_section_not_mutated(self, fake_llm, make_section):
        fake_llm.fail_with = RuntimeError("boom")
        section = make_section(SectionType.RESULT, 1000)
        before = (section.content, section.token_count, section.title)
        await compress_section(section, 100, fake_llm)
        assert (section.content, section.token_count, section.title) == before


class TestTruncateSection:
    def test_never_longer_than_content(self, make_section):
        section = make_section(SectionType.OTHER, 10)
        assert truncate_section(section, 500) == section.content + TRUNCATION_MARKER

    def test_zero_token_section(self, make_section):
        section = make_section(SectionType.OTHER, 0)
        assert truncate_section(section, 10) == TRUNCATION_MARKER


class TestCompressBuffer:
    async def test_returns_llm_output(self, fake_llm):
        fake_llm.reply = "merged summary"
        assert await compress_buffer("long buffer", 300, fake_llm) == "merged summary"
        assert "about 300 tokens" in fake_llm.requests[0].system

    async def test_errors_propagate(self, fake_llm):
        fake_llm.fail_with = RuntimeError("down")
        with pytest.raises(RuntimeError):
            await compress_buffer("long buffer", 300, fake_llm)

    async def test_timeout_propagates(self, fake_llm):
        fake_llm.delay = 1.0
        with pytest.raises(asyncio.TimeoutError):
            await compress_buffer("long buffer", 300, fake_llm, timeout=0.01)
