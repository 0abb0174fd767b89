"""Tests for the element locator."""

import pytest

from trade_agent.perception import exists, locate, locate_containing


@pytest.fixture
def tabs(document):
    document.add("div[role=tab]", text=" 买入 ")
    document.add("div[role=tab]", text="卖出")
    document.add("div[role=tab]", text="限价")
    return document


class TestLocate:
    """Tests for locate()."""

    @pytest.mark.asyncio
    async def test_text_filter_narrows_to_single_match(self, tabs):
        """Three structural candidates, one exact trimmed text match."""
        node = await locate(tabs, "div[role=tab]", "买入")
        assert node is tabs.nodes["div[role=tab]"][0]

    @pytest.mark.asyncio
    async def test_no_text_match_returns_none(self, tabs):
        assert await locate(tabs, "div[role=tab]", "市价") is None

    @pytest.mark.asyncio
    async def test_text_filter_is_exact_not_substring(self, tabs):
        assert await locate(tabs, "div[role=tab]", "买") is None

    @pytest.mark.asyncio
    async def test_ambiguous_text_match_returns_none(self, tabs):
        tabs.add("div[role=tab]", text="买入")
        assert await locate(tabs, "div[role=tab]", "买入") is None

    @pytest.mark.asyncio
    async def test_multiple_candidates_without_filter_return_none(self, tabs):
        assert await locate(tabs, "div[role=tab]") is None

    @pytest.mark.asyncio
    async def test_single_candidate_without_filter(self, document):
        node = document.add("#fromCoinAmount")
        assert await locate(document, "#fromCoinAmount") is node

    @pytest.mark.asyncio
    async def test_missing_selector_returns_none(self, document):
        assert await locate(document, "#missing") is None


class TestLocateContaining:
    """Tests for locate_containing()."""

    @pytest.mark.asyncio
    async def test_first_match_wins(self, document):
        document.add("div.option", text="0.5%")
        first = document.add("div.option", text="自定义 %")
        document.add("div.option", text="自定义")
        assert await locate_containing(document, "div.option", "自定义") is first

    @pytest.mark.asyncio
    async def test_no_match_returns_none(self, document):
        document.add("div.option", text="0.5%")
        assert await locate_containing(document, "div.option", "自定义") is None


class TestExists:
    @pytest.mark.asyncio
    async def test_exists(self, document):
        assert not await exists(document, ".bn-modal-footer")
        document.add(".bn-modal-footer")
        assert await exists(document, ".bn-modal-footer")
