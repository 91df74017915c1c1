"""
Unit tests for form tools.

This module contains unit tests for:
- select_option_by_text / select_option_by_value
- input_clear, input_type, input_set_value
- OptionQuery / InputValue validation
"""

from unittest.mock import AsyncMock, MagicMock, call

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from pydantic import ValidationError

from page_plus.errors import (
    ElementNotFoundError,
    OptionNotFoundError,
    SelectorTimeoutError,
    WaitTimeoutError,
)
from page_plus.tools import forms
from page_plus.tools.forms import (
    input_clear,
    input_set_value,
    input_type,
    select_option_by_text,
    select_option_by_value,
)
from page_plus.tools.models import InputValue, OptionQuery


@pytest.fixture
def page():
    """Mock Playwright page with awaitable methods."""
    page = MagicMock()
    page.url = "https://example.com/form"
    page.wait_for_selector = AsyncMock(return_value=MagicMock())
    page.click = AsyncMock()
    page.evaluate = AsyncMock()
    page.select_option = AsyncMock()
    page.keyboard.type = AsyncMock()
    return page


class TestSelectOptionByText:
    @pytest.mark.asyncio
    async def test_selects_matching_option(self, page, fast_config):
        page.evaluate.return_value = "selected"

        await select_option_by_text(page, "select#state", "New York")

        page.wait_for_selector.assert_awaited_once_with(
            "select#state", state="attached", timeout=5000
        )
        page.evaluate.assert_awaited_once_with(
            forms._SELECT_BY_TEXT_JS,
            {"selector": "select#state", "text": "New York"},
        )
        assert page.click.await_args_list == [
            call("select#state", timeout=5000),
            call("body", timeout=5000),
        ]

    @pytest.mark.asyncio
    async def test_missing_option_fails_loudly(self, page, fast_config):
        page.evaluate.return_value = "no-option"

        with pytest.raises(OptionNotFoundError, match="Narnia") as exc_info:
            await select_option_by_text(page, "select#state", "Narnia")

        assert exc_info.value.selector == "select#state"
        # the dropdown is left as is, body never clicked
        assert page.click.await_args_list == [call("select#state", timeout=5000)]

    @pytest.mark.asyncio
    async def test_hidden_select_still_selected(self, page, fast_config):
        """A SELECT hidden behind a custom widget cannot be clicked open."""
        page.click.side_effect = PlaywrightTimeoutError("element is not visible")
        page.evaluate.return_value = "selected"

        await select_option_by_text(page, "select#state", "Ohio", timeout_ms=200)

        page.evaluate.assert_awaited_once_with(
            forms._SELECT_BY_TEXT_JS,
            {"selector": "select#state", "text": "Ohio"},
        )
        assert page.click.await_args_list == [
            call("select#state", timeout=200),
            call("body", timeout=200),
        ]

    @pytest.mark.asyncio
    async def test_select_removed_after_wait(self, page, fast_config):
        page.evaluate.return_value = "no-element"

        with pytest.raises(ElementNotFoundError, match="select#state"):
            await select_option_by_text(page, "select#state", "Ohio")

    @pytest.mark.asyncio
    async def test_select_never_appears(self, page, fast_config):
        page.wait_for_selector.side_effect = PlaywrightTimeoutError("Timeout 5000ms exceeded")

        with pytest.raises(SelectorTimeoutError) as exc_info:
            await select_option_by_text(page, "select#state", "Ohio")

        assert isinstance(exc_info.value, WaitTimeoutError)
        assert isinstance(exc_info.value, ElementNotFoundError)
        assert "select#state" in str(exc_info.value)
        page.click.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_custom_timeout(self, page, fast_config):
        page.evaluate.return_value = "selected"

        await select_option_by_text(page, "#s", "A", settle_ms=0, timeout_ms=250)

        page.wait_for_selector.assert_awaited_once_with(
            "#s", state="attached", timeout=250
        )


class TestSelectOptionByValue:
    @pytest.mark.asyncio
    async def test_delegates_to_playwright(self, page):
        page.select_option.return_value = ["NY"]

        selected = await select_option_by_value(page, "select#state", "NY")

        assert selected == ["NY"]
        page.select_option.assert_awaited_once_with(
            "select#state", value="NY", timeout=30000
        )

    @pytest.mark.asyncio
    async def test_timeout_is_translated(self, page):
        page.select_option.side_effect = PlaywrightTimeoutError("Timeout")

        with pytest.raises(SelectorTimeoutError, match="select#missing"):
            await select_option_by_value(page, "select#missing", "NY", timeout_ms=10)


class TestInputs:
    @pytest.mark.asyncio
    async def test_clear(self, page):
        page.evaluate.return_value = True

        await input_clear(page, "input[name=q]")

        page.evaluate.assert_awaited_once_with(forms._CLEAR_JS, "input[name=q]")

    @pytest.mark.asyncio
    async def test_clear_missing_input(self, page):
        page.evaluate.return_value = False

        with pytest.raises(ElementNotFoundError, match=r"input\[name=q\]"):
            await input_clear(page, "input[name=q]")

    @pytest.mark.asyncio
    async def test_type_clicks_then_types(self, page):
        await input_type(page, "#email", "user@example.com")

        page.wait_for_selector.assert_awaited_once_with(
            "#email", state="attached", timeout=30000
        )
        page.click.assert_awaited_once_with("#email", timeout=30000)
        page.keyboard.type.assert_awaited_once_with("user@example.com")

    @pytest.mark.asyncio
    async def test_type_into_missing_input(self, page):
        page.wait_for_selector.side_effect = PlaywrightTimeoutError("Timeout")

        with pytest.raises(SelectorTimeoutError, match="#email"):
            await input_type(page, "#email", "x", timeout_ms=100)

        page.keyboard.type.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_type_into_unclickable_input(self, page):
        page.click.side_effect = PlaywrightTimeoutError("element is not visible")

        with pytest.raises(SelectorTimeoutError, match="#email") as exc_info:
            await input_type(page, "#email", "x", timeout_ms=100)

        assert exc_info.value.timeout_ms == 100
        page.click.assert_awaited_once_with("#email", timeout=100)
        page.keyboard.type.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_set_value_on_text_input(self, page):
        page.evaluate.return_value = "set"

        status = await input_set_value(page, "#zip", "10001")

        assert status == "set"
        page.evaluate.assert_awaited_once_with(
            forms._SET_VALUE_JS, {"selector": "#zip", "value": "10001"}
        )

    @pytest.mark.asyncio
    async def test_set_value_checks_radio(self, page):
        page.evaluate.return_value = "checked"

        status = await input_set_value(page, "input[name=size]", "L")

        assert status == "checked"

    @pytest.mark.asyncio
    async def test_set_value_unknown_radio_value(self, page):
        page.evaluate.return_value = "no-option"

        with pytest.raises(OptionNotFoundError, match='"XXL"'):
            await input_set_value(page, "input[name=size]", "XXL")

    @pytest.mark.asyncio
    async def test_set_value_missing_control(self, page):
        page.evaluate.return_value = "no-element"

        with pytest.raises(ElementNotFoundError):
            await input_set_value(page, "#nope", "1")


class TestParameterModels:
    def test_option_query_dump(self):
        query = OptionQuery(selector="#s", text="Two")
        assert query.model_dump() == {"selector": "#s", "text": "Two"}

    def test_option_query_requires_selector(self):
        with pytest.raises(ValidationError):
            OptionQuery(selector="", text="Two")

    def test_input_value_allows_empty_value(self):
        assert InputValue(selector="#q", value="").value == ""

    def test_models_are_frozen(self):
        query = OptionQuery(selector="#s", text="Two")
        with pytest.raises(ValidationError):
            query.text = "Three"
