"""Shared fixtures for page_plus tests."""

import pytest

from page_plus.config import PagePlusConfig, set_config


@pytest.fixture(autouse=True)
def reset_config():
    """Use built-in defaults, never the developer's environment."""
    set_config(PagePlusConfig())
    yield
    set_config(None)


@pytest.fixture
def fast_config():
    """Defaults with every scroll delay set to zero."""
    config = PagePlusConfig(
        autoscroll_interval_ms=0,
        autoscroll_settle_ms=0,
        scroll_to_bottom_interval_ms=0,
        select_settle_ms=0,
    )
    set_config(config)
    return config
