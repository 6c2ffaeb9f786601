"""Pytest configuration and shared fixtures for the mdcomponents test suite."""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from mdcomponents.options import StyleConfig

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")


@pytest.fixture
def plain_style() -> StyleConfig:
    """Provide a style configuration without any styles, so rendered text has no spans."""
    return StyleConfig(
        emphasis_style="",
        strong_style="",
        strikethrough_style="",
        code_style="",
        link_style="",
        heading_styles=("",) * 6,
        block_quote_style="",
        code_block_style="",
    )
