"""
Pytest Configuration and Fixtures
"""

import pytest

from config.settings import Settings
from core.pdf_engine import (
    FontManager, Paginator, StyleResolver, TextMeasurer, LineWrapper,
    PageSpec, create_template,
)


@pytest.fixture
def font_manager():
    """Font manager with no search paths: always the built-in Helvetica family"""
    return FontManager(search_paths=[])


@pytest.fixture
def cv_template():
    return create_template("cv")


@pytest.fixture
def resolver(cv_template, font_manager):
    font_manager.register_template_fonts(cv_template)
    return StyleResolver(cv_template, font_manager)


@pytest.fixture
def measurer():
    return TextMeasurer()


@pytest.fixture
def wrapper(measurer):
    return LineWrapper(measurer)


@pytest.fixture
def small_page():
    """300 x 400 pt page with 20 pt margins (260 x 360 printable)"""
    return PageSpec(
        width=300, height=400,
        top_margin=20, right_margin=20,
        bottom_margin=20, left_margin=20,
    )


@pytest.fixture
def make_paginator(resolver, measurer):
    """Build a Paginator for a given page spec"""
    def _make(spec):
        return Paginator(resolver, spec, measurer)
    return _make


@pytest.fixture
def settings(tmp_path):
    """Settings isolated from the environment's .env"""
    return Settings(_env_file=None, output_dir=tmp_path / "output")
