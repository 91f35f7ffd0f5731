"""Shared fixtures for the article exporter tests. No network access needed."""

import sys
from pathlib import Path

import pytest

# Add the project root to the path so the package imports without installing
sys.path.insert(0, str(Path(__file__).parent))

from article_exporter.context import ExportContext, InMemoryMetadataStore
from article_exporter.factory import get_default_factory
from article_exporter.schemas import ExporterContent
from article_exporter.settings import Settings
from article_exporter.theme import Theme


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def theme():
    return Theme()


@pytest.fixture
def metadata():
    return InMemoryMetadataStore({42: {"subtitle": "From postmeta"}})


@pytest.fixture
def make_context(settings, theme, metadata):
    """Build an ExportContext for a piece of HTML; keyword args go to ExporterContent."""

    def _make(html: str = "", settings_override=None, theme_override=None, **content_fields):
        content_fields.setdefault("id", 42)
        content = ExporterContent(content=html, **content_fields)
        return ExportContext(
            content,
            settings if settings_override is None else settings_override,
            theme if theme_override is None else theme_override,
            factory=get_default_factory(),
            metadata=metadata
        )

    return _make
