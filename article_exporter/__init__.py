"""
Article Exporter

Compiles editor HTML into a structured article document: typed components
plus named layout, style and text-style registries.
- ContentParser: HTML → component instances
- ComponentsBuilder: anchoring, grouping, meta components
- Exporter: orchestrates both and builds the document

Public API surface:
  Pipeline classes  — Exporter, ContentParser, ComponentsBuilder, ComponentFactory
  Configuration     — Settings, Theme, ThemeStore, ComponentSpec
  Data models       — ExporterContent, Cover, ContentSettings, ArticleDocument
  Error types       — ExporterError and subclasses
"""

__version__ = "0.1.0"

# --- Pipeline ---
from .exporter import Exporter, export_content, export_html
from .parser import ContentParser
from .builder import ComponentsBuilder
from .factory import ComponentFactory, ComponentKind, get_default_factory
from .context import ExportContext, InMemoryMetadataStore, MediaBundler

# --- Configuration ---
from .settings import Settings
from .theme import Theme, THEME_DEFAULTS
from .theme_store import ThemeStore
from .component_spec import ComponentSpec

# --- Data models ---
from .schemas import ArticleDocument, ContentSettings, Cover, ExporterContent

# --- Exceptions ---
from .exceptions import (
    ComponentError, ExporterError, ParserError, SettingsError, SpecValidationError, ThemeError
)

__all__ = [
    "Exporter",
    "export_content",
    "export_html",
    "ContentParser",
    "ComponentsBuilder",
    "ComponentFactory",
    "ComponentKind",
    "get_default_factory",
    "ExportContext",
    "InMemoryMetadataStore",
    "MediaBundler",
    "Settings",
    "Theme",
    "THEME_DEFAULTS",
    "ThemeStore",
    "ComponentSpec",
    "ArticleDocument",
    "ContentSettings",
    "Cover",
    "ExporterContent",
    "ComponentError",
    "ExporterError",
    "ParserError",
    "SettingsError",
    "SpecValidationError",
    "ThemeError",
]
