"""
Main orchestrator for the article exporter.

Coordinates the two-stage pipeline: ContentParser → ComponentsBuilder, and
wraps the result in an ArticleDocument with the registries and document
metadata.

Only fatal problems (settings or theme unavailable) raise; everything that
goes wrong with individual components is recorded in ``errors`` and the
export carries on.
"""

import hashlib
from typing import Optional

from .builder import ComponentsBuilder
from .context import ExportContext, InMemoryMetadataStore, MediaBundler
from .exceptions import SettingsError
from .factory import ComponentFactory, get_default_factory
from .logger import get_module_logger, setup_logger
from .schemas import ArticleDocument, DocumentLayout, ExporterContent
from .settings import Settings
from .theme import Theme
from .theme_store import ThemeStore

logger = get_module_logger("exporter")

GENERATOR_NAME = "article_exporter"
GENERATOR_IDENTIFIER = "ArticleExporter"


class Exporter:
    """
    Exports one content item to a structured article document.

    Usage:
        exporter = Exporter(ExporterContent(id=1, title="Hello", content="<p>Hi</p>"))
        document = exporter.export()
        print(document.to_json(indent=2))
    """

    def __init__(
        self,
        content: ExporterContent,
        settings: Optional[Settings] = None,
        theme: Optional[Theme] = None,
        theme_store: Optional[ThemeStore] = None,
        metadata=None,
        factory: Optional[ComponentFactory] = None,
        log_level: Optional[int] = None
    ):
        """
        Args:
            content: The content item to export
            settings: Exporter settings (defaults when None)
            theme: Theme to use; when None the store's active theme, else
                the built-in defaults
            theme_store: Source of the active theme
            metadata: Postmeta collaborator with ``get_metadata(id, key)``
            factory: Component registry (the built-in kinds when None)
            log_level: Reconfigure the package logger level
        """
        if log_level is not None:
            setup_logger(level=log_level)

        if settings is not None and not isinstance(settings, Settings):
            raise SettingsError(f"Expected Settings, got {type(settings).__name__}")

        self.content = content
        self.settings = settings or Settings()
        self.theme_store = theme_store
        self.theme = theme
        self.metadata = metadata if metadata is not None else InMemoryMetadataStore()
        self.factory = factory or get_default_factory()

        self.bundles: list[str] = []
        self.errors: dict[str, list[str]] = {}

    def resolve_theme(self) -> Theme:
        """
        Raises:
            ThemeError: The store has no usable active theme
        """
        if self.theme is not None:
            return self.theme
        if self.theme_store is not None:
            return self.theme_store.get_active()
        return Theme()

    def create_context(self, content: Optional[ExporterContent] = None) -> ExportContext:
        return ExportContext(
            content or self.content,
            self.settings,
            self.resolve_theme(),
            factory=self.factory,
            metadata=self.metadata,
            bundler=MediaBundler()
        )

    def export(self) -> ArticleDocument:
        """
        Run the full export.

        Returns:
            ArticleDocument with components, registries and metadata

        Raises:
            ThemeError: The theme cannot be loaded
        """
        logger.info(f"Exporting content {self.content.id}")
        context = self.create_context()

        builder = ComponentsBuilder(context)
        components = builder.build()
        metadata = self.document_metadata(context, builder.cover_url)

        self.bundles = list(context.bundler.bundles)
        self.errors = context.errors

        document = ArticleDocument(
            identifier=self.document_identifier(),
            title=self.content.title,
            layout=self.document_layout(context),
            components=components,
            componentTextStyles=context.registries.text_styles.to_dict(),
            componentLayouts=context.registries.layouts.to_dict(),
            componentStyles=context.registries.component_styles.to_dict(),
            documentStyle={"backgroundColor": context.get_setting("body_background_color")},
            metadata=metadata,
        )

        error_count = sum(len(messages) for messages in self.errors.values())
        logger.info(f"Complete: {len(components)} components, {len(self.bundles)} bundles, {error_count} errors")
        return document

    def export_json(self, indent: Optional[int] = None) -> str:
        return self.export().to_json(indent=indent)

    def export_html(self, html: str) -> list[dict]:
        """
        Export an HTML fragment on its own: no meta components, no pull quote.

        Returns:
            Component JSON for the fragment
        """
        content_settings = self.content.content_settings.model_copy(update={"pullquote": ""})
        content = self.content.model_copy(update={"content": html, "content_settings": content_settings})
        context = self.create_context(content)
        context.meta_components = False

        components = ComponentsBuilder(context).build()
        self.bundles = list(context.bundler.bundles)
        self.errors = context.errors
        return components

    # --- Document parts ---

    def document_identifier(self) -> str:
        if self.content.id:
            return str(self.content.id)
        # Unsaved content: derive a stable identifier from the title
        return hashlib.md5(self.content.title.encode("utf-8")).hexdigest()

    @staticmethod
    def document_layout(context: ExportContext) -> DocumentLayout:
        return DocumentLayout(
            columns=context.get_setting("layout_columns"),
            width=context.get_setting("layout_width"),
            margin=context.get_setting("layout_margin"),
            gutter=context.get_setting("layout_gutter"),
        )

    def document_metadata(self, context: ExportContext, cover_url: str) -> dict:
        from . import __version__

        metadata = {
            "generatorName": GENERATOR_NAME,
            "generatorVersion": __version__,
            "generatorIdentifier": GENERATOR_IDENTIFIER,
        }
        if self.content.intro:
            metadata["excerpt"] = self.content.intro
        if cover_url:
            metadata["thumbnailURL"] = context.bundle(cover_url)
        if self.content.permalink:
            metadata["canonicalURL"] = self.content.permalink
        if self.content.date_created:
            metadata["dateCreated"] = self.content.date_created
            metadata["datePublished"] = self.content.date_created
        if self.content.date_modified:
            metadata["dateModified"] = self.content.date_modified
        return metadata


def export_content(content: ExporterContent, settings: Optional[Settings] = None,
                   theme: Optional[Theme] = None) -> ArticleDocument:
    """Convenience function to export a content item."""
    return Exporter(content, settings=settings, theme=theme).export()


def export_html(html: str, title: str = "", settings: Optional[Settings] = None,
                theme: Optional[Theme] = None) -> ArticleDocument:
    """Convenience function to export an HTML string as a full document."""
    return export_content(ExporterContent(title=title, content=html), settings=settings, theme=theme)
