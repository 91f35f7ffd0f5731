"""
Per-export context.

One ExportContext is created for each export and passed to the parser, the
factory, every component and the builder. It owns the registries, the media
bundle list and the error log of that export, so concurrent exports of
different content never share mutable state.

Nested exports (an aside's inner HTML) get a sub-context: same registries,
bundles and error log, but prefixed registry names, no meta components and no
drop cap.
"""

import hashlib
import posixpath
from typing import Any, Optional, Union
from urllib.parse import unquote, urlsplit

from .exceptions import ComponentError, ParserError
from .logger import get_export_logger
from .registry import Registries
from .schemas import ExporterContent
from .settings import Settings
from .theme import Theme

BUNDLE_SCHEME = "bundle://"


def get_filename(url: str) -> str:
    """Filename part of a URL, query string and fragment removed."""
    path = urlsplit(url).path
    return unquote(posixpath.basename(path))


class MediaBundler:
    """
    Collects media URLs that must be packaged alongside the document.

    The list is ordered and deduplicated by URL.
    """

    def __init__(self):
        self.bundles: list[str] = []

    def bundle(self, url: str, use_remote: bool = False) -> str:
        """
        Register a media URL and return the reference to embed in the output.

        Args:
            url: Absolute media URL
            use_remote: Pass the URL through unchanged instead of bundling it

        Returns:
            ``bundle://<filename>``, or ``url`` itself for remote images and
            already-bundled references
        """
        if not url or url.startswith(BUNDLE_SCHEME) or use_remote:
            return url
        if url not in self.bundles:
            self.bundles.append(url)
        return BUNDLE_SCHEME + get_filename(url)

    def find_original(self, reference: str) -> Optional[str]:
        """Map a ``bundle://`` reference back to the URL it was made from."""
        basename = reference.replace(BUNDLE_SCHEME, "", 1)
        for url in self.bundles:
            if get_filename(url) == basename:
                return url
        return None


class InMemoryMetadataStore:
    """Per-content metadata (``#postmeta.<key>#`` tokens) held in a dict."""

    def __init__(self, data: Optional[dict[int, dict[str, Any]]] = None):
        self._data = data or {}

    def get_metadata(self, context_id: int, key: str) -> Any:
        return self._data.get(context_id, {}).get(key)


class _ExportState:
    """State shared by a context and all of its sub-contexts."""

    def __init__(self, registries: Registries, bundler: MediaBundler):
        self.registries = registries
        self.bundler = bundler
        self.errors: dict[str, list[str]] = {}
        self.identifier_count = 0
        self.dropcap_used = False


class ExportContext:
    """Everything one export reads and writes."""

    def __init__(
        self,
        content: ExporterContent,
        settings: Settings,
        theme: Theme,
        factory=None,
        metadata=None,
        bundler: Optional[MediaBundler] = None,
        registries: Optional[Registries] = None
    ):
        self.content = content
        self.settings = settings
        self.theme = theme
        self.factory = factory
        self.metadata = metadata
        self.name_prefix = ""
        self.parent: Optional[str] = None
        self.meta_components = True
        self.dropcap_enabled = True
        self._state = _ExportState(registries or Registries(), bundler or MediaBundler())

    # --- Shared state accessors ---

    @property
    def registries(self) -> Registries:
        return self._state.registries

    @property
    def bundler(self) -> MediaBundler:
        return self._state.bundler

    @property
    def errors(self) -> dict[str, list[str]]:
        return self._state.errors

    @property
    def post_id(self) -> int:
        return self.content.id

    @property
    def logger(self):
        return get_export_logger("context", self.content.id)

    # --- Configuration ---

    def get_setting(self, name: str) -> Any:
        """Exporter settings first, then the theme (computed keys included)."""
        if self.settings.has(name):
            return self.settings.get(name)
        return self.theme.get_value(name)

    # --- Collaborators ---

    def log_error(self, category: str, message: str) -> None:
        """Record a non-fatal problem; the export continues."""
        self._state.errors.setdefault(category, []).append(message)
        self.logger.warning(f"[{category}] {message}")

    def bundle(self, url: str) -> str:
        return self.bundler.bundle(url, use_remote=self.get_setting("use_remote_images") == "yes")

    # --- Naming ---

    def prefixed(self, name: str) -> str:
        return f"{self.name_prefix}{name}"

    def next_identifier(self, seed: str = "") -> str:
        """Deterministic unique identifier for an anchor target."""
        self._state.identifier_count += 1
        digest = hashlib.md5(f"{self._state.identifier_count}:{seed}".encode("utf-8")).hexdigest()
        return f"component-{digest}"

    def claim_dropcap(self) -> bool:
        """True exactly once per export, for the first body component, when drop caps are on."""
        if not self.dropcap_enabled or self._state.dropcap_used:
            return False
        if self.get_setting("initial_dropcap") != "yes":
            return False
        self._state.dropcap_used = True
        return True

    # --- Nested exports ---

    def subcontext(self, parent: str) -> "ExportContext":
        """
        Context for exporting HTML nested inside a ``parent`` component.

        Registry names get a ``<parent>-subcomponent-`` prefix and overrides
        are looked up under the parent's ``subcomponents`` block.
        """
        child = ExportContext.__new__(ExportContext)
        child.content = self.content
        child.settings = self.settings
        child.theme = self.theme
        child.factory = self.factory
        child.metadata = self.metadata
        child.name_prefix = f"{self.name_prefix}{parent}-subcomponent-"
        child.parent = parent
        child.meta_components = False
        child.dropcap_enabled = False
        child._state = self._state
        return child

    def export_fragment(self, html: Union[str, Any]) -> list[dict]:
        """
        Build and flatten the components for an HTML fragment or element.

        Used by container components; no meta components, no grouping.
        """
        from .parser import ContentParser

        parser = ContentParser(self)
        try:
            if isinstance(html, str):
                components = parser.parse(html)
            else:
                components = parser.parse_node(html)
        except ParserError as e:
            self.log_error("component_errors", e.message)
            return []

        result = []
        for component in components:
            try:
                component_array = component.to_array()
            except ComponentError as e:
                self.log_error("component_errors", e.message)
                continue
            if component_array:
                result.append(component_array)
        return result
