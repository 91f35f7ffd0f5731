"""
Component registry and node dispatcher.

Component kinds are kept in an ordered table. A parser node is offered to
each HTML-based kind in turn and the first one that claims it builds the
component, so more specific matchers (tweet URL, gallery markup) sit before
generic ones (body text).
"""

from functools import lru_cache
from typing import NamedTuple, Optional

from bs4 import NavigableString, Tag

from .components import (
    Advertisement, Aside, Audio, Body, Byline, Cover, Divider, EmbedWebVideo, Facebook,
    Footnotes, Gallery, Heading, Image, InArticle, Intro, Quote, Table, Title, Tweet, Video
)
from .components.base import AnchorPosition, Component
from .exceptions import ComponentError
from .logger import get_module_logger
from .parser import node_name, wrap_inline_runs

logger = get_module_logger("factory")


class ComponentKind(NamedTuple):
    """One entry of the registry table."""
    name: str
    component_class: type
    html_based: bool = True


# Match priority for HTML-based kinds, then the kinds built by name
DEFAULT_KINDS = [
    ComponentKind("aside", Aside),
    ComponentKind("advertisement", Advertisement),
    ComponentKind("footnotes", Footnotes),
    ComponentKind("gallery", Gallery),
    ComponentKind("tweet", Tweet),
    ComponentKind("facebook", Facebook),
    ComponentKind("embed_web_video", EmbedWebVideo),
    ComponentKind("table", Table),
    ComponentKind("img", Image),
    ComponentKind("audio", Audio),
    ComponentKind("video", Video),
    ComponentKind("heading", Heading),
    ComponentKind("blockquote", Quote),
    ComponentKind("body", Body),
    ComponentKind("divider", Divider),
    ComponentKind("cover", Cover, html_based=False),
    ComponentKind("title", Title, html_based=False),
    ComponentKind("byline", Byline, html_based=False),
    ComponentKind("intro", Intro, html_based=False),
    ComponentKind("in_article", InArticle, html_based=False),
]


def node_html(node) -> str:
    """Serialise a node for a component build; text is entity-escaped."""
    if isinstance(node, NavigableString):
        return node.output_ready()
    return str(node)


class ComponentFactory:
    """Ordered table of component kinds plus the dispatch loop over it."""

    def __init__(self, kinds: Optional[list[ComponentKind]] = None):
        self._kinds: list[ComponentKind] = []
        for kind in (DEFAULT_KINDS if kinds is None else kinds):
            self.register(kind)

    @property
    def kinds(self) -> list[ComponentKind]:
        return list(self._kinds)

    def register(self, kind: ComponentKind, before: Optional[str] = None) -> None:
        """
        Add a kind to the table, replacing any kind with the same name.

        Args:
            kind: The kind to add
            before: Name of an existing kind to insert ahead of; the end of
                the table by default
        """
        if not issubclass(kind.component_class, Component):
            raise TypeError(f"{kind.component_class!r} is not a Component")

        self._kinds = [k for k in self._kinds if k.name != kind.name]

        # Specs are declared once per kind, at registration
        kind.component_class.get_specs()

        index = len(self._kinds)
        if before is not None:
            for i, existing in enumerate(self._kinds):
                if existing.name == before:
                    index = i
                    break
        self._kinds.insert(index, kind)
        logger.debug(f"Registered component kind '{kind.name}' at position {index}")

    def get_kind(self, name: str) -> Optional[ComponentKind]:
        for kind in self._kinds:
            if kind.name == name:
                return kind
        return None

    def get_component(
        self,
        name: str,
        html: Optional[str],
        context,
        anchor_position: AnchorPosition = AnchorPosition.NONE
    ) -> Optional[Component]:
        """
        Build a component of a named kind.

        Returns:
            The component, or None when the kind is unknown or the build
            failed (logged under ``component_errors``)
        """
        kind = self.get_kind(name)
        if kind is None:
            context.log_error("component_errors", f"Unknown component kind '{name}'")
            return None

        try:
            return kind.component_class(html, context, anchor_position=anchor_position)
        except ComponentError as e:
            context.log_error("component_errors", e.message)
        except Exception as e:
            # One broken element must not stop the rest of the export
            logger.exception(f"Building '{name}' failed")
            context.log_error("component_errors", f"{kind.component_class.__name__}: {e}")
        return None

    def get_components_from_node(self, node, context) -> list[Component]:
        """
        Turn one parser node into components.

        Returns:
            Components in document order; empty when nothing claims the node
            or its children
        """
        for kind in self._kinds:
            if not kind.html_based:
                continue

            matched = kind.component_class.node_matches(node, context)
            if matched is None:
                continue

            # The matcher split the node into several parts
            if isinstance(matched, list):
                components = []
                for part in matched:
                    component = self.get_component(part["name"], part["value"], context)
                    if component is not None:
                        components.append(component)
                return components

            component = self.get_component(kind.name, node_html(matched), context)
            return [component] if component is not None else []

        # Unclaimed containers: look inside
        if isinstance(node, Tag):
            children = wrap_inline_runs(node.children)
            if children:
                components = []
                for child in children:
                    components.extend(self.get_components_from_node(child, context))
                return components

        context.log_error("component_errors", f"Node '{node_name(node)}' is not supported")
        return []


@lru_cache(maxsize=1)
def get_default_factory() -> ComponentFactory:
    """The factory with the built-in kinds, created on first use."""
    return ComponentFactory()
