"""
Components builder: the assembly stage of an export.

Takes the components the parser produced and turns them into the final,
ordered list of component JSON:

  1. Promote the first body image to cover when the content has none
  2. Anchor floating components to a neighbour
  3. Insert the pull quote and the in-article module
  4. Flatten to JSON, dropping components that built nothing or failed
  5. Prepend the meta components (cover, title, byline)
  6. Group adjacent body text, mark the last body, wrap what follows the cover

Pipeline position: Stage 2 of 2 (ContentParser → ComponentsBuilder).
Every pass is order-dependent; nothing here runs concurrently.
"""

import copy
import math
from html import escape
from typing import Optional

from .components.base import AnchorPosition, Component
from .exceptions import ComponentError, ParserError
from .factory import get_default_factory
from .logger import get_module_logger
from .parser import ContentParser

logger = get_module_logger("builder")

PULLQUOTE_POSITIONS = ("top", "middle", "bottom")

DEFAULT_ANCHOR = {
    "targetAnchorPosition": "center",
    "rangeStart": 0,
    "rangeLength": 1,
}

LAST_BODY_LAYOUT = "body-layout-last"
COVER_BELOW_TEXT_LAYOUT = "headerBelowTextPhotoLayout"


def is_plain_body(component: Optional[dict]) -> bool:
    """Body text that neither is an anchor target nor floats."""
    return (
        component is not None
        and component.get("role") == "body"
        and not component.get("identifier")
        and not component.get("anchor")
    )


class ComponentsBuilder:
    """Builds the component list of one export."""

    def __init__(self, context):
        self.context = context
        self.factory = context.factory or get_default_factory()
        content_cover = context.content.cover
        self.cover_url: str = content_cover.url if content_cover else ""

    # --- Entry point ---

    def build(self) -> list[dict]:
        """
        Run every pass over the content.

        Returns:
            Component JSON in final document order
        """
        components = self.split_into_components()

        self.add_thumbnail_if_needed(components)
        self.anchor_components(components)
        self.add_pullquote_if_needed(components)
        self.add_in_article_if_needed(components)

        arrays = self.flatten(components)

        # Meta components go in last: thumbnail promotion may have set the cover
        if self.context.meta_components:
            arrays = self.meta_components() + arrays

        return self.group_body_components(arrays)

    def split_into_components(self) -> list[Component]:
        parser = ContentParser(self.context, factory=self.factory)
        try:
            return parser.parse(self.context.content.content)
        except ParserError as e:
            self.context.log_error("component_errors", e.message)
            return []

    # --- Passes over component objects ---

    def add_thumbnail_if_needed(self, components: list[Component]) -> None:
        """Use the first body image as the cover when the content has none."""
        if self.cover_url or not self.context.meta_components:
            return
        if "cover" not in (self.get_setting("meta_component_order") or []):
            return

        image_kind = self.factory.get_kind("img")
        if image_kind is None:
            return

        for index, component in enumerate(components):
            if not isinstance(component, image_kind.component_class) or component.json is None:
                continue

            url = component.original_url()
            if not url:
                return

            # The image moves to the cover, it is not repeated in the body
            self.cover_url = url
            del components[index]
            logger.debug(f"Promoted body image to cover: {url}")
            return

    def anchor_components(self, components: list[Component]) -> None:
        """Pin every floating component to a neighbouring target."""
        length = len(components)
        for index, component in enumerate(components):
            if component.json is None or component.is_anchor_target():
                continue
            if component.anchor_position == AnchorPosition.NONE:
                continue
            if (component.get_json("anchor") or {}).get("targetComponentIdentifier"):
                continue

            # Previous component first, then the next one
            if index > 0:
                target = components[index - 1]
            elif index + 1 < length:
                target = components[index + 1]
            else:
                # The only component: nothing to float beside
                return

            counter = 1
            while not target.can_be_anchor_target() and index + counter < length:
                target = components[index + counter]
                counter += 1

            if not target.can_be_anchor_target():
                logger.debug(f"No anchor target for {component!r}, left unanchored")
                continue

            self.anchor_together(component, target)

    def anchor_together(self, component: Component, target: Component) -> bool:
        """
        Anchor ``component`` to ``target`` and lay both out side by side.

        Returns:
            False when the target is already anchored to by something else
        """
        if target.is_anchor_target():
            return False

        anchor_json = component.get_json("anchor") or copy.deepcopy(DEFAULT_ANCHOR)

        # Only known now that the target is chosen
        anchor_json["targetComponentIdentifier"] = target.uid()
        component.set_json("anchor", anchor_json)

        if component.anchor_position == AnchorPosition.AUTO:
            if self.get_setting("body_orientation") == "left":
                target.anchor_position = AnchorPosition.LEFT
            else:
                target.anchor_position = AnchorPosition.RIGHT
            component.anchor_position = (
                AnchorPosition.RIGHT if target.anchor_position == AnchorPosition.LEFT else AnchorPosition.LEFT
            )
        elif component.anchor_position == AnchorPosition.LEFT:
            target.anchor_position = AnchorPosition.RIGHT
        else:
            target.anchor_position = AnchorPosition.LEFT

        # Target first: it already has its identifier, so it gets the target layout
        target.anchor()
        component.anchor()
        return True

    def add_pullquote_if_needed(self, components: list[Component]) -> None:
        content_settings = self.context.content.content_settings
        pullquote = (content_settings.pullquote or "").strip()
        position_name = content_settings.pullquote_position
        if not pullquote or position_name not in PULLQUOTE_POSITIONS:
            return

        length = len(components)
        start = 0
        if position_name == "middle":
            start = math.floor(length / 2)
        elif position_name == "bottom":
            start = math.floor(length / 4 * 3)

        position = None
        for candidate in range(start, length):
            if components[candidate].can_be_anchor_target():
                position = candidate
                break

        if position is None:
            logger.debug(f"No valid position for the pull quote from index {start}")
            return

        component = self.factory.get_component(
            "blockquote",
            f'<blockquote class="pullquote">{escape(pullquote, quote=False)}</blockquote>',
            self.context
        )
        if component is None or component.json is None:
            return

        component.anchor_position = AnchorPosition.AUTO
        self.anchor_together(component, components[position])
        components.insert(position, component)

    def add_in_article_if_needed(self, components: list[Component]) -> None:
        """Insert the theme's in-article module at the configured body position."""
        if not self.context.meta_components:
            return
        kind = self.factory.get_kind("in_article")
        if kind is None or not kind.component_class.get_spec("json").get_override(self.context.theme):
            return

        component = self.factory.get_component("in_article", "", self.context)
        if component is None or component.json is None:
            return

        position = min(max(int(self.get_setting("in_article_position") or 0), 0), len(components))
        components.insert(position, component)

    def flatten(self, components: list[Component]) -> list[dict]:
        arrays = []
        for component in components:
            try:
                component_array = component.to_array()
            except ComponentError as e:
                self.context.log_error("component_errors", e.message)
                continue
            if component_array:
                arrays.append(component_array)
        return arrays

    # --- Meta components ---

    def meta_content(self, name: str) -> str:
        content = self.context.content
        if name == "cover":
            return self.cover_url
        if name == "title":
            return content.title
        if name == "byline":
            return content.byline
        if name == "intro":
            return content.intro
        return ""

    def meta_components(self) -> list[dict]:
        """Meta components in the theme's order; a cover not placed first gets the below-text layout."""
        order = self.get_setting("meta_component_order")
        if not order or not isinstance(order, list):
            return []

        arrays = []
        for index, name in enumerate(order):
            value = self.meta_content(name)
            if not value:
                continue

            component = self.factory.get_component(name, value, self.context)
            if component is None:
                continue
            try:
                component_array = component.to_array()
            except ComponentError as e:
                self.context.log_error("component_errors", e.message)
                continue
            if not component_array:
                continue

            if component_array.get("role") == "header" and index != 0:
                component_array["layout"] = self.context.prefixed(COVER_BELOW_TEXT_LAYOUT)

            arrays.append(component_array)
        return arrays

    # --- Passes over component JSON ---

    def group_body_components(self, components: list[dict]) -> list[dict]:
        """
        Merge runs of adjacent body text into single components.

        A body with an identifier is an anchor target and keeps its own
        component, absorbing plain body text that follows it:

        * target, anchored component, plain body: the anchored component
          is emitted first, the target takes the body's text
        * target, plain body: the target takes the body's text
        * anything else: the target stands alone

        Text is trimmed after merging. A body at the very end gets the
        ``body-layout-last`` layout, and everything after the cover is
        wrapped in one container.
        """
        grouped: list[dict] = []
        collector: Optional[dict] = None
        length = len(components)
        index = 0

        while index < length:
            component = components[index]

            if component.get("role") != "body":
                if collector is not None:
                    grouped.append(collector)
                    collector = None
                grouped.append(component)
                index += 1
                continue

            if component.get("identifier"):
                if collector is not None:
                    grouped.append(collector)
                    collector = None

                following = components[index + 1] if index + 1 < length else None
                after = components[index + 2] if index + 2 < length else None

                if following is not None and following.get("anchor") and is_plain_body(after):
                    grouped.append(following)
                    collector = copy.deepcopy(component)
                    collector["text"] = collector.get("text", "") + after.get("text", "")
                    index += 3
                    continue

                if is_plain_body(following):
                    collector = copy.deepcopy(component)
                    collector["text"] = collector.get("text", "") + following.get("text", "")
                    index += 2
                    continue

                grouped.append(component)
                index += 1
                continue

            if collector is None:
                collector = copy.deepcopy(component)
            else:
                collector["text"] = collector.get("text", "") + component.get("text", "")
            index += 1

        if collector is not None:
            grouped.append(collector)

        for component in grouped:
            if component.get("role") == "body" and isinstance(component.get("text"), str):
                component["text"] = component["text"].strip()

        self.set_last_body_layout(grouped)
        return self.regroup_after_cover(grouped)

    def set_last_body_layout(self, components: list[dict]) -> None:
        """Only a body as the final component gets the last layout."""
        if not components or components[-1].get("role") != "body":
            return
        components[-1]["layout"] = self.context.prefixed(LAST_BODY_LAYOUT)
        self.ensure_last_body_layout()

    def ensure_last_body_layout(self) -> None:
        # Normally registered by the body components themselves
        name = self.context.prefixed(LAST_BODY_LAYOUT)
        layouts = self.context.registries.layouts
        if name in layouts:
            return
        body_kind = self.factory.get_kind("body")
        if body_kind is None:
            return
        spec = body_kind.component_class.get_spec(LAST_BODY_LAYOUT)
        layouts.register(name, spec.substitute_values(
            {
                "#body_offset#": self.get_setting("body_offset"),
                "#body_column_span#": self.get_setting("body_column_span"),
            },
            post_id=self.context.post_id,
            theme=self.context.theme,
            metadata=self.context.metadata
        ))

    def regroup_after_cover(self, components: list[dict]) -> list[dict]:
        """Wrap everything after the cover in one full-width container."""
        cover_index = None
        for index, component in enumerate(components):
            if component.get("role") == "header":
                cover_index = index
                break

        if cover_index is None or len(components) <= cover_index + 1:
            return components

        container = {
            "role": "container",
            "layout": {
                "columnSpan": self.get_setting("layout_columns"),
                "columnStart": 0,
                "ignoreDocumentMargin": True,
            },
            "style": {
                "backgroundColor": self.get_setting("body_background_color"),
            },
            "components": components[cover_index + 1:],
        }
        return components[:cover_index + 1] + [container]

    def get_setting(self, name: str):
        return self.context.get_setting(name)
