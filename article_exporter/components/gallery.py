"""
Image galleries: block editor ``figure.wp-block-gallery`` and classic
``div.gallery`` markup.

Renders as a swipeable gallery or a mosaic depending on the theme's
``gallery_type``.
"""

from bs4 import BeautifulSoup

from ..parser import get_nodes_by_class, node_has_class, node_name
from .base import Component


class Gallery(Component):
    name = "gallery"
    label = "Gallery"

    @classmethod
    def node_matches(cls, node, context):
        name = node_name(node)
        if name == "figure" and node_has_class(node, "wp-block-gallery"):
            return node
        if name == "div" and node_has_class(node, "gallery"):
            return node
        return None

    @classmethod
    def register_specs(cls):
        cls.register_spec(
            "json",
            "JSON",
            {
                "role": "#gallery_type#",
                "items": "#items#",
                "layout": "#layout#",
            }
        )

        cls.register_spec(
            "gallery-layout",
            "Layout",
            {
                "columnStart": "#body_offset#",
                "columnSpan": "#body_column_span#",
                "margin": {
                    "bottom": 25,
                    "top": 25,
                },
            }
        )

    def build(self, text):
        items = self.items_from_blocks(text) or self.items_from_images(text)
        if not items:
            return

        gallery_type = "mosaic" if self.get_setting("gallery_type") == "mosaic" else "gallery"
        layout = self.register_layout(
            "gallery-layout",
            "gallery-layout",
            self.setting_values("body_offset", "body_column_span"),
            prop=None
        )
        self.register_json("json", {"#gallery_type#": gallery_type, "#items#": items, "#layout#": layout})

    def gallery_item(self, url: str, alt: str = "", caption: str = "") -> dict:
        item = {"URL": self.context.bundle(url)}
        if alt:
            item["accessibilityCaption"] = alt
        if caption:
            item["caption"] = caption
        return item

    def items_from_blocks(self, html: str) -> list[dict]:
        """One item per nested image block, caption taken from its figcaption."""
        items = []
        for block in get_nodes_by_class(html, "wp-block-image"):
            images = block.xpath(".//img[@src]")
            if not images:
                continue
            captions = block.xpath(".//figcaption")
            caption = "".join(captions[0].itertext()).strip() if captions else ""
            items.append(self.gallery_item(images[0].get("src"), images[0].get("alt", ""), caption))
        return items

    def items_from_images(self, html: str) -> list[dict]:
        soup = BeautifulSoup(html, "html.parser")
        return [
            self.gallery_item(image["src"], image.get("alt", ""))
            for image in soup.find_all("img")
            if image.get("src")
        ]
