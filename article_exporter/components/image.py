"""
Images: a bare ``img``, a linked image, or a ``figure`` holding one.

``alignleft``/``alignright`` make the image float beside the text; a
``figcaption`` wraps the photo in a container with a caption.
"""

from bs4 import BeautifulSoup

from ..context import BUNDLE_SCHEME
from ..parser import node_has_class, node_name
from .base import AnchorPosition, Component


class Image(Component):
    name = "img"
    label = "Image"

    @classmethod
    def node_matches(cls, node, context):
        name = node_name(node)
        if name == "img":
            return node

        # A figure or link whose content is a single image
        if name in ("figure", "a"):
            images = node.find_all("img")
            if len(images) == 1 and not node_has_class(node, "wp-block-gallery"):
                return node

        return None

    @classmethod
    def register_specs(cls):
        cls.register_spec(
            "json-without-caption",
            "JSON without caption",
            {
                "role": "photo",
                "URL": "#url#",
                "accessibilityCaption": "#alt#",
            }
        )

        cls.register_spec(
            "json-with-caption",
            "JSON with caption",
            {
                "role": "container",
                "components": [
                    {
                        "role": "photo",
                        "URL": "#url#",
                        "accessibilityCaption": "#alt#",
                        "caption": "#caption#",
                    },
                    {
                        "role": "caption",
                        "text": "#caption#",
                        "format": "#format#",
                        "textStyle": "#caption_style#",
                    },
                ],
            }
        )

        cls.register_spec(
            "photo-layout",
            "Layout",
            {
                "columnStart": "#body_offset#",
                "columnSpan": "#body_column_span#",
                "margin": {
                    "top": 25,
                    "bottom": 25,
                },
            }
        )

        cls.register_spec(
            "full-width-image",
            "Full Width Layout",
            {
                "columnStart": 0,
                "columnSpan": "#layout_columns#",
                "ignoreDocumentMargin": True,
                "margin": {
                    "top": 25,
                    "bottom": 25,
                },
            }
        )

        cls.register_spec(
            "default-image-caption",
            "Caption Style",
            {
                "textAlignment": "#text_alignment#",
                "fontName": "#caption_font#",
                "fontSize": "#caption_size#",
                "tracking": "#caption_tracking#",
                "lineHeight": "#caption_line_height#",
                "textColor": "#caption_color#",
            }
        )

    def build(self, text):
        soup = BeautifulSoup(text, "html.parser")
        image = soup.find("img")
        if image is None or not image.get("src"):
            return

        url = self.context.bundle(image["src"])
        alt = image.get("alt", "")

        figcaption = soup.find("figcaption")
        caption = figcaption.get_text().strip() if figcaption is not None else ""

        if caption:
            self.register_json(
                "json-with-caption",
                {
                    "#url#": url,
                    "#alt#": alt,
                    "#caption#": caption,
                    "#format#": "markdown",
                    "#caption_style#": self.set_caption_style(),
                }
            )
        else:
            self.register_json("json-without-caption", {"#url#": url, "#alt#": alt})

        self.set_layout()
        self.set_alignment(soup)

    def set_layout(self):
        if self.get_setting("full_bleed_images") == "yes":
            self.register_layout("full-width-image", "full-width-image", self.setting_values("layout_columns"))
        else:
            self.register_layout("photo-layout", "photo-layout", self.setting_values("body_offset", "body_column_span"))

    def set_caption_style(self) -> str:
        values = self.setting_values(
            "caption_font", "caption_size", "caption_line_height", "caption_color"
        )
        values["#caption_tracking#"] = self.tracking_value("caption_tracking")
        values["#text_alignment#"] = self.text_alignment()
        return self.register_style("default-image-caption", "default-image-caption", values, prop=None)

    def set_alignment(self, soup: BeautifulSoup):
        # The class may sit on the img or on a wrapper
        for element in [soup.find("img"), *soup.find_all(["figure", "div", "a"])]:
            if node_has_class(element, "alignleft"):
                self.anchor_position = AnchorPosition.LEFT
                return
            if node_has_class(element, "alignright"):
                self.anchor_position = AnchorPosition.RIGHT
                return

    def original_url(self) -> str:
        """The URL the image was exported from, for cover promotion."""
        url = self.get_json("URL")
        if not url:
            components = self.get_json("components") or []
            if components:
                url = components[0].get("URL")
        if not url:
            return ""
        if url.startswith(BUNDLE_SCHEME):
            return self.context.bundler.find_original(url) or ""
        return url
