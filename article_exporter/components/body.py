"""
Body text: paragraphs, lists, preformatted blocks and stray inline content.

Images inside a paragraph are split out into their own components so they
are not lost in text.
"""

import re

from bs4 import BeautifulSoup

from ..markdown import html_to_markdown
from ..parser import INLINE_TAGS, node_name, node_text
from .base import Component

BODY_TAGS = {"p", "ul", "ol", "pre"}

# An image, optionally wrapped in a link
IMAGE_PATTERN = re.compile(r"<a[^>]*>\s*<img[^>]*?>\s*</a>|<img[^>]*?>", re.IGNORECASE | re.DOTALL)


def strip_tags(html: str) -> str:
    return BeautifulSoup(html, "html.parser").get_text()


def split_image(html: str, text_kind: str = "body") -> list[dict]:
    """
    Split an HTML fragment around the first image it contains.

    Returns:
        ``{"name", "value"}`` parts in document order; text parts without
        visible text are left out
    """
    match = IMAGE_PATTERN.search(html)
    if not match:
        return [{"name": text_kind, "value": html}]

    parts = []
    before = html[:match.start()]
    after = html[match.end():]
    if strip_tags(before).strip():
        parts.append({"name": text_kind, "value": before})
    parts.append({"name": "img", "value": match.group(0)})
    if strip_tags(after).strip():
        parts.extend(split_image(after, text_kind))
    return parts


class Body(Component):
    name = "body"
    label = "Body"

    @classmethod
    def node_matches(cls, node, context):
        name = node_name(node)
        if name not in BODY_TAGS and name not in INLINE_TAGS and name != "#text":
            return None

        if name == "#text":
            return node if node_text(node).strip() else None

        # Empty paragraphs are claimed here and build nothing
        if node.find("img") is not None:
            return split_image(str(node))

        return node

    @classmethod
    def register_specs(cls):
        cls.register_spec(
            "json",
            "JSON",
            {
                "role": "body",
                "text": "#text#",
                "format": "#format#",
            }
        )

        cls.register_spec(
            "body-layout",
            "Layout",
            {
                "columnStart": "#body_offset#",
                "columnSpan": "#body_column_span#",
                "margin": {
                    "top": 12,
                    "bottom": 12,
                },
            }
        )

        cls.register_spec(
            "body-layout-last",
            "Layout for Last Component",
            {
                "columnStart": "#body_offset#",
                "columnSpan": "#body_column_span#",
                "margin": {
                    "top": 12,
                    "bottom": 30,
                },
            }
        )

        cls.register_spec(
            "default-body",
            "Default Style",
            {
                "textAlignment": "#text_alignment#",
                "fontName": "#body_font#",
                "fontSize": "#body_size#",
                "tracking": "#body_tracking#",
                "lineHeight": "#body_line_height#",
                "textColor": "#body_color#",
                "linkStyle": {
                    "textColor": "#body_link_color#",
                },
                "paragraphSpacingBefore": 18,
                "paragraphSpacingAfter": 18,
            }
        )

        cls.register_spec(
            "dropcapBodyStyle",
            "Drop Cap Style",
            {
                "textAlignment": "#text_alignment#",
                "fontName": "#body_font#",
                "fontSize": "#body_size#",
                "tracking": "#body_tracking#",
                "lineHeight": "#body_line_height#",
                "textColor": "#body_color#",
                "linkStyle": {
                    "textColor": "#body_link_color#",
                },
                "paragraphSpacingBefore": 18,
                "paragraphSpacingAfter": 18,
                "dropCapStyle": {
                    "numberOfLines": "#dropcap_number_of_lines#",
                    "numberOfCharacters": "#dropcap_number_of_characters#",
                    "padding": "#dropcap_padding#",
                    "fontName": "#dropcap_font#",
                    "textColor": "#dropcap_color#",
                    "numberOfRaisedLines": "#dropcap_number_of_raised_lines#",
                    "backgroundColor": "#dropcap_background_color#",
                },
            }
        )

    def build(self, text):
        if self.get_setting("html_support") == "yes":
            content, text_format = text.strip(), "html"
        else:
            content, text_format = html_to_markdown(text), "markdown"
            # Close the paragraph so merged bodies keep their breaks
            content = content.rstrip() + "\n\n"

        if not content.strip():
            return

        self.register_json("json", {"#text#": content, "#format#": text_format})
        self.set_default_layout()
        self.set_default_style()

    def set_default_layout(self):
        values = self.setting_values("body_offset", "body_column_span")
        self.register_layout("body-layout", "body-layout", values)

        # The builder switches the final body component over to this one
        self.register_layout("body-layout-last", "body-layout-last", values, prop=None)

    def set_default_style(self):
        values = self.setting_values(
            "body_font", "body_size", "body_line_height", "body_color", "body_link_color",
            "dropcap_number_of_lines", "dropcap_number_of_characters", "dropcap_padding",
            "dropcap_font", "dropcap_color", "dropcap_number_of_raised_lines", "dropcap_background_color"
        )
        values["#body_tracking#"] = self.tracking_value("body_tracking")
        values["#text_alignment#"] = self.text_alignment()

        if self.context.claim_dropcap():
            self.register_style("dropcapBodyStyle", "dropcapBodyStyle", values)
        else:
            self.register_style("default-body", "default-body", values)
