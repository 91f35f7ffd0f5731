"""Headings h1 to h6. An image inside a heading becomes its own component."""

import re
from html import escape

from bs4 import BeautifulSoup

from ..parser import node_name
from .base import Component
from .body import IMAGE_PATTERN

LEVELS = (1, 2, 3, 4, 5, 6)

HEADING_TAG_PATTERN = re.compile(r"^h([1-6])$")


class Heading(Component):
    name = "heading"
    label = "Heading"

    @classmethod
    def node_matches(cls, node, context):
        if not HEADING_TAG_PATTERN.match(node_name(node)):
            return None

        html = str(node)
        if IMAGE_PATTERN.search(html):
            return cls.split_image(html)

        return node

    @staticmethod
    def split_image(html: str) -> list[dict]:
        """Heading first, then the first image it contained."""
        match = IMAGE_PATTERN.search(html)
        if not match:
            return [{"name": "heading", "value": html}]

        heading_html = html[:match.start()] + html[match.end():]
        return [
            {"name": "heading", "value": heading_html},
            {"name": "img", "value": match.group(0)},
        ]

    @classmethod
    def register_specs(cls):
        cls.register_spec(
            "json",
            "JSON",
            {
                "role": "#role#",
                "text": "#text#",
                "format": "#format#",
            }
        )

        cls.register_spec(
            "heading-layout",
            "Layout",
            {
                "columnStart": "#body_offset#",
                "columnSpan": "#body_column_span#",
                "margin": {
                    "bottom": 15,
                    "top": 15,
                },
            }
        )

        for level in LEVELS:
            cls.register_spec(
                f"default-heading-{level}",
                f"Level {level} Style",
                {
                    "fontName": f"#header{level}_font#",
                    "fontSize": f"#header{level}_size#",
                    "lineHeight": f"#header{level}_line_height#",
                    "textColor": f"#header{level}_color#",
                    "textAlignment": "#text_alignment#",
                    "tracking": f"#header{level}_tracking#",
                }
            )

    def build(self, text):
        soup = BeautifulSoup(text, "html.parser")
        element = soup.find(HEADING_TAG_PATTERN)
        if element is None:
            return

        level = int(element.name[1])

        # Markup is dropped: text styles do not apply to formatted headings
        heading_text = element.get_text().strip()
        if not heading_text:
            return

        if self.get_setting("html_support") == "yes":
            heading_text, text_format = escape(heading_text, quote=False), "html"
        else:
            text_format = "markdown"

        self.register_json(
            "json",
            {
                "#role#": f"heading{level}",
                "#text#": heading_text,
                "#format#": text_format,
            }
        )

        self.set_style(level)
        self.set_layout()

    def set_layout(self):
        self.register_layout(
            "heading-layout",
            "heading-layout",
            self.setting_values("body_offset", "body_column_span")
        )

    def set_style(self, level: int):
        values = self.setting_values(
            f"header{level}_font",
            f"header{level}_size",
            f"header{level}_line_height",
            f"header{level}_color"
        )
        values[f"#header{level}_tracking#"] = self.tracking_value(f"header{level}_tracking")
        values["#text_alignment#"] = self.text_alignment()

        self.register_style(f"default-heading-{level}", f"default-heading-{level}", values)
