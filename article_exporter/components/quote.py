"""
Blockquotes and pull quotes.

A ``blockquote`` becomes a container holding a quote; with the ``pullquote``
class it floats beside the body text instead.
"""

from bs4 import BeautifulSoup

from ..markdown import html_to_markdown
from ..parser import get_inner_html, node_has_class, node_name
from .base import AnchorPosition, Component


class Quote(Component):
    name = "blockquote"
    label = "Blockquote"

    @classmethod
    def node_matches(cls, node, context):
        return node if node_name(node) == "blockquote" else None

    @classmethod
    def register_specs(cls):
        cls.register_spec(
            "blockquote-json",
            "Blockquote JSON",
            {
                "role": "container",
                "layout": "#blockquote_layout#",
                "style": "#blockquote_style#",
                "components": [
                    {
                        "role": "quote",
                        "text": "#text#",
                        "format": "#format#",
                        "layout": "#blockquote_text_layout#",
                        "textStyle": "#blockquote_text_style#",
                    },
                ],
            }
        )

        cls.register_spec(
            "blockquote-layout",
            "Blockquote Layout",
            {
                "columnStart": "#body_offset#",
                "columnSpan": "#body_column_span#",
                "margin": {
                    "bottom": 25,
                    "top": 25,
                },
            }
        )

        cls.register_spec(
            "blockquote-text-layout",
            "Blockquote Text Layout",
            {
                "contentInset": {
                    "left": True,
                    "right": True,
                    "top": True,
                    "bottom": True,
                },
            }
        )

        cls.register_spec(
            "default-blockquote",
            "Blockquote Style",
            {
                "backgroundColor": "#blockquote_background_color#",
                "border": {
                    "all": {
                        "width": "#blockquote_border_width#",
                        "style": "#blockquote_border_style#",
                        "color": "#blockquote_border_color#",
                    },
                    "left": True,
                    "right": False,
                    "top": False,
                    "bottom": False,
                },
            }
        )

        cls.register_spec(
            "default-blockquote-text",
            "Blockquote Text Style",
            {
                "fontName": "#blockquote_font#",
                "fontSize": "#blockquote_size#",
                "textColor": "#blockquote_color#",
                "lineHeight": "#blockquote_line_height#",
                "textAlignment": "#text_alignment#",
                "tracking": "#blockquote_tracking#",
            }
        )

        cls.register_spec(
            "pullquote-json",
            "Pull quote JSON",
            {
                "role": "container",
                "components": [
                    {
                        "role": "quote",
                        "text": "#text#",
                        "format": "#format#",
                        "layout": "#pullquote_layout#",
                        "textStyle": "#pullquote_style#",
                    },
                ],
                "style": {
                    "border": {
                        "all": {
                            "width": "#pullquote_border_width#",
                            "style": "#pullquote_border_style#",
                            "color": "#pullquote_border_color#",
                        },
                        "left": False,
                        "right": False,
                    },
                },
            }
        )

        cls.register_spec(
            "quote-layout",
            "Pull quote Layout",
            {
                "margin": {
                    "top": 12,
                    "bottom": 12,
                },
            }
        )

        cls.register_spec(
            "default-pullquote",
            "Pull quote Style",
            {
                "fontName": "#pullquote_font#",
                "fontSize": "#pullquote_size#",
                "textColor": "#pullquote_color#",
                "textTransform": "#pullquote_transform#",
                "lineHeight": "#pullquote_line_height#",
                "textAlignment": "#text_alignment#",
                "tracking": "#pullquote_tracking#",
            }
        )

    def build(self, text):
        soup = BeautifulSoup(text, "html.parser")
        element = soup.find("blockquote")
        if element is None:
            return

        inner_html = get_inner_html(element)
        if not element.get_text().strip():
            return

        if self.get_setting("html_support") == "yes":
            quote_text, text_format = inner_html, "html"
        else:
            quote_text, text_format = html_to_markdown(inner_html).strip(), "markdown"

        if node_has_class(element, "pullquote"):
            self.build_pullquote(quote_text, text_format)
        else:
            self.build_blockquote(quote_text, text_format)

    def build_blockquote(self, quote_text: str, text_format: str):
        values = self.setting_values(
            "body_offset", "body_column_span",
            "blockquote_background_color", "blockquote_border_width",
            "blockquote_border_style", "blockquote_border_color",
            "blockquote_font", "blockquote_size", "blockquote_color", "blockquote_line_height"
        )
        values["#blockquote_tracking#"] = self.tracking_value("blockquote_tracking")
        values["#text_alignment#"] = self.text_alignment()

        values.update({
            "#text#": quote_text,
            "#format#": text_format,
            "#blockquote_layout#": self.register_layout("blockquote-layout", "blockquote-layout", values, prop=None),
            "#blockquote_style#": self.register_component_style(
                "default-blockquote", "default-blockquote", values, prop=None
            ),
            "#blockquote_text_layout#": self.register_layout(
                "blockquote-text-layout", "blockquote-text-layout", values, prop=None
            ),
            "#blockquote_text_style#": self.register_style(
                "default-blockquote-text", "default-blockquote-text", values, prop=None
            ),
        })
        self.register_json("blockquote-json", values)

    def build_pullquote(self, quote_text: str, text_format: str):
        values = self.setting_values(
            "pullquote_border_width", "pullquote_border_style", "pullquote_border_color",
            "pullquote_font", "pullquote_size", "pullquote_color", "pullquote_transform",
            "pullquote_line_height"
        )
        values["#pullquote_tracking#"] = self.tracking_value("pullquote_tracking")
        values["#text_alignment#"] = self.text_alignment()

        values.update({
            "#text#": quote_text,
            "#format#": text_format,
            "#pullquote_layout#": self.register_layout("quote-layout", "quote-layout", values, prop=None),
            "#pullquote_style#": self.register_style("default-pullquote", "default-pullquote", values, prop=None),
        })
        self.register_json("pullquote-json", values)

        # The builder fills in targetComponentIdentifier once a target is chosen
        self.anchor_position = AnchorPosition.AUTO
        self.set_json("anchor", {
            "originAnchorPosition": "top",
            "targetAnchorPosition": "top",
            "rangeStart": 0,
            "rangeLength": 10,
        })
