"""Horizontal rules."""

from ..parser import node_name
from .base import Component


class Divider(Component):
    name = "divider"
    label = "Divider"

    @classmethod
    def node_matches(cls, node, context):
        return node if node_name(node) == "hr" else None

    @classmethod
    def register_specs(cls):
        cls.register_spec(
            "json",
            "JSON",
            {
                "role": "divider",
                "layout": "divider-layout",
                "stroke": {
                    "color": "#divider_color#",
                    "style": "#divider_style#",
                    "width": "#divider_width#",
                },
            }
        )

        cls.register_spec(
            "divider-layout",
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

    def build(self, text):
        self.register_json("json", self.setting_values("divider_color", "divider_style", "divider_width"))
        self.register_layout("divider-layout", "divider-layout", self.setting_values("body_offset", "body_column_span"))
