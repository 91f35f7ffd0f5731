"""
Asides: a block of content set off beside the body text.

The aside's inner HTML is exported on its own, in a sub-context, so its
components get prefixed registry names and read overrides from the theme's
``aside`` subcomponents block.
"""

from ..parser import get_root_element, node_has_class
from .base import AnchorPosition, Component


class Aside(Component):
    name = "aside"
    label = "Aside"

    ANCHOR_LAYOUT_PREFIX = "aside-layout"

    @classmethod
    def node_matches(cls, node, context):
        class_name = context.get_setting("aside_component_class") if context is not None else ""
        if class_name and node_has_class(node, class_name):
            return node
        return None

    @classmethod
    def register_specs(cls):
        cls.register_spec(
            "json",
            "JSON",
            {
                "role": "aside",
                "layout": "aside-layout",
                "components": "#components#",
            }
        )

        cls.register_spec(
            "default-aside",
            "Aside Style",
            {
                "backgroundColor": "#aside_background_color#",
                "border": {
                    "all": {
                        "color": "#aside_border_color#",
                        "style": "solid",
                        "width": 3,
                    },
                    "top": True,
                    "bottom": True,
                    "left": False,
                    "right": False,
                },
            }
        )

    def build(self, text):
        element = get_root_element(text)

        # Without the class the element is not matched as an aside again
        class_name = self.get_setting("aside_component_class")
        classes = [c for c in (element.get("class") or []) if c != class_name]
        if classes:
            element["class"] = classes
        elif element.has_attr("class"):
            del element["class"]

        components = self.context.subcontext(self.name).export_fragment(element)
        if not components:
            return

        self.register_json("json", {"#components#": components})
        self.register_raw_layout("aside-layout", {
            "columnStart": self.get_setting("body_offset"),
            "columnSpan": self.get_setting("body_column_span"),
        })
        self.register_component_style(
            "default-aside",
            "default-aside",
            self.setting_values("aside_background_color", "aside_border_color")
        )

        if self.get_setting("aside_alignment") == "left":
            self.anchor_position = AnchorPosition.LEFT
        else:
            self.anchor_position = AnchorPosition.RIGHT

