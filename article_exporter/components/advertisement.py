"""Banner advertisement slots, marked in the content by a configured CSS class."""

from ..parser import node_has_class
from .base import Component


class Advertisement(Component):
    name = "advertisement"
    label = "Advertisement"

    # Ads span the full width, nothing can float beside them
    CAN_BE_ANCHOR_TARGET = False

    @classmethod
    def node_matches(cls, node, context):
        class_name = context.get_setting("advertisement_component_class") if context is not None else ""
        if class_name and node_has_class(node, class_name):
            return node
        return None

    @classmethod
    def register_specs(cls):
        cls.register_spec(
            "json",
            "JSON",
            {
                "role": "banner_advertisement",
                "bannerType": "standard",
            }
        )

        cls.register_spec(
            "advertisement-layout",
            "Layout",
            {
                "margin": {
                    "top": "#ad_margin#",
                    "bottom": "#ad_margin#",
                },
            }
        )

    def build(self, text):
        self.register_json("json")
        self.register_layout("advertisement-layout", "advertisement-layout", self.setting_values("ad_margin"))
