"""
Footnotes list from the block editor (``ol.wp-block-footnotes``).

Each list item becomes a numbered body paragraph that keeps its ``id``, so
in-text footnote links can point at it.
"""

from bs4 import BeautifulSoup

from ..parser import get_inner_html, node_has_class, node_name
from .base import Component
from .body import Body


class Footnotes(Component):
    name = "footnotes"
    label = "Footnotes"

    @classmethod
    def node_matches(cls, node, context):
        if node_name(node) == "ol" and node_has_class(node, "wp-block-footnotes"):
            return node
        return None

    @classmethod
    def register_specs(cls):
        cls.register_spec(
            "footnotes-json",
            "Footnotes JSON",
            {
                "role": "container",
                "layout": "#layout#",
                "components": "#components#",
            }
        )

        cls.register_spec(
            "footnote-json",
            "Footnote JSON",
            {
                "role": "body",
                "text": "#text#",
                "format": "html",
                "identifier": "#identifier#",
            }
        )

    def build(self, text):
        soup = BeautifulSoup(text, "html.parser")
        footnotes = soup.find("ol")
        if footnotes is None:
            return

        spec = self.get_spec("footnote-json")
        components = []
        for number, item in enumerate(footnotes.find_all("li", recursive=False), start=1):
            identifier = item.get("id", "")
            id_attr = f' id="{identifier}"' if identifier else ""
            components.append(self.substitute_spec(spec, {
                "#text#": f"<p{id_attr}>{number}. {get_inner_html(item)}</p>",
                "#identifier#": identifier,
            }))

        if not components:
            return

        self.register_json(
            "footnotes-json",
            {
                "#components#": components,
                "#layout#": self.register_body_layout(),
            }
        )

    def register_body_layout(self) -> str:
        # Shared with body components, whichever registers it first
        name = self.context.prefixed("body-layout")
        layouts = self.context.registries.layouts
        if name not in layouts:
            layout = self.substitute_spec(
                Body.get_spec("body-layout"),
                self.setting_values("body_offset", "body_column_span")
            )
            layouts.register(name, layout)
        return name
