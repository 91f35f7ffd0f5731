"""
In-article module: a theme-defined component placed inside the body.

It has no content of its own. A theme enables it by overriding the
``in_article`` ``json`` spec; the builder inserts it at the configured body
position.
"""

from .base import Component


class InArticle(Component):
    name = "in_article"
    label = "In Article"

    @classmethod
    def register_specs(cls):
        cls.register_spec("json", "JSON", {})
        cls.register_spec("layout", "Layout", {})

    @classmethod
    def is_enabled(cls, theme) -> bool:
        return bool(cls.get_spec("json").get_override(theme))

    def build(self, text):
        json = self._substitute("json", None)
        if not json:
            return
        self.json = json

        if "layout" not in self.json:
            layout = self._substitute("layout", None)
            if layout:
                self.set_json(
                    "layout",
                    self.context.registries.layouts.register(self.context.prefixed("in-article-layout"), layout)
                )
