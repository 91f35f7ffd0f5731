"""
Meta components, built from the content's own fields rather than its HTML:
cover, title, byline and intro.

The builder creates them by name; none of them claims parser nodes.
"""

from html import escape

from .base import Component


class Cover(Component):
    name = "cover"
    label = "Cover"

    @classmethod
    def register_specs(cls):
        cls.register_spec(
            "json",
            "JSON",
            {
                "role": "header",
                "layout": "headerPhotoLayout",
                "components": [
                    {
                        "role": "photo",
                        "layout": "headerPhotoLayout",
                        "URL": "#url#",
                    },
                ],
                "behavior": {
                    "type": "parallax",
                    "factor": 0.8,
                },
            }
        )

        cls.register_spec(
            "jsonWithCaption",
            "JSON with caption",
            {
                "role": "header",
                "layout": "headerPhotoLayout",
                "components": [
                    {
                        "role": "photo",
                        "layout": "headerPhotoLayout",
                        "URL": "#url#",
                        "caption": "#caption#",
                    },
                    {
                        "role": "caption",
                        "text": "#caption#",
                        "format": "html",
                        "textStyle": "default-cover-caption",
                    },
                ],
                "behavior": {
                    "type": "parallax",
                    "factor": 0.8,
                },
            }
        )

        cls.register_spec(
            "headerPhotoLayout",
            "Layout",
            {
                "ignoreDocumentMargin": True,
                "columnStart": 0,
                "columnSpan": "#layout_columns#",
            }
        )

        cls.register_spec(
            "headerBelowTextPhotoLayout",
            "Below Text Layout",
            {
                "ignoreDocumentMargin": True,
                "columnStart": 0,
                "columnSpan": "#layout_columns#",
                "margin": {
                    "top": 30,
                    "bottom": 0,
                },
            }
        )

        cls.register_spec(
            "default-cover-caption",
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
        """
        Args:
            text: Cover image URL
        """
        if not text:
            return

        url = self.context.bundle(text)
        caption = self.context.content.cover.caption if self.context.content.cover else ""

        if caption and self.get_setting("cover_caption") == "yes":
            self.register_json("jsonWithCaption", {"#url#": url, "#caption#": escape(caption)})
            values = self.setting_values("caption_font", "caption_size", "caption_line_height", "caption_color")
            values["#caption_tracking#"] = self.tracking_value("caption_tracking")
            values["#text_alignment#"] = self.text_alignment()
            self.register_style("default-cover-caption", "default-cover-caption", values, prop=None)
        else:
            self.register_json("json", {"#url#": url})

        values = self.setting_values("layout_columns")
        self.register_layout("headerPhotoLayout", "headerPhotoLayout", values, prop=None)

        # The builder switches to this one when the cover is not first
        self.register_layout("headerBelowTextPhotoLayout", "headerBelowTextPhotoLayout", values, prop=None)


class _MetaText(Component):
    """Title, byline and intro: one text component with its own style and layout."""

    # Theme option prefix for font, size, line height, tracking and color
    style_prefix = ""

    def style_values(self) -> dict:
        prefix = self.style_prefix
        values = self.setting_values(
            f"{prefix}_font", f"{prefix}_size", f"{prefix}_line_height", f"{prefix}_color",
            "body_offset", "body_column_span"
        )
        values[f"#{prefix}_tracking#"] = self.tracking_value(f"{prefix}_tracking")
        values["#text_alignment#"] = self.text_alignment()
        return values

    def build(self, text):
        text = (text or "").strip()
        if not text:
            return

        self.register_json("json", {"#text#": text})
        values = self.style_values()
        self.register_style(f"default-{self.name}", f"default-{self.name}", values)
        self.register_layout(f"{self.name}-layout", f"{self.name}-layout", values)

    @classmethod
    def register_text_specs(cls, role: str, prefix: str, margin: dict):
        cls.register_spec(
            "json",
            "JSON",
            {
                "role": role,
                "text": "#text#",
            }
        )

        cls.register_spec(
            f"default-{cls.name}",
            "Style",
            {
                "fontName": f"#{prefix}_font#",
                "fontSize": f"#{prefix}_size#",
                "lineHeight": f"#{prefix}_line_height#",
                "tracking": f"#{prefix}_tracking#",
                "textColor": f"#{prefix}_color#",
                "textAlignment": "#text_alignment#",
            }
        )

        cls.register_spec(
            f"{cls.name}-layout",
            "Layout",
            {
                "columnStart": "#body_offset#",
                "columnSpan": "#body_column_span#",
                "margin": margin,
            }
        )


class Title(_MetaText):
    name = "title"
    label = "Title"
    style_prefix = "title"

    @classmethod
    def register_specs(cls):
        cls.register_text_specs("title", "title", {"top": 30, "bottom": 0})


class Byline(_MetaText):
    name = "byline"
    label = "Byline"
    style_prefix = "byline"

    @classmethod
    def register_specs(cls):
        cls.register_text_specs("byline", "byline", {"top": 10, "bottom": 10})


class Intro(_MetaText):
    name = "intro"
    label = "Intro"
    # Set in the body face
    style_prefix = "body"

    @classmethod
    def register_specs(cls):
        cls.register_text_specs("intro", "body", {"top": 15, "bottom": 15})
