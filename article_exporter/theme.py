"""
Theme: the named bundle of formatting values and spec overrides.

A theme only stores what differs from ``THEME_DEFAULTS``. A few layout values
are computed from ``body_orientation`` on every read rather than stored.
"""

import copy
import math
from typing import Any, Optional

from pydantic import BaseModel, Field

# --- Built-in option defaults ---
# Sizes are points, tracking is a percentage of the font size.

THEME_DEFAULTS: dict[str, Any] = {
    # Layout
    "layout_margin": 100,
    "layout_gutter": 20,
    "layout_width": 1024,
    "body_orientation": "left",

    # Body
    "body_font": "AvenirNext-Regular",
    "body_size": 18,
    "body_line_height": 24,
    "body_tracking": 0,
    "body_color": "#4f4f4f",
    "body_link_color": "#428bca",
    "body_background_color": "#fafafa",

    # Drop cap
    "initial_dropcap": "no",
    "dropcap_background_color": "",
    "dropcap_color": "#4f4f4f",
    "dropcap_font": "AvenirNext-Bold",
    "dropcap_number_of_characters": 1,
    "dropcap_number_of_lines": 4,
    "dropcap_number_of_raised_lines": 0,
    "dropcap_padding": 5,

    # Byline
    "byline_font": "AvenirNext-Medium",
    "byline_size": 13,
    "byline_line_height": 24,
    "byline_tracking": 0,
    "byline_color": "#7c7c7c",

    # Title
    "title_font": "AvenirNext-Bold",
    "title_size": 48,
    "title_line_height": 52,
    "title_tracking": 0,
    "title_color": "#333333",

    # Captions
    "caption_font": "AvenirNext-Italic",
    "caption_size": 16,
    "caption_line_height": 24,
    "caption_tracking": 0,
    "caption_color": "#4f4f4f",

    # Pull quote
    "pullquote_font": "AvenirNext-Bold",
    "pullquote_size": 48,
    "pullquote_line_height": 48,
    "pullquote_tracking": 0,
    "pullquote_color": "#53585f",
    "pullquote_transform": "uppercase",
    "pullquote_border_color": "#53585f",
    "pullquote_border_style": "solid",
    "pullquote_border_width": 3,

    # Blockquote
    "blockquote_font": "AvenirNext-Regular",
    "blockquote_size": 18,
    "blockquote_line_height": 24,
    "blockquote_tracking": 0,
    "blockquote_color": "#4f4f4f",
    "blockquote_background_color": "#e1e1e1",
    "blockquote_border_color": "#4f4f4f",
    "blockquote_border_style": "solid",
    "blockquote_border_width": 3,

    # Monospaced
    "monospaced_font": "Menlo-Regular",
    "monospaced_size": 16,
    "monospaced_line_height": 20,
    "monospaced_tracking": 0,
    "monospaced_color": "#4f4f4f",

    # Tables
    "table_border_color": "#4f4f4f",
    "table_border_style": "solid",
    "table_border_width": 1,
    "table_body_background_color": "#fafafa",
    "table_body_color": "#4f4f4f",
    "table_body_font": "AvenirNext-Regular",
    "table_body_size": 16,
    "table_body_line_height": 20,
    "table_body_padding": 5,
    "table_header_background_color": "#e1e1e1",
    "table_header_color": "#4f4f4f",
    "table_header_font": "AvenirNext-Bold",
    "table_header_size": 16,
    "table_header_line_height": 20,
    "table_header_padding": 5,

    # Aside
    "aside_alignment": "right",
    "aside_background_color": "#e1e1e1",
    "aside_border_color": "#4f4f4f",

    # Divider
    "divider_color": "#e1e1e1",
    "divider_width": 1,
    "divider_style": "solid",

    # Media
    "gallery_type": "gallery",
    "cover_caption": "no",

    # Advertisement
    "ad_margin": 15,

    # Meta component order, inactive components are left out of the list
    "meta_component_order": ["cover", "title", "byline"],
}

# Heading levels 1–6
_HEADING_SIZES = {1: (48, 52), 2: (32, 36), 3: (24, 28), 4: (21, 26), 5: (18, 24), 6: (16, 22)}
for _level, (_size, _line_height) in _HEADING_SIZES.items():
    THEME_DEFAULTS[f"header{_level}_font"] = "AvenirNext-Bold"
    THEME_DEFAULTS[f"header{_level}_size"] = _size
    THEME_DEFAULTS[f"header{_level}_line_height"] = _line_height
    THEME_DEFAULTS[f"header{_level}_tracking"] = 0
    THEME_DEFAULTS[f"header{_level}_color"] = "#333333"


# --- Computed values ---
# Each is a pure function of the theme's own values.

def _layout_columns(theme: "Theme") -> int:
    return 9 if theme.get_value("body_orientation") == "center" else 7


def _body_column_span(theme: "Theme") -> int:
    return 7 if theme.get_value("body_orientation") == "center" else 6


def _body_offset(theme: "Theme") -> int:
    orientation = theme.get_value("body_orientation")
    columns = _layout_columns(theme)
    span = _body_column_span(theme)
    if orientation == "right":
        return columns - span
    if orientation == "center":
        return math.floor((columns - span) / 2)
    return 0


def _alignment_offset(theme: "Theme") -> int:
    # Columns a floating component takes from the body
    return 5 if theme.get_value("body_orientation") == "center" else 3


COMPUTED_VALUES = {
    "layout_columns": _layout_columns,
    "body_column_span": _body_column_span,
    "body_offset": _body_offset,
    "alignment_offset": _alignment_offset,
}


class Theme(BaseModel):
    """Named formatting values plus per-spec JSON overrides."""
    name: str = "Default"
    values: dict[str, Any] = Field(default_factory=dict)
    # {component_key: {spec_key: json}}, nested exports read
    # {parent_key: {"subcomponents": {component_key: {spec_key: json}}}}
    json_templates: dict[str, dict[str, Any]] = Field(default_factory=dict)

    def get_value(self, option: str) -> Any:
        """Get a computed, stored or default value; None if unknown."""
        if option in COMPUTED_VALUES:
            return COMPUTED_VALUES[option](self)
        if option in self.values:
            return self.values[option]
        if option in THEME_DEFAULTS:
            return copy.deepcopy(THEME_DEFAULTS[option])
        return None

    def set_value(self, option: str, value: Any) -> None:
        if option in COMPUTED_VALUES:
            raise ValueError(f"'{option}' is computed and cannot be set")
        self.values[option] = value

    def inactive_meta_components(self) -> list[str]:
        order = self.get_value("meta_component_order") or []
        return [name for name in THEME_DEFAULTS["meta_component_order"] if name not in order]

    def get_spec_override(self, component: str, spec: str, parent: Optional[str] = None) -> Optional[Any]:
        """
        Get an override from ``json_templates``.

        With ``parent`` set, the parent's ``subcomponents`` block is checked
        first, then the top-level override for the component.
        """
        if parent:
            nested = self.json_templates.get(parent, {}).get("subcomponents", {})
            override = nested.get(component, {}).get(spec)
            if override:
                return override
        override = self.json_templates.get(component, {}).get(spec)
        return override or None

    def set_spec_override(self, component: str, spec: str, value: Any) -> None:
        self.json_templates.setdefault(component, {})[spec] = value

    def delete_spec_override(self, component: str, spec: str) -> bool:
        templates = self.json_templates.get(component)
        if not templates or spec not in templates:
            return False
        del templates[spec]
        # Prune the component block once it is empty
        if not templates:
            del self.json_templates[component]
        return True
