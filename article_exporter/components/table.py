"""HTML tables, passed through as markup with a themed table style."""

from bs4 import BeautifulSoup

from ..parser import node_name
from .base import Component


class Table(Component):
    name = "table"
    label = "Table"

    @classmethod
    def node_matches(cls, node, context):
        return node if node_name(node) == "table" else None

    @classmethod
    def register_specs(cls):
        cls.register_spec(
            "json",
            "JSON",
            {
                "role": "htmltable",
                "html": "#html#",
            }
        )

        cls.register_spec(
            "table-layout",
            "Table Layout",
            {
                "margin": {
                    "bottom": "#table_body_line_height#",
                },
            }
        )

        cls.register_spec(
            "default-table",
            "Table Style",
            {
                "border": {
                    "all": {
                        "color": "#table_border_color#",
                        "style": "#table_border_style#",
                        "width": "#table_border_width#",
                    },
                },
                "tableStyle": {
                    "cells": {
                        "backgroundColor": "#table_body_background_color#",
                        "horizontalAlignment": "left",
                        "padding": "#table_body_padding#",
                        "textStyle": {
                            "fontName": "#table_body_font#",
                            "fontSize": "#table_body_size#",
                            "lineHeight": "#table_body_line_height#",
                            "textColor": "#table_body_color#",
                        },
                        "verticalAlignment": "center",
                    },
                    "columns": {
                        "divider": {
                            "color": "#table_border_color#",
                            "style": "#table_border_style#",
                            "width": "#table_border_width#",
                        },
                    },
                    "headerCells": {
                        "backgroundColor": "#table_header_background_color#",
                        "horizontalAlignment": "center",
                        "padding": "#table_header_padding#",
                        "textStyle": {
                            "fontName": "#table_header_font#",
                            "fontSize": "#table_header_size#",
                            "lineHeight": "#table_header_line_height#",
                            "textColor": "#table_header_color#",
                        },
                        "verticalAlignment": "center",
                    },
                    "headerRows": {
                        "divider": {
                            "color": "#table_border_color#",
                            "style": "#table_border_style#",
                            "width": "#table_border_width#",
                        },
                    },
                    "rows": {
                        "divider": {
                            "color": "#table_border_color#",
                            "style": "#table_border_style#",
                            "width": "#table_border_width#",
                        },
                    },
                },
            }
        )

    def build(self, text):
        html = text.strip()
        table = BeautifulSoup(html, "html.parser").find("table")
        # A table without rows has nothing to show
        if table is None or table.find("tr") is None:
            return

        self.register_json("json", {"#html#": html})
        self.register_layout("table-layout", "table-layout", self.setting_values("table_body_line_height"))
        self.register_component_style(
            "default-table",
            "default-table",
            self.setting_values(
                "table_border_color", "table_border_style", "table_border_width",
                "table_body_background_color", "table_body_padding", "table_body_font",
                "table_body_size", "table_body_line_height", "table_body_color",
                "table_header_background_color", "table_header_padding", "table_header_font",
                "table_header_size", "table_header_line_height", "table_header_color"
            )
        )
