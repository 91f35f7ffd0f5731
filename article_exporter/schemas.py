"""
Pydantic schemas for what goes into an export and what comes out.

ExporterContent: the content item (HTML body plus the data meta components use)
ArticleDocument: the structured document handed to the serializer

Data flow:
  ExporterContent → Exporter → ComponentsBuilder → ArticleDocument
"""

import json
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Cover(BaseModel):
    """Cover image for the content."""
    url: str
    caption: str = ""


class ContentSettings(BaseModel):
    """Per-content switches."""
    pullquote: str = ""
    pullquote_position: Optional[Literal["top", "middle", "bottom"]] = None


class ExporterContent(BaseModel):
    """A content item to export."""
    id: int = 0
    title: str = ""
    content: str = ""                         # Body HTML
    intro: str = ""                           # Excerpt, used by the intro meta component
    cover: Optional[Cover] = None
    byline: str = ""                          # Preformatted byline text
    permalink: str = ""
    date_created: Optional[str] = None        # ISO 8601
    date_modified: Optional[str] = None
    content_settings: ContentSettings = Field(default_factory=ContentSettings)


class DocumentLayout(BaseModel):
    columns: int
    width: int
    margin: int
    gutter: int


class ArticleDocument(BaseModel):
    """The exporter's output: ordered components plus the named registries."""
    model_config = ConfigDict(populate_by_name=True)

    version: str = "1.7"
    identifier: str
    language: str = "en"
    title: str = ""
    layout: DocumentLayout
    components: list[dict[str, Any]] = Field(default_factory=list)
    component_text_styles: dict[str, Any] = Field(default_factory=dict, alias="componentTextStyles")
    component_layouts: dict[str, Any] = Field(default_factory=dict, alias="componentLayouts")
    component_styles: dict[str, Any] = Field(default_factory=dict, alias="componentStyles")
    document_style: dict[str, Any] = Field(default_factory=dict, alias="documentStyle")
    metadata: dict[str, Any] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Wire-format mapping: aliased keys, empty sections left out."""
        data = self.model_dump(by_alias=True)
        return {key: value for key, value in data.items() if value not in ({}, [], None, "")}

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
