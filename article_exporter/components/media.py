"""Audio and video elements. Both need a source URL to build anything."""

from bs4 import BeautifulSoup

from ..parser import node_name
from .base import Component


def find_source(element) -> str:
    """``src`` of the element itself, else of its first ``<source>``."""
    if element.get("src"):
        return element["src"]
    source = element.find("source")
    if source is not None and source.get("src"):
        return source["src"]
    return ""


class Audio(Component):
    name = "audio"
    label = "Audio"

    @classmethod
    def node_matches(cls, node, context):
        name = node_name(node)
        if name == "audio":
            return node
        # Editor blocks wrap the element in a figure
        if name == "figure" and node.find("audio") is not None:
            return node
        return None

    @classmethod
    def register_specs(cls):
        cls.register_spec(
            "json",
            "JSON",
            {
                "role": "audio",
                "URL": "#url#",
            }
        )

    def build(self, text):
        element = BeautifulSoup(text, "html.parser").find("audio")
        if element is None:
            return
        url = find_source(element)
        if not url:
            return
        self.register_json("json", {"#url#": url})


class Video(Component):
    name = "video"
    label = "Video"

    @classmethod
    def node_matches(cls, node, context):
        name = node_name(node)
        if name == "video":
            return node
        if name == "figure" and node.find("video") is not None:
            return node
        return None

    @classmethod
    def register_specs(cls):
        cls.register_spec(
            "json",
            "JSON",
            {
                "role": "video",
                "URL": "#url#",
                "stillURL": "#still_url#",
            }
        )

    def build(self, text):
        element = BeautifulSoup(text, "html.parser").find("video")
        if element is None:
            return
        url = find_source(element)
        if not url:
            return

        values = {"#url#": url}
        if element.get("poster"):
            values["#still_url#"] = self.context.bundle(element["poster"])
        self.register_json("json", values)
