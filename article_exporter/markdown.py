"""
HTML fragment → Markdown text for text components.

Only the inline and block elements text components carry are converted;
any other element contributes its plain text.
"""

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}


class MarkdownConverter:
    """Converts one HTML fragment at a time. Not thread-safe (list state)."""

    def __init__(self):
        # One entry per open list: [mode, next item number]
        self._lists: list[list] = []

    def convert(self, html: str) -> str:
        if not html or not html.strip():
            return ""
        soup = BeautifulSoup(html, "html5lib")
        body = soup.find("body") or soup
        self._lists = []
        return self._convert_nodes(body.children)

    def _convert_nodes(self, nodes) -> str:
        return "".join(self._convert_node(node) for node in nodes)

    def _convert_node(self, node) -> str:
        if isinstance(node, Comment):
            return ""
        if isinstance(node, NavigableString):
            return str(node)
        if not isinstance(node, Tag):
            return ""

        name = node.name
        if name in ("strong", "b"):
            return f"**{self._convert_nodes(node.children)}**"
        if name in ("em", "i"):
            return f"_{self._convert_nodes(node.children)}_"
        if name == "pre":
            return "```\n" + node.get_text().strip("\n") + "\n```\n\n"
        if name == "code":
            return f"`{node.get_text()}`"
        if name == "br":
            return "  \n"
        if name == "p":
            return self._convert_nodes(node.children) + "\n\n"
        if name == "a":
            return f" [{self._convert_nodes(node.children)}]({node.get('href', '')})"
        if name in ("ul", "ol"):
            return self._convert_list(node)
        if name == "li":
            return self._convert_list_item(node)
        if name in HEADING_TAGS:
            level = int(name[1])
            return "#" * level + " " + self._convert_nodes(node.children) + "\n"

        return node.get_text()

    def _convert_list(self, node: Tag) -> str:
        self._lists.append([node.name, 1])
        try:
            return self._convert_nodes(node.children) + "\n\n"
        finally:
            self._lists.pop()

    def _convert_list_item(self, node: Tag) -> str:
        text = self._convert_nodes(node.children).strip()
        if self._lists and self._lists[-1][0] == "ol":
            number = self._lists[-1][1]
            self._lists[-1][1] += 1
            return f"{number}. {text}\n"
        return f"- {text}\n"


def html_to_markdown(html: str) -> str:
    """Convert an HTML fragment to Markdown."""
    return MarkdownConverter().convert(html)
