"""
Content parser: HTML → ordered component instances.

Loads HTML with a tolerant tree builder, walks the first-level nodes of the
body and hands each one to the component factory.

Design principle: NEVER FAIL on bad HTML. Malformed markup is repaired by the
tree builder, and parse problems are never raised to the caller.

Pipeline position: Stage 1 of 2 (ContentParser → ComponentsBuilder).
Input:  HTML string (editor output, possibly malformed, HTML5)
Output: list of Component instances in document order
"""

from typing import Optional

from bs4 import BeautifulSoup, Comment, NavigableString, Tag
from lxml import etree

from .exceptions import ParserError
from .logger import get_module_logger

logger = get_module_logger("parser")


# --- DOM helpers shared by component matchers ---

def node_name(node) -> str:
    """Tag name of an element, ``#text`` for text, ``#comment`` for comments."""
    if isinstance(node, Comment):
        return "#comment"
    if isinstance(node, NavigableString):
        return "#text"
    return node.name or ""


def node_has_class(node, class_name: str) -> bool:
    """Whether an element carries a CSS class."""
    if not class_name or not isinstance(node, Tag):
        return False
    classes = node.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    return class_name in classes


def node_text(node) -> str:
    if isinstance(node, NavigableString):
        return str(node)
    return node.get_text()


def get_inner_html(element) -> str:
    """The HTML of an element's children, trimmed."""
    return "".join(str(child) for child in element.children).strip()


def is_blank(node) -> bool:
    """Comments and whitespace-only text carry no content."""
    if isinstance(node, Comment):
        return True
    if isinstance(node, NavigableString):
        return not node.strip()
    return False


# Inline content that shows up at the top level of editor output
INLINE_TAGS = {"a", "b", "strong", "i", "em", "span", "code", "small", "sub", "sup", "u", "mark", "br"}


def is_inline(node) -> bool:
    if isinstance(node, Comment):
        return False
    if isinstance(node, NavigableString):
        return True
    return isinstance(node, Tag) and node.name in INLINE_TAGS


def wrap_inline_runs(nodes) -> list:
    """
    Collect sibling nodes, wrapping each run of inline nodes in a paragraph.

    Text and inline elements belong to one paragraph until a block element
    interrupts them. Comments and blank runs are dropped.

    Args:
        nodes: Sibling nodes; inline ones are moved into the new paragraphs

    Returns:
        Block nodes and wrapping paragraphs in document order
    """
    collected = []
    run = []

    def close_run():
        if any(not is_blank(node) for node in run):
            paragraph = BeautifulSoup("<p></p>", "html.parser").p
            for node in run:
                paragraph.append(node.extract())
            collected.append(paragraph)
        run.clear()

    for node in list(nodes):
        if isinstance(node, Comment):
            continue
        if is_inline(node):
            run.append(node)
            continue
        close_run()
        collected.append(node)
    close_run()
    return collected


def load_html(html: str) -> BeautifulSoup:
    """
    Load HTML into a soup, trying progressively less strict tree builders.

    html5lib implements the WHATWG algorithm and repairs the worst markup; lxml
    and html.parser are fallbacks.

    Raises:
        ParserError: No tree builder could load the HTML
    """
    # NULL bytes and bare CRs confuse every tree builder
    html = (html or "").replace("\x00", "").replace("\r\n", "\n").replace("\r", "\n")

    for builder in ("html5lib", "lxml", "html.parser"):
        try:
            return BeautifulSoup(html, builder)
        except Exception as e:
            logger.warning(f"{builder} parsing failed: {e}")
    raise ParserError("HTML could not be parsed", details={"length": len(html)})


def get_body(soup: BeautifulSoup) -> Tag:
    # html.parser does not synthesize <body>
    return soup.find("body") or soup


def get_root_element(html: str) -> Tag:
    """
    The first element inside ``<body>``.

    Returns an empty ``<root>`` element when there is none.
    """
    try:
        soup = load_html(html)
    except ParserError:
        soup = BeautifulSoup("", "html.parser")
    for child in get_body(soup).children:
        if isinstance(child, Tag):
            return child
    return soup.new_tag("root")


def get_nodes_by_class(html: str, class_name: str) -> list:
    """
    Find descendant elements carrying a class, using XPath on an lxml tree.

    Returns:
        lxml elements in document order; an empty list for unparsable HTML
    """
    if not html or not html.strip():
        return []
    try:
        tree = etree.HTML(html)
    except (etree.ParserError, ValueError) as e:
        logger.warning(f"lxml could not load HTML: {e}")
        return []
    if tree is None:
        return []
    return tree.xpath(
        "//*[contains(concat(' ', normalize-space(@class), ' '), $needle)]",
        needle=f" {class_name} "
    )


class ContentParser:
    """Turns HTML into components using the export's factory."""

    def __init__(self, context, factory=None):
        self.context = context
        if factory is None:
            factory = context.factory
        if factory is None:
            from .factory import get_default_factory
            factory = get_default_factory()
        self.factory = factory

    def content_nodes(self, html: str) -> list:
        """First-level nodes of the body, inline runs wrapped in paragraphs."""
        soup = load_html(html)
        return wrap_inline_runs(get_body(soup).children)

    def parse(self, html: str) -> list:
        """
        Parse HTML into components.

        Args:
            html: HTML fragment or document

        Returns:
            Components in document order
        """
        if not html or not html.strip():
            return []

        components = []
        for node in self.content_nodes(html):
            components.extend(self.parse_node(node))

        logger.debug(f"Parsed {len(components)} components")
        return components

    def parse_node(self, node) -> list:
        return self.factory.get_components_from_node(node, self.context)

    def get_root_element(self, html: str) -> Tag:
        return get_root_element(html)

    def get_nodes_by_class(self, html: str, class_name: str) -> list:
        return get_nodes_by_class(html, class_name)

    def get_inner_html(self, element: Optional[Tag]) -> str:
        return get_inner_html(element) if element is not None else ""
