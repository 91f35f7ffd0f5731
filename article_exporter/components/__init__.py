"""Component kinds."""

from .advertisement import Advertisement
from .aside import Aside
from .base import AnchorPosition, Component
from .body import Body
from .divider import Divider
from .embeds import EmbedWebVideo, Facebook, Tweet
from .footnotes import Footnotes
from .gallery import Gallery
from .heading import Heading
from .image import Image
from .in_article import InArticle
from .media import Audio, Video
from .meta import Byline, Cover, Intro, Title
from .quote import Quote
from .table import Table

__all__ = [
    "Advertisement",
    "AnchorPosition",
    "Aside",
    "Audio",
    "Body",
    "Byline",
    "Component",
    "Cover",
    "Divider",
    "EmbedWebVideo",
    "Facebook",
    "Footnotes",
    "Gallery",
    "Heading",
    "Image",
    "InArticle",
    "Intro",
    "Quote",
    "Table",
    "Title",
    "Tweet",
    "Video",
]
