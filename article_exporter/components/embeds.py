"""
Social and video embeds.

Each kind is recognised either from the rendered embed markup or from a
paragraph holding nothing but the embed URL.
"""

import re
from typing import Optional

from bs4 import BeautifulSoup

from ..parser import node_has_class, node_name, node_text
from .base import Component


# --- Tweets ---

TWEET_URL_PATTERN = re.compile(r"^https?://(?:www\.)?(?:twitter|x)\.com/(?:#!/)?[^/]+/status(?:es)?/\d+", re.IGNORECASE)

# Last status URL in a blob of HTML
TWEET_FIND_PATTERN = re.compile(r"https?://(?:www\.)?(?:twitter|x)\.com/(?:#!/)?([^/\"'\s]*)/status(?:es)?/(\d+)", re.IGNORECASE)


class Tweet(Component):
    name = "tweet"
    label = "Tweet"

    @classmethod
    def node_matches(cls, node, context):
        if node_has_class(node, "twitter-tweet"):
            return node
        if node_name(node) == "p" and TWEET_URL_PATTERN.match(node_text(node).strip()):
            return node
        return None

    @classmethod
    def register_specs(cls):
        cls.register_spec(
            "json",
            "JSON",
            {
                "role": "tweet",
                "URL": "#url#",
            }
        )

        cls.register_spec(
            "tweet-layout",
            "Layout",
            {
                "margin": {
                    "top": 30,
                    "bottom": 30,
                },
            }
        )

    def build(self, text):
        matches = TWEET_FIND_PATTERN.findall(text)
        if not matches:
            return

        # The status link is the last one inside a rendered embed
        user, status = matches[-1]
        self.register_json("json", {"#url#": f"https://twitter.com/{user}/status/{status}"})
        self.register_layout("tweet-layout", "tweet-layout")


# --- Facebook posts ---

FACEBOOK_FORMATS = [
    re.compile(r"^https://www\.facebook\.com/[^/]+/posts/[^/]+/?$"),
    re.compile(r"^https://www\.facebook\.com/[^/]+/activity/[^/]+/?$"),
    re.compile(r"^https://www\.facebook\.com/photo\.php\?fbid=.+$"),
    re.compile(r"^https://www\.facebook\.com/photos/[^/]+/?$"),
    re.compile(r"^https://www\.facebook\.com/permalink\.php\?story_fbid=.+$"),
]


def get_facebook_url(text: str) -> Optional[str]:
    """The post URL without a trailing slash, None unless it is a known format."""
    text = (text or "").strip()
    for pattern in FACEBOOK_FORMATS:
        if pattern.match(text):
            return text.rstrip("/")
    return None


class Facebook(Component):
    name = "facebook"
    label = "Facebook"

    @classmethod
    def node_matches(cls, node, context):
        # Element holding just the URL
        if get_facebook_url(node_text(node)):
            return node

        # Rendered embed
        if node_name(node) == "div" and node_has_class(node, "fb-post"):
            if get_facebook_url(node.get("data-href", "")):
                return node

        return None

    @classmethod
    def register_specs(cls):
        cls.register_spec(
            "json",
            "JSON",
            {
                "role": "facebook_post",
                "URL": "#url#",
            }
        )

    def build(self, text):
        soup = BeautifulSoup(text, "html.parser")
        embed = soup.find(attrs={"data-href": True})
        url = get_facebook_url(embed["data-href"] if embed is not None else soup.get_text())
        if not url:
            return
        self.register_json("json", {"#url#": url})


# --- Web video ---

YOUTUBE_PATTERN = re.compile(
    r"^https?://(?:www\.)?(?:youtube\.com/(?:watch\?v=|embed/)|youtu\.be/)([\w-]+)", re.IGNORECASE
)
VIMEO_PATTERN = re.compile(r"^https?://(?:www\.|player\.)?vimeo\.com/(?:video/)?(\d+)", re.IGNORECASE)


def get_video_embed_url(url: str) -> Optional[str]:
    """Normalised player URL for a YouTube or Vimeo link, else None."""
    url = (url or "").strip()
    match = YOUTUBE_PATTERN.match(url)
    if match:
        return f"https://www.youtube.com/embed/{match.group(1)}"
    match = VIMEO_PATTERN.match(url)
    if match:
        return f"https://player.vimeo.com/video/{match.group(1)}"
    return None


class EmbedWebVideo(Component):
    name = "embed_web_video"
    label = "Embed Web Video"

    @classmethod
    def node_matches(cls, node, context):
        name = node_name(node)
        if name == "p" and get_video_embed_url(node_text(node)):
            return node

        if name == "iframe" and get_video_embed_url(node.get("src", "")):
            return node

        # Block editor embeds: a figure holding the iframe or the bare URL
        if name == "figure" and node_has_class(node, "wp-block-embed"):
            iframe = node.find("iframe")
            if iframe is not None and get_video_embed_url(iframe.get("src", "")):
                return node
            if get_video_embed_url(node_text(node)):
                return node

        return None

    @classmethod
    def register_specs(cls):
        cls.register_spec(
            "json",
            "JSON",
            {
                "role": "embedwebvideo",
                "URL": "#url#",
                "aspectRatio": "#aspect_ratio#",
            }
        )

    def build(self, text):
        soup = BeautifulSoup(text, "html.parser")
        iframe = soup.find("iframe")
        if iframe is not None:
            url = get_video_embed_url(iframe.get("src", ""))
        else:
            url = get_video_embed_url(soup.get_text())
        if not url:
            return

        self.register_json("json", {"#url#": url, "#aspect_ratio#": self.aspect_ratio(iframe)})

    @staticmethod
    def aspect_ratio(iframe) -> float:
        # Player dimensions when the iframe declares them, 16:9 otherwise
        try:
            width = float(iframe.get("width"))
            height = float(iframe.get("height"))
        except (AttributeError, TypeError, ValueError):
            return 1.777
        if width <= 0 or height <= 0:
            return 1.777
        return round(width / height, 3)
