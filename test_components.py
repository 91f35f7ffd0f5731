"""
Tests for the individual component kinds.

Each test parses a small fragment through the default factory and checks
the component JSON and what it registered.
"""

from article_exporter import export_html
from article_exporter.components import (
    Advertisement, AnchorPosition, Aside, Audio, Body, Divider, EmbedWebVideo, Facebook,
    Footnotes, Gallery, Heading, Image, Quote, Table, Tweet, Video
)
from article_exporter.parser import ContentParser
from article_exporter.settings import Settings
from article_exporter.theme import Theme


def parse(context, html):
    return ContentParser(context).parse(html)


# --- Text ---

def test_body_markdown(make_context):
    context = make_context()
    [body] = parse(context, "<p>Hello <strong>world</strong></p>")

    assert isinstance(body, Body)
    assert body.json == {
        "role": "body",
        "text": "Hello **world**\n\n",
        "format": "markdown",
        "layout": "body-layout",
        "textStyle": "default-body",
    }
    assert context.registries.layouts.get("body-layout") == {
        "columnSpan": 6,
        "margin": {"top": 12, "bottom": 12},
    }
    assert context.registries.layouts.get("body-layout-last")["margin"]["bottom"] == 30


def test_body_html_support(make_context):
    context = make_context(settings_override=Settings(html_support="yes"))
    [body] = parse(context, "<p>Hi <b>there</b></p>")

    assert body.get_json("format") == "html"
    assert body.get_json("text") == "<p>Hi <b>there</b></p>"


def test_body_splits_out_images(make_context):
    context = make_context()
    components = parse(context, '<p>Intro <img src="http://example.com/a.jpg"> outro</p>')

    assert [type(component) for component in components] == [Body, Image, Body]
    assert components[1].get_json("URL") == "bundle://a.jpg"


def test_dropcap_only_on_first_body(make_context):
    context = make_context(theme_override=Theme(values={"initial_dropcap": "yes"}))
    first, second = parse(context, "<p>First</p><p>Second</p>")

    assert first.get_json("textStyle") == "dropcapBodyStyle"
    assert second.get_json("textStyle") == "default-body"

    dropcap = context.registries.text_styles.get("dropcapBodyStyle")["dropCapStyle"]
    assert dropcap["numberOfLines"] == 4
    assert "backgroundColor" not in dropcap


def test_theme_override_replaces_text_style(make_context, theme):
    theme.set_spec_override("body", "default-body", {"fontName": "#body_font#", "fontSize": 30})
    context = make_context()
    parse(context, "<p>Styled</p>")

    assert context.registries.text_styles.get("default-body") == {
        "fontName": "AvenirNext-Regular",
        "fontSize": 30,
    }


def test_postmeta_token_in_override(make_context, theme):
    theme.set_spec_override("body", "json", {"role": "body", "text": "#postmeta.subtitle#"})
    context = make_context()
    [body] = parse(context, "<p>Ignored</p>")

    assert body.get_json("text") == "From postmeta"


def test_heading(make_context):
    context = make_context()
    [heading] = parse(context, "<h3>Section <em>one</em></h3>")

    assert isinstance(heading, Heading)
    assert heading.json == {
        "role": "heading3",
        "text": "Section one",
        "format": "markdown",
        "textStyle": "default-heading-3",
        "layout": "heading-layout",
    }
    assert context.registries.text_styles.get("default-heading-3")["fontSize"] == 24


def test_heading_with_image_is_split(make_context):
    context = make_context()
    heading, image = parse(context, '<h2>Hi <img src="http://example.com/h.jpg" alt="H"></h2>')

    assert heading.get_json("role") == "heading2"
    assert heading.get_json("text") == "Hi"
    assert isinstance(image, Image)
    assert image.get_json("accessibilityCaption") == "H"
    assert context.bundler.bundles == ["http://example.com/h.jpg"]


def test_blockquote(make_context):
    context = make_context()
    [quote] = parse(context, "<blockquote><p>Quoted</p></blockquote>")

    assert isinstance(quote, Quote)
    assert quote.anchor_position == AnchorPosition.NONE
    assert quote.get_json("layout") == "blockquote-layout"
    assert quote.get_json("style") == "default-blockquote"
    assert quote.get_json("components") == [{
        "role": "quote",
        "text": "Quoted",
        "format": "markdown",
        "layout": "blockquote-text-layout",
        "textStyle": "default-blockquote-text",
    }]


def test_pullquote_markup_floats(make_context):
    context = make_context()
    [quote] = parse(context, '<blockquote class="pullquote"><p>Pulled</p></blockquote>')

    assert quote.anchor_position == AnchorPosition.AUTO
    assert quote.get_json("anchor")["originAnchorPosition"] == "top"
    assert quote.get_json("components")[0]["textStyle"] == "default-pullquote"
    assert "quote-layout" in context.registries.layouts


# --- Media ---

def test_image_with_caption_and_alignment(make_context):
    context = make_context()
    [image] = parse(
        context,
        '<figure class="wp-block-image alignleft">'
        '<img src="http://example.com/p.jpg" alt="Alt"><figcaption>A caption</figcaption>'
        "</figure>"
    )

    assert image.anchor_position == AnchorPosition.LEFT
    assert image.get_json("role") == "container"
    assert image.get_json("layout") == "photo-layout"
    photo, caption = image.get_json("components")
    assert photo == {
        "role": "photo",
        "URL": "bundle://p.jpg",
        "accessibilityCaption": "Alt",
        "caption": "A caption",
    }
    assert caption["textStyle"] == "default-image-caption"
    assert "default-image-caption" in context.registries.text_styles
    assert image.original_url() == "http://example.com/p.jpg"


def test_image_remote_and_full_bleed(make_context):
    context = make_context(settings_override=Settings(use_remote_images="yes", full_bleed_images="yes"))
    [image] = parse(context, '<img src="http://example.com/r.jpg">')

    assert image.json == {
        "role": "photo",
        "URL": "http://example.com/r.jpg",
        "layout": "full-width-image",
    }
    assert context.bundler.bundles == []
    assert context.registries.layouts.get("full-width-image")["columnSpan"] == 7


def test_image_without_src_builds_nothing(make_context):
    [image] = parse(make_context(), "<img alt='missing'>")
    assert image.json is None
    assert image.to_array() is None


def test_gallery_from_image_blocks(make_context):
    context = make_context()
    [gallery] = parse(
        context,
        '<figure class="wp-block-gallery has-nested-images">'
        '<figure class="wp-block-image"><img src="http://example.com/1.jpg" alt="One">'
        "<figcaption>First</figcaption></figure>"
        '<figure class="wp-block-image"><img src="http://example.com/2.jpg" alt=""></figure>'
        "</figure>"
    )

    assert isinstance(gallery, Gallery)
    assert gallery.json == {
        "role": "gallery",
        "items": [
            {"URL": "bundle://1.jpg", "accessibilityCaption": "One", "caption": "First"},
            {"URL": "bundle://2.jpg"},
        ],
        "layout": "gallery-layout",
    }
    assert context.bundler.bundles == ["http://example.com/1.jpg", "http://example.com/2.jpg"]


def test_classic_gallery_as_mosaic(make_context):
    context = make_context(theme_override=Theme(values={"gallery_type": "mosaic"}))
    [gallery] = parse(context, '<div class="gallery"><img src="http://example.com/3.jpg" alt="Three"></div>')

    assert gallery.get_json("role") == "mosaic"
    assert gallery.get_json("items") == [{"URL": "bundle://3.jpg", "accessibilityCaption": "Three"}]


def test_audio_in_figure(make_context):
    [audio] = parse(
        make_context(),
        '<figure class="wp-block-audio"><audio controls src="http://example.com/a.mp3"></audio></figure>'
    )

    assert isinstance(audio, Audio)
    assert audio.json == {"role": "audio", "URL": "http://example.com/a.mp3"}


def test_video_with_source_and_poster(make_context):
    context = make_context()
    [video] = parse(
        context,
        '<video poster="http://example.com/poster.jpg"><source src="http://example.com/v.mp4"></video>'
    )

    assert isinstance(video, Video)
    assert video.json == {
        "role": "video",
        "URL": "http://example.com/v.mp4",
        "stillURL": "bundle://poster.jpg",
    }


def test_video_without_source_builds_nothing(make_context):
    [video] = parse(make_context(), "<video></video>")
    assert video.json is None


# --- Embeds ---

def test_tweet_from_rendered_embed(make_context):
    [tweet] = parse(
        make_context(),
        '<blockquote class="twitter-tweet"><p>Hello</p>&mdash; User (@user) '
        '<a href="https://twitter.com/user/status/123?ref_src=embed">March 1</a></blockquote>'
    )

    assert isinstance(tweet, Tweet)
    assert tweet.json == {
        "role": "tweet",
        "URL": "https://twitter.com/user/status/123",
        "layout": "tweet-layout",
    }


def test_tweet_from_bare_url(make_context):
    [tweet] = parse(make_context(), "<p>https://x.com/someone/status/456</p>")
    assert tweet.get_json("URL") == "https://twitter.com/someone/status/456"


def test_facebook_post_url(make_context):
    [post] = parse(make_context(), "<p>https://www.facebook.com/page/posts/12345/</p>")

    assert isinstance(post, Facebook)
    assert post.json == {"role": "facebook_post", "URL": "https://www.facebook.com/page/posts/12345"}


def test_facebook_rendered_embed(make_context):
    [post] = parse(
        make_context(),
        '<div class="fb-post" data-href="https://www.facebook.com/photo.php?fbid=123"></div>'
    )
    assert post.get_json("URL") == "https://www.facebook.com/photo.php?fbid=123"


def test_unknown_facebook_url_is_plain_text(make_context):
    [body] = parse(make_context(), "<p>https://www.facebook.com/somewhere</p>")
    assert isinstance(body, Body)


def test_web_video_from_url_paragraph(make_context):
    [video] = parse(make_context(), "<p>https://www.youtube.com/watch?v=abc123</p>")

    assert isinstance(video, EmbedWebVideo)
    assert video.json == {
        "role": "embedwebvideo",
        "URL": "https://www.youtube.com/embed/abc123",
        "aspectRatio": 1.777,
    }


def test_web_video_iframe_aspect_ratio(make_context):
    [video] = parse(
        make_context(),
        '<iframe src="https://player.vimeo.com/video/76979871" width="640" height="360"></iframe>'
    )

    assert video.get_json("URL") == "https://player.vimeo.com/video/76979871"
    assert video.get_json("aspectRatio") == 1.778


# --- Structure ---

def test_table(make_context):
    context = make_context()
    [table] = parse(context, "<table><tr><td>1</td></tr></table>")

    assert isinstance(table, Table)
    assert table.get_json("role") == "htmltable"
    assert table.get_json("html").startswith("<table>")
    assert table.get_json("layout") == "table-layout"
    assert table.get_json("style") == "default-table"
    assert context.registries.layouts.get("table-layout") == {"margin": {"bottom": 20}}
    style = context.registries.component_styles.get("default-table")
    assert style["tableStyle"]["headerCells"]["textStyle"]["fontName"] == "AvenirNext-Bold"



def test_empty_table_builds_nothing(make_context):
    [table] = parse(make_context(), "<table></table>")
    assert table.to_array() is None

    document = export_html("<table></table><p>After</p>", title="T")
    assert [component["role"] for component in document.components] == ["title", "body"]

def test_divider(make_context):
    [divider] = parse(make_context(), "<hr>")

    assert isinstance(divider, Divider)
    assert divider.json == {
        "role": "divider",
        "layout": "divider-layout",
        "stroke": {"color": "#e1e1e1", "style": "solid", "width": 1},
    }


def test_footnotes(make_context):
    context = make_context()
    [footnotes] = parse(
        context,
        '<ol class="wp-block-footnotes">'
        '<li id="fn1">First note <a href="#r1">back</a></li>'
        '<li id="fn2">Second note</li>'
        "</ol>"
    )

    assert isinstance(footnotes, Footnotes)
    assert footnotes.get_json("role") == "container"
    assert footnotes.get_json("layout") == "body-layout"
    assert "body-layout" in context.registries.layouts
    assert footnotes.get_json("components") == [
        {
            "role": "body",
            "text": '<p id="fn1">1. First note <a href="#r1">back</a></p>',
            "format": "html",
            "identifier": "fn1",
        },
        {
            "role": "body",
            "text": '<p id="fn2">2. Second note</p>',
            "format": "html",
            "identifier": "fn2",
        },
    ]


def test_aside_exports_nested_components(make_context):
    context = make_context(settings_override=Settings(aside_component_class="my-aside"))
    [aside] = parse(context, '<div class="my-aside extra"><p>Aside text</p></div>')

    assert isinstance(aside, Aside)
    assert aside.anchor_position == AnchorPosition.RIGHT
    assert aside.get_json("role") == "aside"
    assert aside.get_json("layout") == "aside-layout"
    assert aside.get_json("style") == "default-aside"

    [inner] = aside.get_json("components")
    assert inner["text"].strip() == "Aside text"
    assert inner["layout"] == "aside-subcomponent-body-layout"
    assert inner["textStyle"] == "aside-subcomponent-default-body"
    assert "aside-subcomponent-body-layout" in context.registries.layouts


def test_aside_reads_subcomponent_overrides(make_context):
    theme = Theme(values={"aside_alignment": "left"})
    theme.json_templates["aside"] = {
        "subcomponents": {"body": {"json": {"role": "body", "text": "#text#", "format": "none"}}}
    }
    context = make_context(
        settings_override=Settings(aside_component_class="my-aside"),
        theme_override=theme
    )
    [aside] = parse(context, '<div class="my-aside"><p>Aside text</p></div>')

    assert aside.anchor_position == AnchorPosition.LEFT
    assert aside.get_json("components")[0]["format"] == "none"


def test_aside_disabled_without_class(make_context):
    [body] = parse(make_context(), '<div class="my-aside"><p>Aside text</p></div>')
    assert isinstance(body, Body)


def test_advertisement(make_context):
    context = make_context(settings_override=Settings(advertisement_component_class="ad-slot"))
    [ad] = parse(context, '<div class="ad-slot"></div>')

    assert isinstance(ad, Advertisement)
    assert ad.json == {
        "role": "banner_advertisement",
        "bannerType": "standard",
        "layout": "advertisement-layout",
    }
    assert context.registries.layouts.get("advertisement-layout") == {"margin": {"top": 15, "bottom": 15}}
    assert not ad.can_be_anchor_target()
