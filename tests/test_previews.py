from dataclasses import asdict

from preview.renderer import (
    DEFAULT_HOST, DEFAULT_TITLE, DEFAULT_URL, NOT_FOUND,
    build_previews, field_rows, hostname_of, placeholder_image,
)
from seo.meta_extractor import MetadataRecord


def test_placeholder_image_url_is_encoded():
    assert placeholder_image(600, 315, "Open Graph Image") == \
        "https://placehold.co/600x315/e0e0e0/333333?text=Open%20Graph%20Image"
    assert placeholder_image(10, 20).endswith("/10x20/e0e0e0/333333?text=Image")


def test_empty_record_never_renders_empty_values():
    previews = build_previews(MetadataRecord())

    for view in (previews.search, previews.open_graph, previews.twitter):
        for key, value in asdict(view).items():
            if key in ("hostname", "handle"):
                continue
            assert value, key

    assert previews.search.url == DEFAULT_URL
    assert previews.search.title == DEFAULT_TITLE
    assert previews.open_graph.hostname == DEFAULT_HOST
    assert previews.open_graph.image == placeholder_image(600, 315, "Open Graph Image")
    assert previews.twitter.image == placeholder_image(500, 262, "Twitter Card Image")
    assert previews.twitter.handle == "@MetaLens"


def test_previews_use_extracted_values():
    meta = MetadataRecord(
        title="Real title", description="Real description",
        og_title="OG", og_image="https://example.com/og.png",
        twitter_title="TW", twitter_site="@acme",
    )
    previews = build_previews(meta, "https://www.acme.test/page")

    assert previews.search.url == "https://www.acme.test/page"
    assert previews.search.title == "Real title"
    assert previews.open_graph.title == "OG"
    assert previews.open_graph.image == "https://example.com/og.png"
    assert previews.open_graph.hostname == "www.acme.test"
    assert previews.twitter.title == "TW"
    assert previews.twitter.handle == "@acme"


def test_fallback_images_are_load_error_placeholders():
    previews = build_previews(MetadataRecord(og_image="https://broken.example/x.png"))
    assert previews.open_graph.fallback_image == placeholder_image(600, 315, "Image Load Error")
    assert previews.twitter.fallback_image == placeholder_image(500, 262, "Image Load Error")


def test_twitter_handle_without_at_sign():
    previews = build_previews(MetadataRecord(twitter_site="acme"))
    assert previews.twitter.handle == "@acme"


def test_hostname_of_unparseable_url_falls_back():
    assert hostname_of("http://[not-an-ipv6") == DEFAULT_HOST
    assert hostname_of("not a url") == DEFAULT_HOST
    assert hostname_of(None) == DEFAULT_HOST


def test_field_rows_mark_missing_values():
    rows = field_rows(MetadataRecord(title="Hello"))
    assert rows[0] == ("title", "Hello")
    assert ("ogImage", NOT_FOUND) in rows
    assert len(rows) == 14
