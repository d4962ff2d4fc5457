from seo.meta_extractor import FIELD_KEYS, MetadataRecord, extract_metadata
from seo.parsing import BeautifulSoupParser

FULL_PAGE = """
<html>
  <head>
    <title>Widgets &amp; Gadgets | Example Store</title>
    <meta name="description" content="Hand-made widgets shipped worldwide." />
    <meta name="robots" content="index, follow" />
    <link rel="canonical" href="https://example.com/widgets" />
    <meta property="og:title" content="OG Widgets" />
    <meta property="og:description" content="OG description" />
    <meta property="og:image" content="https://example.com/og.png" />
    <meta property="og:url" content="https://example.com/widgets" />
    <meta property="og:type" content="website" />
    <meta name="twitter:card" content="summary_large_image" />
    <meta name="twitter:site" content="@example" />
    <meta name="twitter:title" content="TW Widgets" />
    <meta name="twitter:description" content="TW description" />
    <meta name="twitter:image" content="https://example.com/tw.png" />
  </head>
  <body><h1>Widgets</h1></body>
</html>
"""

EXPECTED_KEYS = [
    "title", "description", "canonical", "robots",
    "ogTitle", "ogDescription", "ogImage", "ogUrl", "ogType",
    "twitterCard", "twitterSite", "twitterTitle", "twitterDescription", "twitterImage",
]


def test_extracts_every_field_from_a_complete_page():
    meta = extract_metadata(FULL_PAGE)

    assert meta.title == "Widgets & Gadgets | Example Store"
    assert meta.description == "Hand-made widgets shipped worldwide."
    assert meta.robots == "index, follow"
    assert meta.canonical == "https://example.com/widgets"
    assert meta.og_title == "OG Widgets"
    assert meta.og_type == "website"
    assert meta.twitter_card == "summary_large_image"
    assert meta.twitter_site == "@example"
    assert meta.twitter_image == "https://example.com/tw.png"


def test_record_always_has_all_fourteen_keys():
    for html in ["", "<html></html>", "<<<>>> not html at all", FULL_PAGE]:
        data = extract_metadata(html).as_dict()
        assert list(data) == EXPECTED_KEYS
        assert all(isinstance(v, str) for v in data.values())

    assert list(FIELD_KEYS.values()) == EXPECTED_KEYS


def test_missing_tags_become_empty_strings():
    meta = extract_metadata("<html><head></head><body><p>hi</p></body></html>")
    assert meta == MetadataRecord()


def test_no_fallback_between_fields():
    meta = extract_metadata("<title>Page title</title><meta name='description' content='Desc'>")
    assert meta.title == "Page title"
    assert meta.og_title == ""
    assert meta.twitter_title == ""
    assert meta.og_description == ""


def test_og_tags_use_property_and_twitter_tags_use_name():
    html = """
    <meta name="og:title" content="wrong attribute">
    <meta property="twitter:title" content="wrong attribute">
    """
    meta = extract_metadata(html)
    assert meta.og_title == ""
    assert meta.twitter_title == ""


def test_first_matching_tag_wins():
    html = """
    <title>First</title><title>Second</title>
    <meta name="description" content="first description">
    <meta name="description" content="second description">
    """
    meta = extract_metadata(html)
    assert meta.title == "First"
    assert meta.description == "first description"


def test_meta_without_content_attribute_is_empty():
    meta = extract_metadata('<meta name="description"><meta property="og:image">')
    assert meta.description == ""
    assert meta.og_image == ""


def test_title_text_is_not_normalised():
    meta = extract_metadata("<title>  Spaced   out  </title>")
    assert meta.title == "  Spaced   out  "


def test_malformed_markup_is_recovered():
    html = '<html><head><meta name="description" content="still found"><div><p>unclosed <b>tags'
    meta = extract_metadata(html)
    assert meta.description == "still found"


def test_relative_canonical_resolves_against_page_url():
    html = '<link rel="canonical" href="/products/1">'
    meta = extract_metadata(html, base_url="https://shop.example.com/products/1?ref=ad")
    assert meta.canonical == "https://shop.example.com/products/1"


def test_canonical_respects_base_element():
    html = '<base href="https://cdn.example.org/site/"><link rel="canonical" href="page.html">'
    meta = extract_metadata(html, base_url="https://example.com/")
    assert meta.canonical == "https://cdn.example.org/site/page.html"


def test_canonical_without_base_is_returned_as_written():
    meta = extract_metadata('<link rel="canonical" href=" /relative ">')
    assert meta.canonical == "/relative"


def test_canonical_link_without_href_is_empty():
    meta = extract_metadata('<link rel="canonical">', base_url="https://example.com/")
    assert meta.canonical == ""


class _EmptyDocument:
    def select_one(self, selector):
        return None


class _EmptyParser:
    def parse(self, text):
        return _EmptyDocument()


def test_parser_can_be_swapped():
    meta = extract_metadata(FULL_PAGE, parser=_EmptyParser())
    assert meta == MetadataRecord()

    meta = extract_metadata(FULL_PAGE, parser=BeautifulSoupParser("html.parser"))
    assert meta.og_title == "OG Widgets"


def test_canonical_rel_matches_case_insensitively():
    meta = extract_metadata('<link rel="Canonical" href="https://e.com/c">')
    assert meta.canonical == "https://e.com/c"
