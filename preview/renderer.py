"""
preview/renderer.py
───────────────────
Read-only mockups built from a MetadataRecord:

  • the raw field list
  • a search-result snippet (URL + title + description)
  • an Open Graph card (Facebook / LinkedIn)
  • a Twitter Card

Every empty field is replaced with placeholder text or a generated
placeholder image, so templates never have to deal with "" or None.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote, urlparse

from seo.meta_extractor import MetadataRecord

PLACEHOLDER_HOST = "https://placehold.co"
NOT_FOUND        = "<not found>"

DEFAULT_URL         = "https://www.example.com"
DEFAULT_HOST        = "example.com"
DEFAULT_TITLE       = "Example Page Title - Default Site Name"
DEFAULT_DESCRIPTION = ("This is a default meta description for your page. It should be "
                       "compelling and summarize the content. Aim for 50-160 characters.")
DEFAULT_OG_TITLE    = "Default Open Graph Title"
DEFAULT_OG_DESC     = ("This is the default Open Graph description. It should be engaging "
                       "and concise to encourage clicks on social media.")
DEFAULT_TW_TITLE    = "Default Twitter Card Title"
DEFAULT_TW_DESC     = ("This is the default Twitter Card description. "
                       "Keep it short and impactful for Twitter users.")
DEFAULT_TW_HANDLE   = "MetaLens"

OG_IMAGE_SIZE      = (600, 315)
TWITTER_IMAGE_SIZE = (500, 262)


@dataclass(frozen=True)
class SearchPreview:
    url:         str
    title:       str
    description: str


@dataclass(frozen=True)
class SocialCard:
    image:          str
    fallback_image: str   # swapped in by the page if `image` fails to load
    title:          str
    description:    str
    hostname:       str = ""
    handle:         str = ""


@dataclass(frozen=True)
class Previews:
    search:     SearchPreview
    open_graph: SocialCard
    twitter:    SocialCard


def placeholder_image(width: int, height: int, text: str = "Image") -> str:
    return "{}/{}x{}/e0e0e0/333333?text={}".format(
        PLACEHOLDER_HOST, width, height, quote(text, safe="!'()*"))


def build_previews(meta: MetadataRecord, page_url: Optional[str] = None) -> Previews:
    og_w, og_h = OG_IMAGE_SIZE
    tw_w, tw_h = TWITTER_IMAGE_SIZE

    search = SearchPreview(
        url         = page_url or DEFAULT_URL,
        title       = meta.title or DEFAULT_TITLE,
        description = meta.description or DEFAULT_DESCRIPTION,
    )
    open_graph = SocialCard(
        image          = meta.og_image or placeholder_image(og_w, og_h, "Open Graph Image"),
        fallback_image = placeholder_image(og_w, og_h, "Image Load Error"),
        title          = meta.og_title or DEFAULT_OG_TITLE,
        description    = meta.og_description or DEFAULT_OG_DESC,
        hostname       = hostname_of(page_url),
    )
    twitter = SocialCard(
        image          = meta.twitter_image or placeholder_image(tw_w, tw_h, "Twitter Card Image"),
        fallback_image = placeholder_image(tw_w, tw_h, "Image Load Error"),
        title          = meta.twitter_title or DEFAULT_TW_TITLE,
        description    = meta.twitter_description or DEFAULT_TW_DESC,
        handle         = "@" + (meta.twitter_site.replace("@", "", 1) or DEFAULT_TW_HANDLE),
    )
    return Previews(search=search, open_graph=open_graph, twitter=twitter)


def field_rows(meta: MetadataRecord) -> list[tuple[str, str]]:
    """(public key, value) for every field, with absent values spelled out."""
    return [(key, value or NOT_FOUND) for key, value in meta.as_dict().items()]


def hostname_of(url: Optional[str]) -> str:
    if not url:
        return DEFAULT_HOST
    try:
        host = urlparse(url).hostname
    except ValueError:
        host = None
    return host or DEFAULT_HOST
