"""
seo/meta_extractor.py
─────────────────────
Pulls the SEO-relevant metadata out of a page's HTML:
title, meta description, canonical, robots, Open Graph and Twitter Card.

Each field is looked up exactly once by its own selector. There are no
fallbacks between fields (a missing og:title does NOT borrow <title>),
and a missing tag simply yields "" so the record is never partial.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Optional
from urllib.parse import urljoin

from seo.parsing import Document, HtmlParser, default_parser


# ──────────────────────────────────────────────
# Data model
# ──────────────────────────────────────────────
@dataclass(frozen=True)
class MetadataRecord:
    title:               str = ""
    description:         str = ""
    canonical:           str = ""
    robots:              str = ""
    og_title:            str = ""
    og_description:      str = ""
    og_image:            str = ""
    og_url:              str = ""
    og_type:             str = ""
    twitter_card:        str = ""
    twitter_site:        str = ""
    twitter_title:       str = ""
    twitter_description: str = ""
    twitter_image:       str = ""

    def as_dict(self) -> dict:
        """All 14 fields under their public (camelCase) names, in display order."""
        return {FIELD_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}


# attribute name → public key
FIELD_KEYS: dict[str, str] = {
    "title":               "title",
    "description":         "description",
    "canonical":           "canonical",
    "robots":              "robots",
    "og_title":            "ogTitle",
    "og_description":      "ogDescription",
    "og_image":            "ogImage",
    "og_url":              "ogUrl",
    "og_type":             "ogType",
    "twitter_card":        "twitterCard",
    "twitter_site":        "twitterSite",
    "twitter_title":       "twitterTitle",
    "twitter_description": "twitterDescription",
    "twitter_image":       "twitterImage",
}

# field → (attribute, value) of the <meta> tag it comes from
META_SELECTORS: dict[str, tuple[str, str]] = {
    "description":         ("name",     "description"),
    "robots":              ("name",     "robots"),
    "og_title":            ("property", "og:title"),
    "og_description":      ("property", "og:description"),
    "og_image":            ("property", "og:image"),
    "og_url":              ("property", "og:url"),
    "og_type":             ("property", "og:type"),
    "twitter_card":        ("name",     "twitter:card"),
    "twitter_site":        ("name",     "twitter:site"),
    "twitter_title":       ("name",     "twitter:title"),
    "twitter_description": ("name",     "twitter:description"),
    "twitter_image":       ("name",     "twitter:image"),
}


# ──────────────────────────────────────────────
# Extraction
# ──────────────────────────────────────────────

def extract_metadata(html: str, base_url: Optional[str] = None,
                     parser: Optional[HtmlParser] = None) -> MetadataRecord:
    """
    Parse `html` and build a MetadataRecord.

    `base_url` is the address the page was fetched from; it is only used
    to resolve a relative canonical href (together with any <base href>).
    """
    doc = (parser or default_parser()).parse(html)

    values = {name: _meta_content(doc, attr, value)
              for name, (attr, value) in META_SELECTORS.items()}

    title_tag = doc.select_one("title")
    values["title"]     = title_tag.get_text() if title_tag else ""
    values["canonical"] = _canonical(doc, base_url)

    return MetadataRecord(**values)


def _meta_content(doc: Document, attr: str, value: str) -> str:
    tag = doc.select_one('meta[{}="{}"]'.format(attr, value))
    if tag is None:
        return ""
    return tag.get("content") or ""


def _canonical(doc: Document, base_url: Optional[str]) -> str:
    link = doc.select_one('link[rel="canonical" i]')
    if link is None:
        return ""
    href = link.get("href")
    if href is None:
        return ""

    base = _document_base(doc, base_url)
    href = href.strip()
    return urljoin(base, href) if base else href


def _document_base(doc: Document, base_url: Optional[str]) -> str:
    base_tag = doc.select_one("base[href]")
    if base_tag is not None:
        href = base_tag.get("href").strip()
        return urljoin(base_url, href) if base_url else href
    return base_url or ""
