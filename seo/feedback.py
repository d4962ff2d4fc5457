"""
seo/feedback.py
───────────────
Rule-based feedback for an extracted MetadataRecord.

Five independent checks, always all five, always in this order:
title → description → canonical → Open Graph → Twitter Card.
Lengths are plain `len()` on the raw strings and both ends of every
recommended range are inclusive.
"""

from __future__ import annotations
from dataclasses import dataclass

from seo.meta_extractor import MetadataRecord

SUCCESS = "success"
WARNING = "warning"
INFO    = "info"
SEVERITIES = (SUCCESS, WARNING, INFO)

TITLE_MIN, TITLE_MAX = 30, 60
DESC_MIN,  DESC_MAX  = 50, 160

OG_REQUIRED      = ("og_title", "og_description", "og_image")
TWITTER_REQUIRED = ("twitter_card", "twitter_title", "twitter_description", "twitter_image")


@dataclass(frozen=True)
class FeedbackItem:
    severity: str   # "success" | "warning" | "info"
    message:  str


def score_metadata(meta: MetadataRecord) -> list[FeedbackItem]:
    return [
        _check_title(meta.title),
        _check_description(meta.description),
        _check_canonical(meta.canonical),
        _check_open_graph(meta),
        _check_twitter(meta),
    ]


def summarise(items: list[FeedbackItem]) -> dict[str, int]:
    """How many items landed in each severity bucket."""
    counts = {sev: 0 for sev in SEVERITIES}
    for item in items:
        counts[item.severity] = counts.get(item.severity, 0) + 1
    return counts


# ── Individual checks ─────────────────────────────────────────────────────────

def _check_title(title: str) -> FeedbackItem:
    if not title:
        return FeedbackItem(WARNING, "Missing <title> tag. This is crucial for SEO.")
    n = len(title)
    if n < TITLE_MIN:
        return FeedbackItem(INFO, f"Title is short ({n} chars). "
                                  f"Consider making it more descriptive ({TITLE_MIN}-{TITLE_MAX} chars).")
    if n > TITLE_MAX:
        return FeedbackItem(WARNING, f"Title is too long ({n} chars). "
                                     f"Aim for {TITLE_MIN}-{TITLE_MAX} characters to avoid truncation.")
    return FeedbackItem(SUCCESS, f"Title tag looks good ({n} chars).")


def _check_description(desc: str) -> FeedbackItem:
    if not desc:
        return FeedbackItem(WARNING, "Missing meta description. "
                                     "This helps search engines understand your page.")
    n = len(desc)
    if n < DESC_MIN:
        return FeedbackItem(INFO, f"Meta description is short ({n} chars). "
                                  f"Aim for {DESC_MIN}-{DESC_MAX} characters.")
    if n > DESC_MAX:
        return FeedbackItem(WARNING, f"Meta description is too long ({n} chars). "
                                     f"Aim for {DESC_MIN}-{DESC_MAX} characters to avoid truncation.")
    return FeedbackItem(SUCCESS, f"Meta description looks good ({n} chars).")


def _check_canonical(canonical: str) -> FeedbackItem:
    if not canonical:
        return FeedbackItem(INFO, "Canonical URL is missing. "
                                  "Consider adding one to prevent duplicate content issues.")
    return FeedbackItem(SUCCESS, f"Canonical URL present: {canonical}")


def _check_open_graph(meta: MetadataRecord) -> FeedbackItem:
    if not all(getattr(meta, name) for name in OG_REQUIRED):
        return FeedbackItem(WARNING, "Missing one or more Open Graph tags "
                                     "(og:title, og:description, og:image). "
                                     "These are important for social media sharing.")
    return FeedbackItem(SUCCESS, "Open Graph tags are present.")


def _check_twitter(meta: MetadataRecord) -> FeedbackItem:
    if not all(getattr(meta, name) for name in TWITTER_REQUIRED):
        return FeedbackItem(WARNING, "Missing one or more Twitter Card tags. "
                                     "These are important for Twitter sharing.")
    return FeedbackItem(SUCCESS, "Twitter Card tags are present.")
