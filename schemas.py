"""
schemas.py — Pydantic Models
─────────────────────────────
Request/response shapes for the JSON API. They power validation,
serialisation and the interactive docs at /docs.
"""

from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional


# ─────────────────────────────────────────────────────────────────────────────
# REQUEST models
# ─────────────────────────────────────────────────────────────────────────────

class AnalyzeRequest(BaseModel):
    """
    Body sent when asking for an analysis.

    Example JSON:
        { "url": "https://example.com" }
    """
    url: str = Field(
        ...,
        description="Address of the page to analyse",
        examples=["https://example.com"],
        max_length=2048,
    )

    @field_validator("url")
    @classmethod
    def strip_url(cls, v: str) -> str:
        return v.strip()


# ─────────────────────────────────────────────────────────────────────────────
# RESPONSE models
# ─────────────────────────────────────────────────────────────────────────────

class FetchResponse(BaseModel):
    """Successful proxy reply: the raw upstream body."""
    contents: str


class ErrorResponse(BaseModel):
    """Error shape returned by the proxy on 4xx/5xx."""
    error: str


class MetadataModel(BaseModel):
    """All 14 extracted fields; "" means the tag was not on the page."""
    model_config = ConfigDict(populate_by_name=True)

    title:               str = ""
    description:         str = ""
    canonical:           str = ""
    robots:              str = ""
    og_title:            str = Field(default="", alias="ogTitle")
    og_description:      str = Field(default="", alias="ogDescription")
    og_image:            str = Field(default="", alias="ogImage")
    og_url:              str = Field(default="", alias="ogUrl")
    og_type:             str = Field(default="", alias="ogType")
    twitter_card:        str = Field(default="", alias="twitterCard")
    twitter_site:        str = Field(default="", alias="twitterSite")
    twitter_title:       str = Field(default="", alias="twitterTitle")
    twitter_description: str = Field(default="", alias="twitterDescription")
    twitter_image:       str = Field(default="", alias="twitterImage")


class FeedbackModel(BaseModel):
    severity: str = Field(description="success | warning | info")
    message:  str


class FeedbackSummaryModel(BaseModel):
    success: int = Field(default=0, ge=0)
    warning: int = Field(default=0, ge=0)
    info:    int = Field(default=0, ge=0)


class FieldRowModel(BaseModel):
    key:   str
    value: str


class SearchPreviewModel(BaseModel):
    url:         str
    title:       str
    description: str


class SocialCardModel(BaseModel):
    image:          str
    fallback_image: str = Field(description="Placeholder to show if `image` fails to load")
    title:          str
    description:    str
    hostname:       str = ""
    handle:         str = ""


class PreviewsModel(BaseModel):
    search:     SearchPreviewModel
    open_graph: SocialCardModel
    twitter:    SocialCardModel


class AnalyzeResponse(BaseModel):
    """
    Result of one analysis. On a failed fetch `status` is "error",
    `error` holds the message and every result field is empty.
    """
    status:         str = Field(description="success | error")
    url:            str
    metadata:       Optional[MetadataModel] = None
    feedback:       list[FeedbackModel] = []
    summary:        FeedbackSummaryModel = FeedbackSummaryModel()
    fields:         list[FieldRowModel] = []
    previews:       Optional[PreviewsModel] = None
    content_length: int = Field(default=0, description="Characters of page text analysed")
    error:          Optional[str] = None


class HealthResponse(BaseModel):
    """Simple health check response."""
    status:  str = "ok"
    version: str = "1.0.0"
    message: str = "MetaLens is running"
