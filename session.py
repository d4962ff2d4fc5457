"""
session.py — Analysis state
────────────────────────────
One immutable snapshot of "what the dashboard is showing right now".

    idle ──submit──▶ loading ──succeed──▶ success
                        │                    │
                        └────fail──▶ error   │
    success / error ──submit──▶ loading ◀────┘

Every transition returns a NEW state; nothing is mutated in place.
Feedback and previews are derived from the metadata on demand and are
only available in the success state.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional

from seo.meta_extractor import MetadataRecord
from seo.feedback import FeedbackItem, score_metadata
from preview.renderer import Previews, build_previews, field_rows

IDLE    = "idle"
LOADING = "loading"
SUCCESS = "success"
ERROR   = "error"


class InvalidTransition(Exception):
    """A transition was attempted from a state that does not allow it."""


class AnalysisInProgress(InvalidTransition):
    """A new URL was submitted while the previous one is still loading."""


@dataclass(frozen=True)
class AnalysisState:
    status:   str = IDLE
    url:      str = ""
    contents: str = ""
    metadata: Optional[MetadataRecord] = None
    error:    str = ""

    # ── Constructors / transitions ────────────────────────────────────────────

    @classmethod
    def idle(cls, url: str = "") -> "AnalysisState":
        return cls(status=IDLE, url=url)

    def submit(self, url: str) -> "AnalysisState":
        if self.status == LOADING:
            raise AnalysisInProgress("An analysis is already running for {}".format(self.url))
        if not url:
            raise ValueError("URL is required.")
        # previous results and errors are dropped on every new submission
        return AnalysisState(status=LOADING, url=url)

    def succeed(self, contents: str, metadata: MetadataRecord) -> "AnalysisState":
        self._require(LOADING, "succeed")
        return replace(self, status=SUCCESS, contents=contents, metadata=metadata)

    def fail(self, message: str) -> "AnalysisState":
        self._require(LOADING, "fail")
        return replace(self, status=ERROR, contents="", metadata=None, error=message)

    def _require(self, status: str, action: str) -> None:
        if self.status != status:
            raise InvalidTransition("Cannot {} from state '{}'".format(action, self.status))

    # ── Derived views ─────────────────────────────────────────────────────────

    @property
    def is_loading(self) -> bool:
        return self.status == LOADING

    @property
    def has_results(self) -> bool:
        return self.status == SUCCESS and self.metadata is not None

    @property
    def feedback(self) -> list[FeedbackItem]:
        return score_metadata(self.metadata) if self.has_results else []

    @property
    def previews(self) -> Optional[Previews]:
        return build_previews(self.metadata, self.url) if self.has_results else None

    @property
    def fields(self) -> list[tuple[str, str]]:
        return field_rows(self.metadata) if self.has_results else []
