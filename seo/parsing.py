"""
seo/parsing.py
──────────────
The "turn markup into something queryable" step, kept behind a tiny
interface so the extraction rules never import a parser directly.

Anything that can `parse(text)` into an object with `select_one(css)`
will do. The default wraps BeautifulSoup, whose tree already satisfies
the Document/Element protocols below.
"""

from __future__ import annotations
from typing import Optional, Protocol

from bs4 import BeautifulSoup

import config


class Element(Protocol):
    def get(self, key: str, default=None): ...
    def get_text(self) -> str: ...


class Document(Protocol):
    def select_one(self, selector: str) -> Optional[Element]: ...


class HtmlParser(Protocol):
    def parse(self, text: str) -> Document: ...


class BeautifulSoupParser:
    """
    Lenient parser: broken markup is repaired best-effort, never raised.

    `features` picks the tree builder ("html.parser", "lxml", "html5lib").
    Only the stdlib-backed "html.parser" is installed by default.
    """

    def __init__(self, features: Optional[str] = None):
        self.features = features or config.HTML_PARSER

    def parse(self, text: str) -> Document:
        return BeautifulSoup(text or "", self.features)


def default_parser() -> HtmlParser:
    return BeautifulSoupParser()
