"""Exceptions raised by the scraping pipeline.

Every failure the pipeline can surface is a :class:`ScrapeError`, so callers
need a single ``except`` clause to turn any of them into a message.
"""

from __future__ import annotations


class ScrapeError(Exception):
    """Base class for all pipeline failures."""


class FetchError(ScrapeError):
    """The document could not be retrieved (transport failure or bad status)."""

    def __init__(self, url: str, reason: str, status_code: int | None = None) -> None:
        super().__init__(f"Unable to retrieve {url}: {reason}")
        self.url = url
        self.reason = reason
        self.status_code = status_code


class StructureError(ScrapeError):
    """The document does not have the expected product markup."""


class ParseError(ScrapeError):
    """A price or discount text is not numeric once known prefixes are removed."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Cannot parse a price from {text!r}")
        self.text = text
