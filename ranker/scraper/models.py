"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any


@dataclass
class RawPage:
    """The raw HTTP response for a single URL fetch."""

    url: str
    html: bytes
    status_code: int
    # Charset from the Content-Type header, when the server sent one.
    encoding: str | None = None


@dataclass
class RawListing:
    """One product container's text, before any numeric conversion.

    ``discount_text`` is ``None`` for monthly plans; annual plans carry the
    text of their "Save ..." paragraph.
    """

    title: str
    description: str
    price_text: str
    discount_text: str | None = None

    @property
    def is_annual(self) -> bool:
        return self.discount_text is not None


@dataclass
class Listing:
    """A normalised product listing, the only record exposed to callers."""

    title: str
    description: str
    price: Decimal
    discount: Decimal

    def to_dict(self) -> dict[str, Any]:
        """Return the listing as a dict keyed in output order."""
        return {
            "title": self.title,
            "description": self.description,
            "price": self.price,
            "discount": self.discount,
        }


@dataclass
class RankedListing(Listing):
    """A :class:`Listing` plus the annual cost used to order it."""

    annual_cost: Decimal = Decimal(0)

    def to_listing(self) -> Listing:
        return Listing(
            title=self.title,
            description=self.description,
            price=self.price,
            discount=self.discount,
        )
