"""Normalisation and ranking of extracted listings.

Monthly plans are compared against annual plans by their cost over twelve
months.  That figure only orders the output; it is dropped before listings
leave this module.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, List

from ranker.scraper.models import Listing, RankedListing, RawListing
from ranker.scraper.pricing import parse_price

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


def normalize(raw: RawListing) -> RankedListing:
    """Convert *raw* text fields into numbers and work out its annual cost.

    Raises:
        ParseError: If the price or discount text is not numeric.
    """
    price = parse_price(raw.price_text)

    if raw.is_annual:
        discount = parse_price(raw.discount_text)
        annual_cost = price
    else:
        discount = Decimal(0)
        annual_cost = price * MONTHS_PER_YEAR

    return RankedListing(
        title=raw.title,
        description=raw.description,
        price=price,
        discount=discount,
        annual_cost=annual_cost,
    )


def rank(raw_listings: Iterable[RawListing]) -> List[Listing]:
    """Return *raw_listings* normalised and ordered by annual cost, highest first.

    Listings with the same annual cost keep their original relative order.
    """
    ranked = [normalize(raw) for raw in raw_listings]
    # sorted() is stable, and reverse=True preserves the order of equal keys.
    ranked = sorted(ranked, key=lambda item: item.annual_cost, reverse=True)
    for item in ranked:
        logger.debug("%s: annual cost %s", item.title, item.annual_cost)
    return [item.to_listing() for item in ranked]
