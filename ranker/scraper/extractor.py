"""Product extraction: finds the listings in a parsed package page.

The page marks each product with a ``<div>`` whose class attribute contains
``"package "`` (the trailing space matters: it keeps ``package-name``,
``package-price`` and friends from matching).  Inside a container:

    div.package ...
      div > h3                 title
      div.package-name         description text
      div.package-price
        span                   price, e.g. "£5.99"
        p (annual plans only)  discount, e.g. "Save £5.86 on the monthly price"

Each field is looked up relative to its own container, so a product that is
missing an element can never borrow one from its neighbour.
"""

from __future__ import annotations

import logging
from typing import List

from bs4 import BeautifulSoup, Tag

from ranker.scraper.errors import StructureError
from ranker.scraper.models import RawListing

logger = logging.getLogger(__name__)

CONTAINER_SELECTOR = 'div[class*="package "]'
TITLE_SELECTOR = ":scope > div > h3"
DESCRIPTION_SELECTOR = 'div[class*="package-name"]'
PRICE_SELECTOR = 'div[class*="package-price"]'


def _find_containers(document: BeautifulSoup | Tag) -> List[Tag]:
    """Return all product containers in document order.

    Raises:
        StructureError: If there are none.
    """
    containers = document.select(CONTAINER_SELECTOR)
    if not containers:
        raise StructureError("no product containers found")
    return containers


def _extract_one(container: Tag, position: int) -> RawListing:
    """Build a :class:`RawListing` from a single product container.

    *position* is the 1-based container index, used in error messages only.
    """
    title_node = container.select_one(TITLE_SELECTOR)
    if title_node is None:
        raise StructureError(f"product {position} has no title heading")

    description_node = container.select_one(DESCRIPTION_SELECTOR)
    if description_node is None:
        logger.warning("Product %d (%r) has no description", position, title_node.get_text())
        description = ""
    else:
        description = description_node.get_text()

    price_node = container.select_one(PRICE_SELECTOR)
    if price_node is None:
        raise StructureError(f"product {position} has no price block")

    amount_node = price_node.find("span")
    if amount_node is None:
        raise StructureError(f"product {position} has no price value")

    # A paragraph inside the price block means an annual plan with a discount.
    discount_node = price_node.find("p")

    return RawListing(
        title=title_node.get_text(),
        description=description,
        price_text=amount_node.get_text(),
        discount_text=discount_node.get_text() if discount_node is not None else None,
    )


def extract_listings(document: BeautifulSoup | Tag) -> List[RawListing]:
    """Extract one :class:`RawListing` per product container in *document*.

    Raises:
        StructureError: If the page has no product containers, or a container
            lacks its title or price.
    """
    containers = _find_containers(document)
    listings = [
        _extract_one(container, position)
        for position, container in enumerate(containers, start=1)
    ]
    logger.info("Extracted %d listings", len(listings))
    return listings
