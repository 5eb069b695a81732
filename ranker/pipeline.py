"""End-to-end pipeline for a single URL.

``scrape_listings`` runs every stage in order:

    fetch → parse → extract → rank

The first failure aborts the run; no partial result is ever returned.
"""

from __future__ import annotations

import logging
from typing import List

from ranker.ranking import rank
from ranker.scraper.extractor import extract_listings
from ranker.scraper.fetcher import fetch_url
from ranker.scraper.models import Listing
from ranker.scraper.parser import parse_document

logger = logging.getLogger(__name__)


def scrape_listings(url: str, *, strict: bool | None = None) -> List[Listing]:
    """Fetch *url* and return its product listings, most expensive per year first.

    Args:
        url: Page holding the product containers.
        strict: Passed to :func:`~ranker.scraper.parser.parse_document`;
            ``None`` uses ``settings.strict_html``.

    Raises:
        FetchError: If the page cannot be retrieved.
        StructureError: If the page lacks the expected product markup.
        ParseError: If a price or discount is not numeric.
    """
    raw = fetch_url(url)
    document = parse_document(raw.html, strict=strict, encoding=raw.encoding)
    raw_listings = extract_listings(document)
    listings = rank(raw_listings)
    logger.info("Ranked %d listings from %s", len(listings), url)
    return listings
