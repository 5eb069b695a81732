"""Scraper package: fetch, parse and extract product listings."""

from ranker.scraper.errors import FetchError, ParseError, ScrapeError, StructureError
from ranker.scraper.extractor import extract_listings
from ranker.scraper.fetcher import fetch_url
from ranker.scraper.models import Listing, RankedListing, RawListing, RawPage
from ranker.scraper.parser import parse_document
from ranker.scraper.pricing import parse_price

__all__ = [
    "fetch_url",
    "parse_document",
    "extract_listings",
    "parse_price",
    "RawPage",
    "RawListing",
    "RankedListing",
    "Listing",
    "ScrapeError",
    "FetchError",
    "StructureError",
    "ParseError",
]
