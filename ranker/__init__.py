"""Tariff ranker: scrape a package page and rank its plans by annual cost."""

from ranker.pipeline import scrape_listings

__all__ = ["scrape_listings"]
