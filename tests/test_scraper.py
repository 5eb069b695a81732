"""Tests for the fetcher and HTML parser collaborators.

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer so no real network calls
  are made during ``fetch_url`` tests.
- Strict-mode tests run the real lxml parser; only the settings-default tests
  patch ``_check_well_formed``.
"""

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest
import respx
from bs4 import BeautifulSoup

from ranker.scraper.errors import FetchError, StructureError
from ranker.scraper.fetcher import fetch_url
from ranker.scraper.models import RawPage
from ranker.scraper.parser import parse_document
from tests.pages import PACKAGES_HTML


# ---------------------------------------------------------------------------
# fetch_url tests
# ---------------------------------------------------------------------------

class TestFetchUrl:
    def test_successful_fetch_returns_raw_page(self) -> None:
        with respx.mock:
            respx.get("https://example.com/packages").mock(
                return_value=httpx.Response(200, text=PACKAGES_HTML)
            )
            raw = fetch_url("https://example.com/packages")

        assert isinstance(raw, RawPage)
        assert raw.url == "https://example.com/packages"
        assert raw.status_code == 200
        assert isinstance(raw.html, bytes)
        assert b'class="package featured center"' in raw.html

    def test_sends_configured_user_agent(self, monkeypatch) -> None:
        monkeypatch.setattr("ranker.scraper.fetcher.settings.user_agent", "TestAgent/2.0")
        with respx.mock:
            route = respx.get("https://example.com/").mock(
                return_value=httpx.Response(200, text="<html></html>")
            )
            fetch_url("https://example.com/")

        assert route.calls.last.request.headers["User-Agent"] == "TestAgent/2.0"

    @pytest.mark.parametrize("status", [404, 410, 500, 503])
    def test_error_status_raises_fetch_error(self, status: int) -> None:
        with respx.mock:
            respx.get("https://example.com/missing").mock(
                return_value=httpx.Response(status, text="Nope")
            )
            with pytest.raises(FetchError) as excinfo:
                fetch_url("https://example.com/missing")

        assert excinfo.value.status_code == status
        assert excinfo.value.url == "https://example.com/missing"

    def test_unfollowed_redirect_is_accepted(self, monkeypatch) -> None:
        """Statuses up to 308 are not failures, even when not followed."""
        monkeypatch.setattr("ranker.scraper.fetcher.settings.follow_redirects", False)
        with respx.mock:
            respx.get("https://example.com/old").mock(
                return_value=httpx.Response(
                    308, headers={"Location": "https://example.com/new"}, text=""
                )
            )
            raw = fetch_url("https://example.com/old")

        assert raw.status_code == 308

    def test_follows_redirects_when_enabled(self, monkeypatch) -> None:
        monkeypatch.setattr("ranker.scraper.fetcher.settings.follow_redirects", True)
        with respx.mock:
            respx.get("https://example.com/old").mock(
                return_value=httpx.Response(301, headers={"Location": "https://example.com/new"})
            )
            respx.get("https://example.com/new").mock(
                return_value=httpx.Response(200, text=PACKAGES_HTML)
            )
            raw = fetch_url("https://example.com/old")

        assert raw.status_code == 200
        assert b"package-price" in raw.html

    def test_transport_failure_raises_fetch_error(self) -> None:
        with respx.mock:
            respx.get("https://example.com/").mock(
                side_effect=httpx.ConnectError("connection refused")
            )
            with pytest.raises(FetchError) as excinfo:
                fetch_url("https://example.com/")

        assert isinstance(excinfo.value.__cause__, httpx.ConnectError)
        assert excinfo.value.status_code is None

    def test_timeout_raises_fetch_error(self) -> None:
        with respx.mock:
            respx.get("https://example.com/slow").mock(
                side_effect=httpx.ReadTimeout("timed out")
            )
            with pytest.raises(FetchError):
                fetch_url("https://example.com/slow", timeout=0.1)

    def test_header_charset_is_kept(self) -> None:
        with respx.mock:
            respx.get("https://example.com/latin").mock(
                return_value=httpx.Response(
                    200,
                    content="<h3>Café</h3>".encode("iso-8859-1"),
                    headers={"Content-Type": "text/html; charset=iso-8859-1"},
                )
            )
            raw = fetch_url("https://example.com/latin")

        assert raw.encoding == "iso-8859-1"

    def test_missing_header_charset_is_none(self) -> None:
        with respx.mock:
            respx.get("https://example.com/plain").mock(
                return_value=httpx.Response(
                    200, content=b"<h3>Plan</h3>", headers={"Content-Type": "text/html"}
                )
            )
            raw = fetch_url("https://example.com/plain")

        assert raw.encoding is None

    def test_url_without_scheme_raises_fetch_error(self) -> None:
        with pytest.raises(FetchError):
            fetch_url("example.com/packages")


# ---------------------------------------------------------------------------
# parse_document tests
# ---------------------------------------------------------------------------

class TestParseDocument:
    def test_lenient_returns_soup(self) -> None:
        soup = parse_document(PACKAGES_HTML.encode("utf-8"), strict=False)
        assert isinstance(soup, BeautifulSoup)
        assert soup.title.get_text() == "Packages"

    def test_bytes_are_decoded_with_declared_charset(self) -> None:
        soup = parse_document(PACKAGES_HTML.encode("utf-8"), strict=False)
        assert soup.select_one("span.price-big").get_text() == "£5.99"

    def test_lenient_tolerates_broken_markup(self) -> None:
        html = "<html><body><div class='package x'><div><h3>Open</h3></span></div>"
        soup = parse_document(html, strict=False)
        assert soup.find("h3").get_text() == "Open"

    def test_strict_accepts_well_formed_markup(self) -> None:
        html = (
            "<html><body>"
            "<div class=\"package featured\"><div><h3>Plan</h3></div></div>"
            "</body></html>"
        )
        soup = parse_document(html, strict=True)
        assert soup.find("h3").get_text() == "Plan"

    def test_strict_raises_on_unexpected_end_tag(self) -> None:
        with pytest.raises(StructureError, match="malformed markup"):
            parse_document("<html><body><div></span></div></body></html>", strict=True)

    def test_strict_accepts_html5_elements(self) -> None:
        """Tags older libxml2 builds do not know are not markup errors."""
        html = PACKAGES_HTML.replace(
            "<body>",
            "<body><header><nav><a href=\"/\">Home</a></nav></header><section>",
        ).replace("</body>", "</section></body>")
        soup = parse_document(html.encode("utf-8"), strict=True)

        assert soup.find("section") is not None
        assert len(soup.select('div[class*="package "]')) == 4

    def test_strict_defaults_from_settings(self, monkeypatch) -> None:
        monkeypatch.setattr("ranker.scraper.parser.settings.strict_html", True)
        with patch("ranker.scraper.parser._check_well_formed") as mock_check:
            parse_document("<html></html>")

        mock_check.assert_called_once_with("<html></html>", None)

    def test_header_charset_decodes_bytes(self) -> None:
        html = (
            "<html><body><div class=\"package x\"><div><h3>Café plan</h3></div>"
            "<div class=\"package-price\"><span>£5.99</span></div></div></body></html>"
        ).encode("iso-8859-1")
        soup = parse_document(html, strict=False, encoding="iso-8859-1")

        assert soup.find("h3").get_text() == "Café plan"
        assert soup.find("span").get_text() == "£5.99"

    def test_header_charset_passed_to_strict_check(self) -> None:
        html = "<html><body><h3>Café</h3></body></html>".encode("iso-8859-1")
        with patch("ranker.scraper.parser._check_well_formed") as mock_check:
            parse_document(html, strict=True, encoding="iso-8859-1")

        mock_check.assert_called_once_with(html, "iso-8859-1")

    def test_encoding_ignored_for_text_input(self) -> None:
        soup = parse_document("<h3>Café</h3>", strict=False, encoding="iso-8859-1")
        assert soup.find("h3").get_text() == "Café"

    def test_lenient_default_skips_lxml(self, monkeypatch) -> None:
        monkeypatch.setattr("ranker.scraper.parser.settings.strict_html", False)
        with patch("ranker.scraper.parser._check_well_formed") as mock_check:
            parse_document("<html></html>")

        mock_check.assert_not_called()
