"""HTML parsing: turns raw page bytes into a searchable document tree.

Two modes are available and the caller picks one explicitly:

* lenient (default): BeautifulSoup with the stdlib ``html.parser``; broken
  markup is repaired silently, as browsers do.
* strict: the bytes are first run through lxml's HTML parser and the first
  markup error it logs aborts the pipeline.  Elements libxml2 does not know
  (``<section>``, ``<nav>`` and other HTML5 tags on older builds) are not
  errors.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup
from lxml import etree

from ranker.config import settings
from ranker.scraper.errors import StructureError

logger = logging.getLogger(__name__)

_IGNORED_ERROR_TYPES = {etree.ErrorTypes.HTML_UNKNOWN_TAG}


def _check_well_formed(html: bytes | str, encoding: str | None = None) -> None:
    """Raise :class:`StructureError` on the first markup error lxml reports."""
    parser = etree.HTMLParser(recover=True, encoding=encoding)
    try:
        etree.fromstring(html, parser)
    except (etree.XMLSyntaxError, etree.ParserError) as exc:
        raise StructureError(f"malformed markup: {exc}") from exc

    for entry in parser.error_log:
        if entry.type in _IGNORED_ERROR_TYPES:
            continue
        if entry.level >= etree.ErrorLevels.ERROR:
            raise StructureError(
                f"malformed markup: {entry.message.strip()}, "
                f"line {entry.line}, column {entry.column}"
            )


def parse_document(
    html: bytes | str,
    *,
    strict: bool | None = None,
    encoding: str | None = None,
) -> BeautifulSoup:
    """Parse *html* into a :class:`~bs4.BeautifulSoup` tree.

    Args:
        html: Raw page content.
        strict: ``True`` to fail on malformed markup, ``False`` to ignore
            recoverable errors.  ``None`` uses ``settings.strict_html``.
        encoding: Charset for decoding bytes, usually from the HTTP
            ``Content-Type`` header.  Without it the document's own charset
            declaration is used when present.  Ignored for ``str`` input.

    Raises:
        StructureError: In strict mode, when the markup is not well formed.
    """
    if strict is None:
        strict = settings.strict_html
    if isinstance(html, str):
        encoding = None

    if strict:
        _check_well_formed(html, encoding)

    soup = BeautifulSoup(html, "html.parser", from_encoding=encoding)
    logger.debug(
        "Parsed document (%s mode, encoding=%s)",
        "strict" if strict else "lenient",
        soup.original_encoding,
    )
    return soup
