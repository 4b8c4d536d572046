"""Base parsing utilities shared across all page parsers.

The Easy Smart web UI renders no data as markup; every page ships its values
as JavaScript assignments (``var info_ds = {macStr:["..."], ...}``) that the
browser turns into a table.  Parsers search the raw response body for them.
Some firmware escapes the quotes when it echoes values into the page, so a
pattern that does not match the raw body is retried once against the
entity-decoded document text.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup


def parse_html(html: str, parser: str = "lxml") -> BeautifulSoup:
    """Parse an HTML string and return a BeautifulSoup document.

    Args:
        html: Raw HTML content from the switch response.
        parser: Parser library to use (default: ``lxml``).

    Returns:
        Parsed BeautifulSoup document.
    """
    return BeautifulSoup(html, parser)


def search_page(pattern: re.Pattern[str], html: str) -> re.Match[str] | None:
    """Search *html* for *pattern*, falling back to the decoded page text.

    Args:
        pattern: Compiled pattern to look for.
        html: Raw response body.

    Returns:
        The first match in the raw body, else the first match in the text
        BeautifulSoup extracts from it (entities such as ``&quot;`` decoded),
        else ``None``.
    """
    m = pattern.search(html)
    if m or not html:
        return m
    text = parse_html(html).get_text()
    return pattern.search(text) if text != html else None


def find_quoted_array_value(html: str, key: str) -> str | None:
    """Return the single quoted string in a ``key:["value"]`` assignment.

    The switch sometimes breaks the line inside the brackets, so whitespace
    (including one newline) is allowed on either side of the string.

    Args:
        html: Response body to search.
        key: Object key, e.g. ``"macStr"``.

    Returns:
        The string between the quotes, or ``None`` if absent or empty.
    """
    pattern = re.compile(rf"\b{re.escape(key)}:\[\s*\"([^\"]+)\"\s*\]")
    m = search_page(pattern, html)
    return m.group(1) if m else None
