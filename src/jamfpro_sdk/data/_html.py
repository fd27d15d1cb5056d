# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Extract a readable message from the HTML error pages Jamf Pro returns instead of XML/JSON."""

from __future__ import annotations

import html
import re
from typing import Optional

_TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title\s*>", re.IGNORECASE | re.DOTALL)
_H1_RE = re.compile(r"<h1[^>]*>(.*?)</h1\s*>", re.IGNORECASE | re.DOTALL)
_P_RE = re.compile(r"<p[^>]*>(.*?)</p\s*>", re.IGNORECASE | re.DOTALL)
_SCRIPT_STYLE_RE = re.compile(r"<(script|style)[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")

SNIPPET_LIMIT = 200


def _clean(fragment: str) -> str:
    text = _TAG_RE.sub(" ", fragment)
    text = html.unescape(text)
    return _WS_RE.sub(" ", text).strip()


def looks_like_html(body: str) -> bool:
    """True if ``body`` appears to be an HTML document."""
    head = body.lstrip()[:512].lower()
    return "<html" in head or head.startswith("<!doctype html")


def extract_error_message(html_body: Optional[str], status_code: Optional[int] = None) -> str:
    """
    Return the most useful human-readable fragment of an HTML error page.

    Looks for the first non-empty ``<title>``, then ``<h1>``, then joins all
    ``<p>`` paragraphs with ``" | "``. Without any of these markers a
    tag-stripped snippet of the body is returned. Never raises.

    :param html_body: Raw HTML text.
    :type html_body: str or None
    :param status_code: HTTP status of the response, used when the body is empty.
    :type status_code: int or None
    :rtype: str
    """
    body = _SCRIPT_STYLE_RE.sub(" ", html_body or "")

    for pattern in (_TITLE_RE, _H1_RE):
        for match in pattern.finditer(body):
            text = _clean(match.group(1))
            if text:
                return text

    paragraphs = [t for t in (_clean(m.group(1)) for m in _P_RE.finditer(body)) if t]
    if paragraphs:
        return " | ".join(paragraphs)

    snippet = _clean(body)
    if snippet:
        if len(snippet) > SNIPPET_LIMIT:
            return snippet[:SNIPPET_LIMIT].rstrip() + "..."
        return snippet
    if status_code is not None:
        return f"HTTP {status_code} error"
    return "Unknown error"


__all__ = ["extract_error_message", "looks_like_html"]
