"""HTML utility functions for Folio.

Functions:
    escape_html: Escape special HTML characters in a string.
    escape_code: Escape only what a code block needs to stay well-formed.
    strip_tags: Remove markup from an inline HTML fragment.
    heading_id: Derive an anchor ID from heading text.
"""

from __future__ import annotations

import re

_TAG_RE = re.compile(r"<[^>]+>")


def escape_html(text: str) -> str:
    """Escape special HTML characters in a string.

    Converts the following characters to their HTML entity equivalents:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot;

    Args:
        text: The string to escape.

    Returns:
        The escaped string, safe for inclusion in HTML attributes.

    Examples:
        >>> escape_html('<script>alert("XSS")</script>')
        '&lt;script&gt;alert(&quot;XSS&quot;)&lt;/script&gt;'
    """
    return escape_code(text).replace('"', "&quot;")


def escape_code(text: str) -> str:
    """Escape ``&``, ``<`` and ``>`` and leave every other character alone.

    Quotes, whitespace and line endings in the code survive unchanged, so
    ``html.unescape(escape_code(code)) == code``.

    Examples:
        >>> escape_code('if a < b and c == "d":')
        'if a &lt; b and c == "d":'
    """
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def strip_tags(html: str) -> str:
    """Remove tags from an inline HTML fragment, keeping the text."""
    return _TAG_RE.sub("", html)


def heading_id(text: str) -> str:
    """Generate a URL-friendly ID from heading text.

    Args:
        text: The heading text, possibly containing inline markup.

    Returns:
        URL-friendly slug suitable for anchor links. Headings with no
        usable characters get ``section``.

    Examples:
        >>> heading_id("Cohesion & <em>Coupling</em>")
        'cohesion-coupling'
    """
    slug = strip_tags(text).lower().strip()
    slug = re.sub(r"&\w+;", "", slug)
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[-\s]+", "-", slug)
    return slug.strip("-") or "section"
