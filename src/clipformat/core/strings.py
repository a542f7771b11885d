"""Small string helpers shared by the core."""

from __future__ import annotations

from urllib.parse import quote

# En dash, em dash, and the Unicode minus sign all read as subtraction.
_MINUS_VARIANTS = str.maketrans({"–": "-", "—": "-", "−": "-"})


def trim(text: str | None) -> str:
    if text is None:
        return ""
    return text.strip()


def normalize_minus(text: str) -> str:
    """Return text with dash look-alikes replaced by an ASCII hyphen."""

    return text.translate(_MINUS_VARIANTS)


def split_outer_whitespace(text: str) -> tuple[str, str, str]:
    """Return (leading whitespace, body, trailing whitespace)."""

    body = text.strip()
    if not body:
        return text, "", ""
    start = text.index(body)
    return text[:start], body, text[start + len(body):]


def url_encode(text: str) -> str:
    return quote(text, safe="")
