"""Emphasis markup shared by the normalizer, the narrator and the UI.

Bot messages carry a tiny HTML subset: <strong> around highlighted amounts.
"""

import re

_TAG = re.compile(r"<[^>]+>")
STRONG_PATTERN = re.compile(r"<strong>(.*?)</strong>", re.IGNORECASE | re.DOTALL)


def emphasize(text: str) -> str:
    """Wrap text in emphasis markup."""
    return f"<strong>{text}</strong>"


def strip_markup(text: str) -> str:
    """Remove every HTML-like tag, keeping the enclosed text."""
    return _TAG.sub("", text)


def emphasized_spans(text: str) -> list[str]:
    """Return the contents of every emphasis span, in order."""
    return STRONG_PATTERN.findall(text)
