"""
Normalization of JSON/unicode-escaped text fragments.

Facebook pages embed their legacy manifest as a JSON string, so markup shows
up as ``\\u003CRepresentation ...`` with escaped slashes and ampersands. The
cleaner turns that back into plain markup that the legacy regexes can read.
"""

from __future__ import annotations

from collections.abc import Iterable

# Applied in this order. "u00253D" must come before "u0025".
ESCAPE_TABLE: tuple[tuple[str, str], ...] = (
    ("u003C", "<"),
    ("u003E", ">"),
    ("u002F", "/"),
    ("u0026", "&"),
    ("u00253D", "="),
    ("u0025", "%"),
    ("\\", ""),
    ("amp;", "&"),
)


class TextCleaner:
    """Un-escape a raw text fragment and strip noise substrings.

    Example:
        >>> TextCleaner("u003Cdivu003E").clean().value
        '<div>'
    """

    def __init__(self, raw_text: str = ""):
        self.value = raw_text

    def clean(self, trash_words: Iterable[str] = ()) -> TextCleaner:
        """Apply the escape table and remove trash words until stable.

        Every substitution shortens the text, so repeating the pass until
        nothing changes always terminates, and cleaning an already-cleaned
        value is a no-op.

        Args:
            trash_words: Substrings to delete after un-escaping. Empty strings
                are ignored.

        Returns:
            self, for chaining.
        """
        trash = [word for word in trash_words if word]
        previous = None
        while previous != self.value:
            previous = self.value
            self.value = _clean_once(self.value, trash)
        return self


def _clean_once(text: str, trash: list[str]) -> str:
    for escaped, plain in ESCAPE_TABLE:
        text = text.replace(escaped, plain)
    for word in trash:
        text = text.replace(word, "")
    return text


def clean_text(raw_text: str, trash_words: Iterable[str] = ()) -> str:
    """Shortcut for ``TextCleaner(raw_text).clean(trash_words).value``."""
    return TextCleaner(raw_text).clean(trash_words).value
