"""
Locate the embedded prefetch JSON inside a raw page.

Two strategies, tried in order:

1. ``<script type="application/json">`` blocks parsed whole.
2. Every ``"extensions": {`` occurrence in the raw text, bounded with an
   explicit brace-depth state machine (BraceScanner) and parsed on its own.

A regex alone cannot bound the extensions object because string values may
contain braces; the scanner tracks string and escape state to get it right.
"""

from __future__ import annotations

import json
import re
from typing import Any

from vidcarve.events import FAILED, SKIPPED, SUCCESS, Observer, emit
from vidcarve.exceptions import ExtractionError, ParseError
from vidcarve.parsing.paths import dig

REPRESENTATIONS_KEY = "all_video_dash_prefetch_representations"

_SCRIPT_JSON_RE = re.compile(
    r"<script[^>]*type=[\"']application/json[\"'][^>]*>([^<]+)</script>"
)
_EXTENSIONS_RE = re.compile(r'"extensions":\s*\{')


class BraceScanner:
    """Character-by-character scanner for a balanced JSON object.

    State:
        depth: number of currently open braces outside strings
        in_string: inside a double-quoted string
        escaped: previous character was a backslash inside a string

    Example:
        >>> BraceScanner('x {"a":"}"} y').scan(2)
        '{"a":"}"}'
    """

    def __init__(self, text: str):
        self.text = text
        self.depth = 0
        self.in_string = False
        self.escaped = False

    def reset(self) -> None:
        self.depth = 0
        self.in_string = False
        self.escaped = False

    def feed(self, char: str) -> bool:
        """Advance the state machine by one character.

        Returns:
            True when this character closes the outermost object.
        """
        if self.escaped:
            self.escaped = False
            return False

        if self.in_string:
            if char == "\\":
                self.escaped = True
            elif char == '"':
                self.in_string = False
            return False

        if char == '"':
            self.in_string = True
        elif char == "{":
            self.depth += 1
        elif char == "}":
            self.depth -= 1
            return self.depth == 0
        return False

    def scan(self, start: int) -> str | None:
        """Return text[start:end] for the object opening at ``start``.

        Args:
            start: Index of the opening brace.

        Returns:
            The balanced object text, or None if it never closes.
        """
        self.reset()
        for i in range(start, len(self.text)):
            if self.feed(self.text[i]):
                return self.text[start : i + 1]
        return None


def find_balanced_object(text: str, start: int) -> str | None:
    """Bound the JSON object whose opening brace is at ``start``."""
    return BraceScanner(text).scan(start)


def parse_fragment(fragment: str, offset: int | None = None) -> Any:
    """Parse a JSON fragment, raising ParseError instead of JSONDecodeError."""
    try:
        return json.loads(fragment)
    except (json.JSONDecodeError, RecursionError) as e:
        raise ParseError(f"Malformed JSON fragment: {e}", offset=offset) from e


def has_representations(extensions: Any) -> bool:
    """True if ``extensions`` carries a non-empty representations list."""
    reps = dig(extensions, REPRESENTATIONS_KEY)
    return isinstance(reps, list) and len(reps) > 0


def _from_script_blocks(html: str, observer: Observer | None) -> dict | None:
    for match in _SCRIPT_JSON_RE.finditer(html):
        try:
            parsed = parse_fragment(match.group(1), offset=match.start(1))
        except ParseError as e:
            emit(observer, "locator", SKIPPED, e.message, offset=e.offset)
            continue

        if has_representations(dig(parsed, "extensions")):
            emit(observer, "locator", SUCCESS, "Found prefetch JSON in script tag",
                 offset=match.start(1))
            return parsed

        nested = dig(parsed, "data", "extensions")
        if has_representations(nested):
            emit(observer, "locator", SUCCESS,
                 "Found prefetch JSON under data.extensions in script tag",
                 offset=match.start(1))
            return {**parsed, "extensions": nested}
    return None


def _from_extensions_objects(html: str, observer: Observer | None) -> dict | None:
    scanner = BraceScanner(html)
    for match in _EXTENSIONS_RE.finditer(html):
        start = match.end() - 1
        fragment = scanner.scan(start)
        if fragment is None:
            emit(observer, "locator", SKIPPED, "Unbalanced extensions object",
                 offset=start)
            continue
        try:
            extensions = parse_fragment(fragment, offset=start)
        except ParseError as e:
            emit(observer, "locator", SKIPPED,
                 f"Failed to parse extensions data: {e.message}", offset=start)
            continue
        if has_representations(extensions):
            emit(observer, "locator", SUCCESS,
                 "Found prefetch JSON in extensions object", offset=start)
            return {"extensions": extensions}
    return None


def locate_embedded_json(html: str, observer: Observer | None = None) -> dict:
    """Find and parse the embedded prefetch JSON in a page.

    Args:
        html: Raw page text.
        observer: Optional diagnostic observer.

    Returns:
        A dict whose ``extensions`` holds a non-empty
        ``all_video_dash_prefetch_representations`` list.

    Raises:
        ExtractionError: If no candidate qualifies.
    """
    for strategy in (_from_script_blocks, _from_extensions_objects):
        found = strategy(html, observer)
        if found is not None:
            return found

    emit(observer, "locator", FAILED, "Could not extract JSON data from HTML")
    raise ExtractionError("Could not extract JSON data from HTML", strategy="locator")
