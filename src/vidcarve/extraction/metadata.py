"""
Page metadata helpers.
"""

import re

_TITLE_RE = re.compile(r'"story":\s*{"message":\s*{"text":"([^"]+)",')


def extract_title(html: str) -> str:
    """Return the story message text used as the post title, or ""."""
    match = _TITLE_RE.search(html)
    return match.group(1) if match else ""
