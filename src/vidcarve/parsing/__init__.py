"""
Text cleaning, safe JSON navigation and embedded-JSON location.
"""

from vidcarve.parsing.cleaner import TextCleaner, clean_text
from vidcarve.parsing.json_locator import (
    BraceScanner,
    find_balanced_object,
    locate_embedded_json,
)
from vidcarve.parsing.paths import dig, dig_list, dig_str

__all__ = [
    "TextCleaner",
    "clean_text",
    "BraceScanner",
    "find_balanced_object",
    "locate_embedded_json",
    "dig",
    "dig_list",
    "dig_str",
]
