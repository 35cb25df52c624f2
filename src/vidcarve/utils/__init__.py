"""
Utility functions for vidcarve.
"""

from vidcarve.utils.logging import configure_logging, log_timed

__all__ = [
    "configure_logging",
    "log_timed",
]
