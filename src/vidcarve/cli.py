#!/usr/bin/env python3
"""
vidcarve CLI - list the video streams embedded in a saved or fetched page.

Usage:
    vidcarve page.html
    vidcarve page.html --json
    vidcarve "https://www.facebook.com/watch/?v=VIDEO_ID" --proxy
    vidcarve page.html --video video_1 --quality video_1_hd
    cat page.html | vidcarve -
"""

import argparse
import json
import sys
from pathlib import Path

from vidcarve.config import get_config
from vidcarve.exceptions import VidcarveError
from vidcarve.extraction import extract_title, extract_videos
from vidcarve.fetch import decode_payload, fetch_bytes
from vidcarve.selection import MediaSelection
from vidcarve.utils.logging import configure_logging


def _read_source(source: str, *, via_proxy: bool) -> str:
    """Read page text from stdin, a URL, or a file."""
    if source == "-":
        return sys.stdin.read()
    if source.startswith(("http://", "https://")):
        config = get_config()
        data = fetch_bytes(
            source,
            via_proxy=via_proxy,
            proxy_url=config.proxy_url,
            timeout=config.request_timeout,
        )
        return decode_payload(data)
    return Path(source).read_text(encoding="utf-8", errors="replace")


def _print_videos(selection: MediaSelection, title: str) -> None:
    if title:
        print(f"Title: {title}")
    for index, video in enumerate(selection.videos):
        marker = "*" if video.key == selection.selected_video_key else " "
        print(f"{marker} Video {index + 1} [{video.key}]")
        print(f"    Thumbnail: {video.thumbnail or '-'}")
        print(f"    Audio: {video.audio_url or '-'}")
        for res in video.resolutions:
            print(f"    {res.quality_label} [{res.key}]: {res.url}")


def _cmd_extract(args) -> int:
    try:
        html = _read_source(args.source, via_proxy=args.proxy)
    except OSError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except VidcarveError as e:
        print(f"ERROR: {e.message}", file=sys.stderr)
        return 1

    try:
        videos = extract_videos(html, args.trash or None, config=get_config())
    except VidcarveError as e:
        if args.json:
            print(json.dumps({"error": e.to_dict()}, indent=2))
        else:
            print(f"ERROR: {e.message}", file=sys.stderr)
        return 1

    try:
        selection = MediaSelection(videos, args.video, args.quality)
    except KeyError as e:
        print(f"ERROR: unknown key {e}", file=sys.stderr)
        return 2

    if selection.selected_resolution is not None:
        print(selection.selected_resolution.url)
        return 0

    if args.json:
        payload = {
            "title": extract_title(html),
            "videos": [v.model_dump(by_alias=True) for v in videos],
        }
        print(json.dumps(payload, indent=2))
        return 0

    _print_videos(selection, extract_title(html))
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="List downloadable video streams embedded in a video post page",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s page.html
    %(prog)s page.html --json
    %(prog)s "https://www.facebook.com/watch/?v=VIDEO_ID" --proxy
    %(prog)s page.html --video video_1 --quality video_1_hd
        """,
    )
    parser.add_argument("source", help="Page file, '-' for stdin, or http(s) URL")
    parser.add_argument("--json", action="store_true", help="Print JSON output")
    parser.add_argument("--video", default=None, help="Key of the video to select")
    parser.add_argument(
        "--quality", default=None,
        help="Key of the quality to select; prints only its URL",
    )
    parser.add_argument(
        "--proxy", action="store_true",
        help="Fetch URLs through the configured proxy_url",
    )
    parser.add_argument(
        "--trash", action="append", default=[], metavar="WORD",
        help="Substring to strip during legacy cleaning (repeatable)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    return _cmd_extract(args)


if __name__ == "__main__":
    sys.exit(main())
