"""Pytest configuration and shared fixtures for vidcarve tests."""

import json

import pytest

from vidcarve.config import clear_config_cache


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the real ~/.vidcarve and environment overrides."""
    monkeypatch.setenv("VIDCARVE_ROOT", str(tmp_path / "root"))
    monkeypatch.delenv("VIDCARVE_PROXY_URL", raising=False)
    monkeypatch.delenv("VIDCARVE_TIMEOUT", raising=False)
    monkeypatch.chdir(tmp_path)
    clear_config_cache()
    yield
    clear_config_cache()


def _rep(mime_type, bandwidth, base_url):
    return {"mime_type": mime_type, "bandwidth": bandwidth, "base_url": base_url}


def _script_page(payload: dict) -> str:
    """Wrap a JSON payload in a page the way the site embeds it."""
    return (
        "<html><head><title>Video</title></head><body>"
        '<script type="application/json" data-sjs>'
        f"{json.dumps(payload)}"
        "</script></body></html>"
    )


@pytest.fixture
def two_quality_payload():
    return {
        "extensions": {
            "all_video_dash_prefetch_representations": [
                {
                    "representations": [
                        _rep("video/mp4", 100, "https://video-a.fbcdn.net/x"),
                        _rep("video/mp4", 500, "https://video-b.fbcdn.net/y"),
                    ]
                }
            ]
        }
    }


@pytest.fixture
def multi_video_payload():
    return {
        "data": {
            "video": {
                "story": {
                    "attachments": [
                        {"media": {"preferred_thumbnail": {"image": {"uri": "https://scontent.fbcdn.net/t0.jpg"}}}},
                        {"media": {"thumbnail_image": {"uri": "https://scontent.fbcdn.net/t1.jpg"}}},
                    ]
                }
            }
        },
        "extensions": {
            "all_video_dash_prefetch_representations": [
                {
                    "representations": [
                        _rep("video/mp4", 900, "https://video-fra3-1.xx.fbcdn.net/v/hd0.mp4"),
                        _rep("audio/mp4", 64, "https://video-fra3-1.xx.fbcdn.net/v/a0.mp4"),
                        _rep("video/mp4", 300, "https://video-fra3-1.xx.fbcdn.net/v/sd0.mp4"),
                    ]
                },
                {
                    "representations": [
                        _rep("audio/mp4", 64, "https://video-fra3-1.xx.fbcdn.net/v/a1.mp4"),
                    ]
                },
                {
                    "video_thumbnail": {"uri": "https://scontent.fbcdn.net/t2.jpg"},
                    "representations": [
                        _rep("video/mp4", 700, "https://video-fra3-1.xx.fbcdn.net/v/only2.mp4"),
                    ],
                },
            ]
        },
    }


# Raw page text as the site ships it: the manifest is a JSON string with
# <-escaped markup and \/-escaped slashes.
LEGACY_PAGE = (
    r'<html><script>{"dash_prefetch_experimental":["111v","222a"],'
    r'"dash_manifest":"\u003CMPD>\u003CPeriod>'
    r'\u003CAdaptationSet>'
    r'\u003CRepresentation id=\"111v\" FBQualityClass=\"sd\" FBQualityLabel=\"360p\" mimeType=\"video\/mp4\">'
    r'\u003CBaseURL>https:\/\/video-x1.fbcdn.net\/v\/sd.mp4?tag=1\u003C\/BaseURL>'
    r'\u003C\/Representation>'
    r'\u003CRepresentation id=\"333v\" FBQualityClass=\"hd\" FBQualityLabel=\"720p\" mimeType=\"video\/mp4\">'
    r'\u003CBaseURL>https:\/\/video-x2.fbcdn.net\/v\/hd.mp4?tag=2\u003C\/BaseURL>'
    r'\u003C\/Representation>'
    r'\u003C\/AdaptationSet>\u003CAdaptationSet>'
    r'\u003CRepresentation id=\"222a\" mimeType=\"audio\/mp4\">'
    r'\u003CBaseURL>https:\/\/video-x3.fbcdn.net\/v\/audio.mp4\u003C\/BaseURL>'
    r'\u003C\/Representation>'
    r'\u003C\/AdaptationSet>\u003C\/Period>\u003C\/MPD>",'
    r'"preferred_thumbnail":{"image":{"uri":"https:\/\/scontent.fbcdn.net\/v\/thumb.jpg"}}}'
    r"</script></html>"
)


@pytest.fixture
def legacy_page():
    return LEGACY_PAGE


@pytest.fixture
def script_page():
    """Factory wrapping a payload dict in a <script type="application/json"> page."""
    return _script_page


@pytest.fixture
def make_rep():
    """Factory for raw representation dicts."""
    return _rep
