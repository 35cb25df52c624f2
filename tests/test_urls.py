"""Tests for CDN URL rewriting."""

from vidcarve.urls import UrlRewriter, rewrite_url


class TestRewriteUrl:
    """Tests for rewrite_url()."""

    def test_rewrites_host_span(self):
        assert rewrite_url("https://video-a.fbcdn.net/x") == "https://video.xx.fbcdn.net/x"

    def test_rewrites_regional_host(self):
        url = "https://video-fra3-1.xx.fbcdn.net/v/t42.mp4?_nc_cat=1&oh=abc"
        assert rewrite_url(url) == "https://video.xx.fbcdn.net/v/t42.mp4?_nc_cat=1&oh=abc"

    def test_only_first_span_rewritten(self):
        url = "https://video-a.fbcdn.net/v/video-b.fbcdn.net"
        assert rewrite_url(url) == "https://video.xx.fbcdn.net/v/video-b.fbcdn.net"

    def test_non_matching_url_unchanged(self):
        url = "https://scontent.fbcdn.net/v/t.jpg"
        assert rewrite_url(url) == url
        assert rewrite_url("https://x") == "https://x"

    def test_rewrite_is_idempotent(self):
        once = rewrite_url("https://video-a.fbcdn.net/x")
        assert rewrite_url(once) == once


class TestUrlRewriter:
    def test_custom_placeholder(self):
        rewriter = UrlRewriter(placeholder=".proxy")
        assert rewriter("https://video-a.fbcdn.net/x") == "https://video.proxy.fbcdn.net/x"

    def test_custom_markers(self):
        rewriter = UrlRewriter(marker="media", domain=".cdn", placeholder="")
        assert rewriter.rewrite("https://media-eu-1.cdn.example/a") == "https://media.cdn.example/a"

    def test_placeholder_is_literal(self):
        rewriter = UrlRewriter(placeholder=r"\1")
        assert rewriter("https://video-a.fbcdn.net/x") == r"https://video\1.fbcdn.net/x"
