"""Tests for the rel="noreferrer" policy."""

import pytest
from typolink.security import UrlPolicy


class TestUrlPolicy:
    """Tests for UrlPolicy."""

    @pytest.fixture
    def policy(self):
        return UrlPolicy(site_domains={"www.example.org"})

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("http://typo3.org", True),
            ("https://TYPO3.org/path", True),
            ("//cdn.example.com/a.js", True),
            ("https://www.example.org/about", False),
            ("https://WWW.EXAMPLE.ORG/about", False),
            ("/fileadmin/a.pdf", False),
            ("mailto:a@b.org", False),
            ("ftp://example.com/a", False),
            ("#", False),
        ],
    )
    def test_is_external(self, policy, url, expected):
        """Test which urls leave the site."""
        assert policy.is_external(url) is expected

    @pytest.mark.parametrize("target", ["", None, "_self", "_parent", "_top"])
    def test_same_context_targets(self, policy, target):
        """Test that links in the same browsing context are untouched."""
        assert policy.needs_noreferrer("https://typo3.org", target) is False

    @pytest.mark.parametrize("target", ["_blank", "someTarget"])
    def test_other_context_targets(self, policy, target):
        """Test that external links opening elsewhere need noreferrer."""
        assert policy.needs_noreferrer("https://typo3.org", target) is True

    def test_internal_link_in_new_window(self, policy):
        """Test that site links keep the referrer."""
        assert policy.needs_noreferrer("https://www.example.org/a", "_blank") is False

    @pytest.mark.parametrize(
        "existing,expected",
        [(None, "noreferrer"), ("nofollow", "nofollow noreferrer"), ("noreferrer nofollow", "noreferrer nofollow")],
    )
    def test_merge_rel(self, policy, existing, expected):
        """Test that noreferrer is added once."""
        assert policy.merge_rel(existing) == expected
