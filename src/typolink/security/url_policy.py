"""Link relation policy for anchors opening in other windows."""

from __future__ import annotations

import logging
from urllib.parse import urlparse


class UrlPolicy:
    """
    Decides whether an anchor needs ``rel="noreferrer"``.

    A link opened in another browsing context must not leak the referrer or
    give the new page access to ``window.opener`` when it leaves the site.
    Links staying on one of the configured site domains, and relative
    links, are considered internal.

    Example:
        policy = UrlPolicy(site_domains={"www.example.org"})
        policy.needs_noreferrer("https://typo3.org", "_blank")          # True
        policy.needs_noreferrer("https://www.example.org/a", "_blank")  # False
    """

    SAME_CONTEXT_TARGETS = {"", "_self", "_parent", "_top"}
    EXTERNAL_SCHEMES = {"http", "https"}
    REL_VALUE = "noreferrer"

    def __init__(
        self,
        site_domains: set[str] | None = None,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize the policy.

        Args:
            site_domains: Hostnames considered internal
            logger: Optional logger for policy decisions
        """
        self.site_domains = {domain.lower() for domain in site_domains or set()}
        self.logger = logger or logging.getLogger(__name__)

    def is_external(self, url: str) -> bool:
        """
        Check if a url points away from the site.

        Args:
            url: The href to check

        Returns:
            True for absolute http(s) or protocol-relative urls on foreign hosts
        """
        try:
            parsed = urlparse(url)
        except ValueError:
            return False

        if parsed.scheme and parsed.scheme.lower() not in self.EXTERNAL_SCHEMES:
            return False
        if not parsed.netloc:
            return False

        hostname = (parsed.hostname or "").lower()
        return hostname not in self.site_domains

    def needs_noreferrer(self, url: str, target: str | None) -> bool:
        """
        Check if the anchor should get ``rel="noreferrer"``.

        Args:
            url: The href of the anchor
            target: The window target of the anchor

        Returns:
            True if the link opens an external url in another context
        """
        if (target or "") in self.SAME_CONTEXT_TARGETS:
            return False

        external = self.is_external(url)
        if external:
            self.logger.debug(f"Adding rel={self.REL_VALUE} to {url} (target {target})")
        return external

    def merge_rel(self, existing: str | None) -> str:
        """Add the noreferrer token to an existing rel value."""
        tokens = (existing or "").split()
        if self.REL_VALUE not in tokens:
            tokens.append(self.REL_VALUE)
        return " ".join(tokens)
