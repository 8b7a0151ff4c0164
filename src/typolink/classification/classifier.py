"""Detection of the link type of a typolink target."""

import logging
import re

from ..models.link import LinkClassification, LinkType

logger = logging.getLogger(__name__)


class LinkClassifier:
    """
    Determines what kind of link a raw typolink target describes.

    Checks run in a fixed order so that ambiguous strings always resolve the
    same way. Email addresses are recognised before paths and domains, which
    keeps ``some.body@host`` from being read as a domain or a file.

    Example:
        classifier = LinkClassifier()
        classifier.classify("typo3.org")
        # LinkClassification(type=LinkType.URL, value='http://typo3.org')
    """

    DEFAULT_SCHEME = "http://"

    EMAIL_PATTERN = re.compile(r"^[^@\s/:?]+@[^@\s/?]+(\?.*)?$")
    SCHEME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*:")
    PAGE_URN_PATTERN = re.compile(r"^t3://page\?uid=(\w+)", re.IGNORECASE)
    PAGE_PATTERN = re.compile(r"^(\d+)?(#.*)?$")

    # Extensions that never collide with common top level domains
    FILE_EXTENSIONS = frozenset(
        {
            "php", "html", "htm", "pdf", "txt", "csv", "xml", "json", "css", "js",
            "jpg", "jpeg", "png", "gif", "svg", "webp", "mp3", "mp4",
            "doc", "docx", "xls", "xlsx", "ppt", "pptx", "odt", "ods",
        }
    )

    def classify(self, target: str) -> LinkClassification:
        """
        Classify a raw link target.

        Args:
            target: The url position of a typolink parameter

        Returns:
            LinkClassification with the type and the normalized value
        """
        target = (target or "").strip()
        if not target:
            return LinkClassification(LinkType.UNKNOWN)

        lowered = target.lower()
        if lowered.startswith("mailto:"):
            return LinkClassification(LinkType.EMAIL, target[len("mailto:") :])
        if lowered.startswith("tel:"):
            return LinkClassification(LinkType.TELEPHONE, target[len("tel:") :])

        page_urn = self.PAGE_URN_PATTERN.match(target)
        if page_urn:
            fragment = target.partition("#")[2]
            return LinkClassification(LinkType.PAGE, page_urn.group(1) + (f"#{fragment}" if fragment else ""))

        if self.EMAIL_PATTERN.match(target):
            return LinkClassification(LinkType.EMAIL, target)

        if self._is_file(target):
            return LinkClassification(LinkType.FILE, target)

        if self.SCHEME_PATTERN.match(target) or target.startswith("//"):
            return LinkClassification(LinkType.URL, target)

        if self._looks_like_domain(target):
            return LinkClassification(LinkType.URL, self.DEFAULT_SCHEME + target)

        if self.PAGE_PATTERN.match(target):
            return LinkClassification(LinkType.PAGE, target)

        logger.debug(f"Could not classify link target {target!r}")
        return LinkClassification(LinkType.UNKNOWN, target)

    def _is_file(self, target: str) -> bool:
        """Absolute paths, relative paths with a slash before the first dot, and known file names."""
        if target.startswith("//"):
            return False
        if target.startswith("/"):
            return True
        if self.SCHEME_PATTERN.match(target):
            return False

        slash = target.find("/")
        dot = target.find(".")
        if slash > 0 and (dot == -1 or slash < dot):
            return True

        path = re.split(r"[?#]", target, maxsplit=1)[0]
        extension = path.rpartition(".")[2].lower() if "." in path else ""
        return "/" not in path and extension in self.FILE_EXTENSIONS

    def _looks_like_domain(self, target: str) -> bool:
        if any(char.isspace() for char in target):
            return False

        dot = target.find(".")
        slash = target.find("/")
        return dot > 0 and (slash == -1 or dot < slash)
