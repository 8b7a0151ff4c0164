"""Builder for links to files."""

import html

from ..models.config import RenderConfig
from ..models.link import LinkResult, LinkType
from .base import LinkRequest, first_non_empty, target_attributes


class FileLinkBuilder:
    """
    Builds links to files below the web root.

    Relative paths are prefixed with ``absRefPrefix``; absolute paths are
    used as they are. The link text defaults to the unprefixed path.
    """

    link_type = LinkType.FILE

    def __init__(self, config: RenderConfig):
        self._config = config

    def build(self, request: LinkRequest) -> LinkResult:
        path = request.classification.value
        target = first_non_empty(
            request.config.file_target,
            request.descriptor.target,
            self._config.file_target,
        )

        return LinkResult(
            type=self.link_type,
            url=self.public_url(path),
            link_text=request.link_text or html.escape(path),
            attributes=target_attributes(target),
        )

    def public_url(self, path: str) -> str:
        prefix = self._config.abs_ref_prefix
        if not prefix or path.startswith("/"):
            return path
        return prefix + path
