"""Builder for external url links."""

import html

from ..models.config import RenderConfig
from ..models.link import LinkResult, LinkType
from .base import LinkRequest, append_query, first_non_empty, target_attributes


class UrlLinkBuilder:
    """
    Builds links to external urls.

    The window target is taken from ``extTarget`` in the link configuration,
    then from the parameter string, then from the site default.
    """

    link_type = LinkType.URL

    def __init__(self, config: RenderConfig):
        self._config = config

    def build(self, request: LinkRequest) -> LinkResult:
        url = append_query(request.classification.value, request.additional_params)
        target = first_non_empty(
            request.config.ext_target,
            request.descriptor.target,
            self._config.ext_target,
        )

        return LinkResult(
            type=self.link_type,
            url=url,
            link_text=request.link_text or html.escape(url),
            attributes=target_attributes(target),
        )
