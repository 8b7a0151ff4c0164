"""Builder for telephone links."""

import html

from ..models.link import LinkResult, LinkType
from .base import LinkRequest, first_non_empty, target_attributes


class TelephoneLinkBuilder:
    """Builds ``tel:`` links."""

    link_type = LinkType.TELEPHONE

    def build(self, request: LinkRequest) -> LinkResult:
        number = request.classification.value.strip()
        target = first_non_empty(request.config.target, request.descriptor.target)

        return LinkResult(
            type=self.link_type,
            url=f"tel:{number}",
            link_text=request.link_text or html.escape(number),
            attributes=target_attributes(target),
        )
