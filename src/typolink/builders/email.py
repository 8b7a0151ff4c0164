"""Builder for email links with optional spam protection."""

import html
import logging

from ..models.config import RenderConfig
from ..models.link import LinkResult, LinkType
from ..security.email_obfuscator import EmailObfuscator
from .base import LinkRequest, first_non_empty, target_attributes

logger = logging.getLogger(__name__)


class EmailLinkBuilder:
    """
    Builds ``mailto:`` links.

    With ``spamProtectEmailAddresses`` set to a non-zero offset the href
    becomes ``#`` and the encrypted mailto url is carried in data
    attributes; the address in the visible text is replaced by its
    protected label. With offset 0 a plain mailto link is produced.
    """

    link_type = LinkType.EMAIL

    def __init__(self, config: RenderConfig, obfuscator: EmailObfuscator | None = None):
        self._config = config
        self._obfuscator = obfuscator or EmailObfuscator()

    def build(self, request: LinkRequest) -> LinkResult:
        value = request.classification.value.strip()
        address = value.partition("?")[0]
        mailto_url = f"mailto:{value}"
        link_text = request.link_text or html.escape(address)
        target = first_non_empty(request.config.target, request.descriptor.target)

        vector = self._config.obfuscation_vector
        if not vector.enabled:
            return LinkResult(
                type=self.link_type,
                url=mailto_url,
                link_text=link_text,
                attributes=target_attributes(target),
            )

        logger.debug(f"Obfuscating email link with vector {vector.offset}")
        attributes = self._obfuscator.attributes(mailto_url, vector)
        return LinkResult(
            type=self.link_type,
            url=attributes.pop("href"),
            link_text=self._obfuscator.protect_link_text(link_text, address, vector),
            attributes={**target_attributes(target), **attributes},
        )
