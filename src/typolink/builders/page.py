"""Builder for links to pages of the site."""

import html
import logging
from typing import Optional, Protocol

from ..exceptions import UnableToLinkError
from ..models.link import LinkResult, LinkType
from .base import LinkRequest, first_non_empty, target_attributes

logger = logging.getLogger(__name__)


class PageResolver(Protocol):
    """
    Protocol for turning page references into urls.

    Page routing is owned by the surrounding application; typolink only
    asks for the url of a page.
    """

    def resolve(self, page: str, additional_params: str = "") -> Optional[str]:
        """
        Resolve a page reference.

        Args:
            page: Page id or alias
            additional_params: Query string to add to the page url

        Returns:
            The page url, or None if the page does not exist
        """
        ...


class PageLinkBuilder:
    """
    Builds links to pages through a PageResolver.

    A bare ``#section`` reference links to the fragment of the current page
    without asking the resolver.
    """

    link_type = LinkType.PAGE

    def __init__(self, resolver: Optional[PageResolver] = None):
        self._resolver = resolver

    def build(self, request: LinkRequest) -> LinkResult:
        page, hash_sign, fragment = request.classification.value.partition("#")
        target = first_non_empty(request.config.target, request.descriptor.target)

        if not page and fragment:
            url = f"#{fragment}"
        else:
            url = self._resolve(page, request.additional_params) + (f"#{fragment}" if fragment else "")

        return LinkResult(
            type=self.link_type,
            url=url,
            link_text=request.link_text or html.escape(url),
            attributes=target_attributes(target),
        )

    def _resolve(self, page: str, additional_params: str) -> str:
        if self._resolver is None:
            raise UnableToLinkError(f"No page resolver available for page {page!r}")

        url = self._resolver.resolve(page, additional_params)
        if not url:
            raise UnableToLinkError(f"Page {page!r} could not be resolved")

        logger.debug(f"Resolved page {page} to {url}")
        return url
