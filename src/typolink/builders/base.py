"""Base classes for the link builders."""

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from ..models.config import LinkConfig
from ..models.link import LinkClassification, LinkDescriptor, LinkResult, LinkType


@dataclass
class LinkRequest:
    """
    Everything a builder needs to produce one link.

    Attributes:
        descriptor: Parsed typolink parameter
        classification: Link type and normalized target
        config: The link configuration
        link_text: Link text as given by the caller (may be empty)
    """

    descriptor: LinkDescriptor
    classification: LinkClassification
    config: LinkConfig
    link_text: str = ""

    @property
    def additional_params(self) -> str:
        """Query parameters from the parameter string and the configuration."""
        parts = [
            part.strip().lstrip("&?")
            for part in (self.descriptor.additional_params, self.config.additional_params)
            if part and part.strip().lstrip("&?")
        ]
        return "&".join(parts)


@runtime_checkable
class LinkBuilder(Protocol):
    """
    Protocol for link builders.

    Each builder handles one LinkType and turns a LinkRequest into a
    LinkResult carrying href, target and link text. Attributes shared by
    all link types (title, ATagParams, rel, pop-up windows) are added
    afterwards by the LinkFactory.

    Error Handling Contract:
    - If the target cannot be resolved, raise UnableToLinkError
    - Never return a result with an empty href

    Example implementation:
        class TelephoneLinkBuilder:
            link_type = LinkType.TELEPHONE

            def build(self, request: LinkRequest) -> LinkResult:
                number = request.classification.value
                return LinkResult(
                    type=self.link_type,
                    url=f"tel:{number}",
                    link_text=request.link_text or html.escape(number),
                )
    """

    link_type: LinkType

    def build(self, request: LinkRequest) -> LinkResult:
        """
        Build the link.

        Args:
            request: The link request

        Returns:
            LinkResult with href, optional target and link text
        """
        ...


def append_query(url: str, params: str) -> str:
    """
    Append a query string to a url, keeping any fragment at the end.

    Args:
        url: Base url
        params: Query string without leading ``?`` or ``&``

    Returns:
        The url with the parameters appended
    """
    params = params.strip().lstrip("&?")
    if not params:
        return url

    base, hash_sign, fragment = url.partition("#")
    joiner = "&" if "?" in base else "?"
    return f"{base}{joiner}{params}{hash_sign}{fragment}"


def first_non_empty(*values: Optional[str]) -> str:
    """Return the first value that is not None or blank."""
    for value in values:
        if value and value.strip():
            return value.strip()
    return ""


def target_attributes(target: str) -> dict[str, str]:
    return {"target": target} if target else {}
