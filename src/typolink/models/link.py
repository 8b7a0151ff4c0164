"""Link descriptor, classification and result models."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class LinkType(str, Enum):
    """Kinds of link targets the factory knows how to build."""

    URL = "url"
    EMAIL = "email"
    FILE = "file"
    TELEPHONE = "telephone"
    PAGE = "page"
    UNKNOWN = "unknown"


@dataclass
class LinkDescriptor:
    """
    Positional parts of a typolink parameter string.

    Attributes:
        url: Raw link target (url, email, file path or page reference)
        target: Window target
        css_class: CSS class for the anchor
        title: Title attribute
        additional_params: Query string appended to the resolved href
    """

    url: str = ""
    target: str = ""
    css_class: str = ""
    title: str = ""
    additional_params: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.url


@dataclass(frozen=True)
class LinkClassification:
    """Result of classifying a link target."""

    type: LinkType
    value: str = ""

    @property
    def is_resolvable(self) -> bool:
        return self.type != LinkType.UNKNOWN


@dataclass(frozen=True)
class ObfuscationVector:
    """Shift offset and visible-text substitutes for spam protected emails."""

    offset: int = 0
    at_substitute: str = ""
    last_dot_substitute: str = ""

    @property
    def enabled(self) -> bool:
        return self.offset != 0


# Attributes with a dedicated slot in the structured result
_MAIN_ATTRIBUTES = ("href", "target", "class", "title")


@dataclass
class LinkResult:
    """
    A generated link.

    The attribute mapping keeps insertion order, which is the order the
    attributes are rendered in.

    Example:
        result = factory.create("TYPO3", LinkConfig(parameter="typo3.org"))
        result.to_html()   # '<a href="http://typo3.org">TYPO3</a>'
        result.to_json()   # '{"href":"http://typo3.org","target":null,...}'
    """

    type: LinkType
    url: str
    link_text: str = ""
    attributes: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # href always comes first
        self.attributes = {"href": self.url, **{k: v for k, v in self.attributes.items() if k != "href"}}

    @property
    def href(self) -> str:
        return self.attributes["href"]

    @property
    def target(self) -> str | None:
        return self.attributes.get("target") or None

    @property
    def css_class(self) -> str | None:
        return self.attributes.get("class") or None

    @property
    def title(self) -> str | None:
        return self.attributes.get("title") or None

    @property
    def additional_attributes(self) -> dict[str, str]:
        return {k: v for k, v in self.attributes.items() if k not in _MAIN_ATTRIBUTES}

    def with_attribute(self, name: str, value: str) -> LinkResult:
        """Set an attribute, keeping its position when it already exists."""
        self.attributes[name] = value
        if name == "href":
            self.url = value
        return self

    def without_attribute(self, name: str) -> LinkResult:
        self.attributes.pop(name, None)
        return self

    def to_html(self) -> str:
        """Render the anchor tag."""
        from ..parsing.attributes import render_attributes

        return f"<a {render_attributes(self.attributes)}>{self.link_text}</a>"

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary for serialization."""
        return {
            "href": self.href,
            "target": self.target,
            "class": self.css_class,
            "title": self.title,
            "linkText": self.link_text,
            "additionalAttributes": self.additional_attributes,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    def __str__(self) -> str:
        return self.to_html()
