"""Parsing and rendering of HTML tag attribute strings."""

import html
import logging

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)


def parse_tag_attributes(params: str) -> dict[str, str]:
    """
    Parse an attribute string such as ``class="a b" data-x='1' hidden``.

    Attribute names are lower-cased, entities in values are decoded and
    valueless attributes map to an empty string. When a name occurs twice
    the last value wins.

    Args:
        params: Raw attribute string (the inside of a start tag)

    Returns:
        Attributes in source order
    """
    params = params.strip()
    if not params:
        return {}

    soup = BeautifulSoup(f"<a {params}></a>", "html.parser", multi_valued_attributes=None)
    anchor = soup.find("a")
    if anchor is None:
        logger.debug(f"Could not parse tag attributes: {params!r}")
        return {}

    return {name: value or "" for name, value in anchor.attrs.items()}


def render_attributes(attributes: dict[str, str]) -> str:
    """
    Render attributes as ``name="value"`` pairs, HTML-escaping every value.

    Args:
        attributes: Attribute mapping in output order

    Returns:
        Space separated attribute string
    """
    return " ".join(f'{name}="{html.escape(str(value), quote=True)}"' for name, value in attributes.items())
