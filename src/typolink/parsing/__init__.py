"""Parsing of typolink parameters and tag attributes."""

from .attributes import parse_tag_attributes, render_attributes
from .codec import TypoLinkCodec

__all__ = ["TypoLinkCodec", "parse_tag_attributes", "render_attributes"]
