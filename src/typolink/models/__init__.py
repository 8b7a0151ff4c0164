"""Typolink configuration and link models."""

from .config import ImageLinkConfig, JSWindowConfig, LinkConfig, RenderConfig
from .link import LinkClassification, LinkDescriptor, LinkResult, LinkType, ObfuscationVector

__all__ = [
    # Config
    "ImageLinkConfig",
    "JSWindowConfig",
    "LinkConfig",
    "RenderConfig",
    # Links
    "LinkClassification",
    "LinkDescriptor",
    "LinkResult",
    "LinkType",
    "ObfuscationVector",
]
