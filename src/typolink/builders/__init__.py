"""Link builders, one per link type."""

from .base import LinkBuilder, LinkRequest, append_query
from .email import EmailLinkBuilder
from .file import FileLinkBuilder
from .page import PageLinkBuilder, PageResolver
from .telephone import TelephoneLinkBuilder
from .url import UrlLinkBuilder

__all__ = [
    # Protocols
    "LinkBuilder",
    "PageResolver",
    # Builders
    "EmailLinkBuilder",
    "FileLinkBuilder",
    "PageLinkBuilder",
    "TelephoneLinkBuilder",
    "UrlLinkBuilder",
    # Helpers
    "LinkRequest",
    "append_query",
]
