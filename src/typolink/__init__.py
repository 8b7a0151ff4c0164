"""
typolink - Render typolink link descriptions to HTML anchors.

Usage:
    from typolink import ContentRenderer, RenderConfig

    renderer = ContentRenderer(RenderConfig(spamProtectEmailAddresses=2))

    renderer.typolink("Mail us", {"parameter": "info@example.org"})
    renderer.typolink("", {"parameter": "typo3.org _blank", "returnLast": "result"})
"""

__version__ = "1.0.0"

from .builders import LinkBuilder, PageResolver
from .classification import LinkClassifier
from .content.renderer import ContentRenderer, typolink
from .content.stdwrap import StdWrap
from .core import LinkFactory
from .exceptions import UnableToLinkError
from .imaging import FileReference, ImageResource
from .models.config import ImageLinkConfig, JSWindowConfig, LinkConfig, RenderConfig
from .models.link import LinkDescriptor, LinkResult, LinkType, ObfuscationVector
from .parsing import TypoLinkCodec
from .security import EmailObfuscator

__all__ = [
    "__version__",
    # Rendering
    "ContentRenderer",
    "LinkFactory",
    "StdWrap",
    "typolink",
    # Config
    "ImageLinkConfig",
    "JSWindowConfig",
    "LinkConfig",
    "RenderConfig",
    # Links
    "LinkDescriptor",
    "LinkResult",
    "LinkType",
    "ObfuscationVector",
    # Components
    "EmailObfuscator",
    "LinkClassifier",
    "TypoLinkCodec",
    # Protocols
    "LinkBuilder",
    "PageResolver",
    # Images
    "FileReference",
    "ImageResource",
    # Errors
    "UnableToLinkError",
]
