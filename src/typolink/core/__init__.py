"""Link creation."""

from .factory import LinkFactory

__all__ = ["LinkFactory"]
