"""Link type detection."""

from .classifier import LinkClassifier

__all__ = ["LinkClassifier"]
