"""Value evaluation for content rendering."""

from .stdwrap import StdWrap, is_true

__all__ = ["StdWrap", "is_true"]
