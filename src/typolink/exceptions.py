"""Exceptions raised while building links."""


class UnableToLinkError(Exception):
    """
    Raised by link builders when a target cannot be turned into a link.

    The renderer catches it, logs a warning and falls back to the plain
    link text, so callers of ``typolink()`` never see it.
    """

    def __init__(self, message: str, link_text: str = ""):
        super().__init__(message)
        self.link_text = link_text
