"""Encoding and decoding of typolink parameter strings."""

import csv
import logging
import re

from ..models.link import LinkDescriptor

logger = logging.getLogger(__name__)

# Marks an empty position so later positions can still be given
EMPTY_PLACEHOLDER = "-"

_WHITESPACE = re.compile(r"[\t\r\n]+")
_NEEDS_QUOTES = re.compile(r'[\s"\\]')

# Stand-ins for the two escape sequences while the string is tokenized
_ESCAPED_BACKSLASH = "\ue000"
_ESCAPED_QUOTE = "\ue001"


class TypoLinkCodec:
    """
    Converts between parameter strings and LinkDescriptor objects.

    A parameter string has up to five whitespace separated positions:

        url [target] [class] ["title"] [additional params]

    Positions containing whitespace are double-quoted. ``\\"`` and ``\\\\``
    stand for a quote and a backslash; other backslashes are kept as they
    are. ``-`` leaves a position empty.

    Example:
        codec = TypoLinkCodec()
        descriptor = codec.decode('https://example.com _blank - "My title"')
        descriptor.target  # '_blank'
        descriptor.title   # 'My title'
    """

    FIELDS = ("url", "target", "css_class", "title", "additional_params")

    def decode(self, parameter: str) -> LinkDescriptor:
        """
        Split a parameter string into its positional parts.

        Unbalanced quotes are tolerated: the unterminated segment simply
        runs to the end of the string.

        Args:
            parameter: The typolink parameter

        Returns:
            LinkDescriptor with the parsed positions
        """
        parameter = _WHITESPACE.sub(" ", parameter or "").strip()
        if not parameter:
            return LinkDescriptor()

        masked = parameter.replace("\\\\", _ESCAPED_BACKSLASH).replace('\\"', _ESCAPED_QUOTE)
        reader = csv.reader(
            [masked],
            delimiter=" ",
            quotechar='"',
            doublequote=False,
            skipinitialspace=True,
        )
        try:
            tokens = next(reader)
        except (csv.Error, StopIteration) as e:
            logger.debug(f"Falling back to plain split for {parameter!r}: {e}")
            tokens = masked.split()

        parts = [self._unescape(token.strip()) for token in tokens if token.strip()]
        if len(parts) > len(self.FIELDS):
            logger.debug(f"Ignoring extra typolink positions: {parts[len(self.FIELDS):]}")

        values = {}
        for name, value in zip(self.FIELDS, parts):
            values[name] = "" if value == EMPTY_PLACEHOLDER else value

        return LinkDescriptor(**values)

    def _unescape(self, token: str) -> str:
        # Only \" and \\ are escapes; any other backslash is kept as is
        return token.replace(_ESCAPED_QUOTE, '"').replace(_ESCAPED_BACKSLASH, "\\")

    def encode(self, descriptor: LinkDescriptor) -> str:
        """
        Build a parameter string from a descriptor.

        Args:
            descriptor: The parts to encode

        Returns:
            Parameter string; trailing empty positions are omitted
        """
        parts = [self._encode_part(getattr(descriptor, name)) for name in self.FIELDS]

        while parts and parts[-1] == EMPTY_PLACEHOLDER:
            parts.pop()

        return " ".join(parts)

    def _encode_part(self, value: str) -> str:
        value = (value or "").strip()
        if not value:
            return EMPTY_PLACEHOLDER
        if _NEEDS_QUOTES.search(value):
            escaped = value.replace("\\", "\\\\").replace('"', '\\"')
            return f'"{escaped}"'
        return value
