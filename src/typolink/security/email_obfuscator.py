"""Reversible email obfuscation for spam protection."""

from __future__ import annotations

import html
import logging
import re

from ..models.link import ObfuscationVector

logger = logging.getLogger(__name__)


class EmailObfuscator:
    """
    Shifts characters of a mailto url so harvesters cannot read it.

    Three character ranges are rotated independently by the vector offset:
    ``+`` to ``:`` (punctuation and digits), ``@`` to ``Z`` and ``a`` to
    ``z``. Everything else is passed through. The browser reverses the
    shift from the ``data-mailto-token`` / ``data-mailto-vector`` pair.

    Example:
        obfuscator = EmailObfuscator()
        obfuscator.encrypt("mailto:a@b.org", 1)   # 'nbjmup+bAc/psh'
        obfuscator.decrypt("nbjmup+bAc/psh", 1)   # 'mailto:a@b.org'
    """

    RANGES = (
        (0x2B, 0x3A),  # + to :
        (0x40, 0x5A),  # @ to Z
        (0x61, 0x7A),  # a to z
    )

    DEFAULT_AT_SUBSTITUTE = "(at)"

    _LAST_DOT = re.compile(r"\.([^.]+)$")

    def encrypt(self, text: str, offset: int) -> str:
        """
        Shift every character inside the rotation ranges by ``offset``.

        Args:
            text: Text to encrypt, usually a full mailto url
            offset: Shift amount; negative values shift backwards

        Returns:
            The encrypted token
        """
        return "".join(self._shift(char, offset) for char in text)

    def decrypt(self, token: str, offset: int) -> str:
        """Reverse encrypt() for the same offset."""
        return self.encrypt(token, -offset)

    def _shift(self, char: str, offset: int) -> str:
        code = ord(char)
        for start, end in self.RANGES:
            if start <= code <= end:
                size = end - start + 1
                return chr(start + (code - start + offset) % size)
        return char

    def attributes(self, mailto_url: str, vector: ObfuscationVector) -> dict[str, str]:
        """
        Anchor attributes replacing a plain mailto href.

        Args:
            mailto_url: The complete ``mailto:`` url including any query
            vector: Obfuscation settings with a non-zero offset

        Returns:
            Attributes in output order, starting with the placeholder href
        """
        return {
            "href": "#",
            "data-mailto-token": self.encrypt(mailto_url, vector.offset),
            "data-mailto-vector": str(vector.offset),
        }

    def protected_label(self, address: str, vector: ObfuscationVector) -> str:
        """
        Visible form of an address with ``@`` and optionally the last dot replaced.

        Substitutes are inserted verbatim so they may contain markup.

        Args:
            address: Email address without ``mailto:`` and query
            vector: Obfuscation settings

        Returns:
            HTML label for the address
        """
        at_substitute = vector.at_substitute.strip() or self.DEFAULT_AT_SUBSTITUTE
        label = html.escape(address).replace("@", at_substitute)

        last_dot = vector.last_dot_substitute.strip()
        if last_dot:
            label = self._LAST_DOT.sub(lambda match: last_dot + match.group(1), label)

        return label

    def protect_link_text(self, link_text: str, address: str, vector: ObfuscationVector) -> str:
        """
        Replace every occurrence of the address in a link text by its protected label.

        Args:
            link_text: Link text, possibly containing the address
            address: Email address without ``mailto:`` and query
            vector: Obfuscation settings

        Returns:
            Link text safe to show in the page
        """
        label = self.protected_label(address, vector)
        escaped_address = html.escape(address)
        text = re.sub(re.escape(escaped_address), lambda _: label, link_text, flags=re.IGNORECASE)
        if escaped_address != address:
            text = re.sub(re.escape(address), lambda _: label, text, flags=re.IGNORECASE)
        return text
