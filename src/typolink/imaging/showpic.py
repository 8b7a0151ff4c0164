"""Urls of the image pop-up (showpic) script."""

import base64
import hashlib
import hmac
import json
import logging
from typing import Any
from urllib.parse import quote

from .file_reference import FileReference

logger = logging.getLogger(__name__)


class ShowpicUrlBuilder:
    """
    Builds signed urls for the enlarged-image pop-up.

    Display parameters are JSON encoded, base64 encoded and split into
    chunks passed as ``parameters[0]``, ``parameters[1]`` ...; the ``md5``
    parameter is an HMAC over the file uid and the encoded parameters so
    the script only renders sizes the site asked for.

    Example:
        builder = ShowpicUrlBuilder(encryption_key="secret")
        builder.build(file, {"width": "800m"})
        # 'index.php?eID=tx_cms_showpic&file=1&md5=...&parameters%5B0%5D=...'
    """

    SCRIPT = "index.php"
    EID = "tx_cms_showpic"
    CHUNK_SIZE = 64

    def __init__(self, encryption_key: str = "", abs_ref_prefix: str = ""):
        """
        Initialize the builder.

        Args:
            encryption_key: HMAC key shared with the pop-up script
            abs_ref_prefix: Prefix for the script url
        """
        if not encryption_key:
            logger.debug("No encryption key configured, pop-up urls are signed with an empty key")
        self._key = encryption_key.encode()
        self._prefix = abs_ref_prefix

    def encode_parameters(self, parameters: dict[str, Any]) -> str:
        payload = json.dumps(parameters, separators=(",", ":"))
        return base64.b64encode(payload.encode()).decode("ascii")

    def decode_parameters(self, encoded: str) -> dict[str, Any]:
        return json.loads(base64.b64decode(encoded))

    def sign(self, file_uid: int, encoded_parameters: str) -> str:
        message = f"{file_uid}|{encoded_parameters}".encode()
        return hmac.new(self._key, message, hashlib.sha1).hexdigest()

    def query(self, file: FileReference, parameters: dict[str, Any]) -> str:
        """
        Build the signed parameter part of the url.

        Args:
            file: The image file
            parameters: Display parameters for the pop-up

        Returns:
            Query string fragment starting with ``&md5=``
        """
        encoded = self.encode_parameters(parameters)
        query = f"&md5={self.sign(file.uid, encoded)}"
        for index, start in enumerate(range(0, len(encoded), self.CHUNK_SIZE)):
            chunk = encoded[start : start + self.CHUNK_SIZE]
            query += f"&parameters{quote('[')}{index}{quote(']')}={quote(chunk, safe='')}"
        return query

    def build(self, file: FileReference, parameters: dict[str, Any]) -> str:
        """Complete pop-up url for a file."""
        return f"{self._prefix}{self.SCRIPT}?eID={self.EID}&file={file.uid}{self.query(file, parameters)}"
