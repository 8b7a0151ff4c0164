"""Evaluation of stdWrap sub-configurations.

Only the subset of stdWrap used by link and image rendering is supported.
Properties are applied in this order:

    data, field, current, cObject, override, ifEmpty, trim, htmlSpecialChars,
    wrap, dataWrap, prepend, append
"""

from __future__ import annotations

import html
import logging
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..parsing.attributes import render_attributes

if TYPE_CHECKING:
    from ..imaging.file_reference import FileReference

logger = logging.getLogger(__name__)

_DATA_PLACEHOLDER = re.compile(r"\{([^{}]+)\}")


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else ""
    return str(value)


def is_true(value: Any) -> bool:
    text = _to_text(value).strip()
    return text not in ("", "0")


class StdWrap:
    """
    Evaluates ``key.`` sub-configurations of a configuration mapping.

    Values can be read from the current data record (``field``), from the
    current file (``data = file:current:<property>``) or be produced by a
    TEXT content object.

    Example:
        std_wrap = StdWrap(data={"uid": 12})
        std_wrap.value("", {"dataWrap": 'rel="lightbox[{field:uid}]"'})
        # 'rel="lightbox[12]"'
    """

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        current_file: FileReference | None = None,
        current: str = "",
        parameters: Mapping[str, str] | None = None,
    ):
        """
        Initialize the evaluator.

        Args:
            data: The current data record
            current_file: The file being rendered, for ``file:current`` lookups
            current: The current value, e.g. the content of a parsed tag
            parameters: Attributes of the parsed tag, for ``parameters:`` lookups
        """
        self.data: Mapping[str, Any] = data or {}
        self.current_file = current_file
        self.current = current
        self.parameters: Mapping[str, str] = parameters or {}

    def value(self, value: Any, conf: Mapping[str, Any] | None) -> str:
        """
        Return a configuration value after applying its stdWrap properties.

        Args:
            value: The plain value (``key``)
            conf: The sub-configuration (``key.``), may be None

        Returns:
            The evaluated value as string
        """
        content = _to_text(value)
        if not conf:
            return content
        return self.apply(content, conf)

    def apply(self, content: str, conf: Mapping[str, Any]) -> str:
        """
        Apply stdWrap properties to content.

        Args:
            content: Input content
            conf: stdWrap properties

        Returns:
            Transformed content
        """
        if conf.get("data"):
            content = self.get_data(_to_text(conf["data"]))
        if conf.get("field"):
            content = self.get_field(_to_text(conf["field"]))
        if is_true(conf.get("current")):
            content = self.current
        if conf.get("cObject"):
            content = self.render_content_object(_to_text(conf["cObject"]), conf.get("cObject.") or {})

        override = self.value(conf.get("override"), conf.get("override."))
        if override.strip():
            content = override

        if not content.strip() and ("ifEmpty" in conf or "ifEmpty." in conf):
            content = self.value(conf.get("ifEmpty"), conf.get("ifEmpty."))

        if is_true(conf.get("trim")):
            content = content.strip()
        if is_true(conf.get("htmlSpecialChars")):
            content = html.escape(content)
        if conf.get("wrap"):
            content = self.wrap(content, _to_text(conf["wrap"]))
        if conf.get("dataWrap"):
            content = self.wrap(content, self.insert_data(_to_text(conf["dataWrap"])))
        if conf.get("prepend"):
            content = self.render_content_object(_to_text(conf["prepend"]), conf.get("prepend.") or {}) + content
        if conf.get("append"):
            content += self.render_content_object(_to_text(conf["append"]), conf.get("append.") or {})

        return content

    def wrap(self, content: str, wrap: str) -> str:
        """Wrap content with ``before | after``; the pipe marks the content position."""
        before, _, after = wrap.partition("|")
        return before.strip() + content + after.strip()

    def get_field(self, name: str) -> str:
        return _to_text(self.data.get(name.strip()))

    def get_data(self, expression: str) -> str:
        """
        Resolve a getText expression.

        Supported keys are ``field:<name>``, ``file:current:<property>``,
        ``current`` and ``parameters:<attribute>`` (``parameters:allParams``
        for all attributes of the parsed tag).
        Alternatives separated by ``//`` are tried in order until one is
        non-empty.

        Args:
            expression: The getText expression

        Returns:
            The resolved value, or an empty string
        """
        for alternative in expression.split("//"):
            key, _, rest = alternative.strip().partition(":")
            key = key.strip().lower()
            rest = rest.strip()

            if key == "field":
                result = self.get_field(rest)
            elif key == "file":
                result = self._get_file_data(rest)
            elif key == "current":
                result = self.current
            elif key == "parameters":
                result = self._get_parameter(rest)
            else:
                logger.debug(f"Unsupported getText key {key!r} in {expression!r}")
                result = ""

            if result != "":
                return result

        return ""

    def _get_parameter(self, name: str) -> str:
        if name == "allParams":
            return render_attributes(dict(self.parameters))
        return _to_text(self.parameters.get(name.lower()))

    def _get_file_data(self, spec: str) -> str:
        file_key, _, prop = spec.partition(":")
        if file_key.strip() != "current" or self.current_file is None:
            return ""
        return _to_text(self.current_file.get_property(prop.strip()))

    def insert_data(self, text: str) -> str:
        """Replace ``{getText}`` placeholders with their values."""
        return _DATA_PLACEHOLDER.sub(lambda match: self.get_data(match.group(1)), text)

    def render_content_object(self, name: str, conf: Mapping[str, Any]) -> str:
        """
        Render a content object. Only TEXT is supported.

        Args:
            name: Content object type
            conf: Content object configuration

        Returns:
            The rendered content, or an empty string for unsupported types
        """
        if name.strip().upper() != "TEXT":
            logger.debug(f"Ignoring unsupported content object {name!r}")
            return ""
        return self.value(conf.get("value"), conf)

    def check_if(self, conf: Mapping[str, Any] | None) -> bool:
        """
        Evaluate a checkIf configuration.

        Supported conditions are ``isNull.``, ``isTrue`` and ``isFalse``;
        all configured conditions must hold.

        Args:
            conf: checkIf properties

        Returns:
            True if every condition is met (or none is configured)
        """
        if not conf:
            return True

        result = True
        if "isNull." in conf:
            result = result and self._is_null(conf["isNull."])
        if "isTrue" in conf or "isTrue." in conf:
            result = result and is_true(self.value(conf.get("isTrue"), conf.get("isTrue.")))
        if "isFalse" in conf or "isFalse." in conf:
            result = result and not is_true(self.value(conf.get("isFalse"), conf.get("isFalse.")))
        return result

    def _is_null(self, conf: Mapping[str, Any]) -> bool:
        """A value is null if the referenced field is missing or None."""
        if conf.get("field"):
            return self.data.get(_to_text(conf["field"]).strip()) is None
        return self.value(conf.get("value"), conf) == ""
