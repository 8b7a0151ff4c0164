"""LinkFactory: turns a link configuration into a LinkResult."""

from __future__ import annotations

import logging
import re
from dataclasses import replace

from ..builders import (
    EmailLinkBuilder,
    FileLinkBuilder,
    PageLinkBuilder,
    PageResolver,
    TelephoneLinkBuilder,
    UrlLinkBuilder,
)
from ..builders.base import LinkBuilder, LinkRequest, first_non_empty
from ..classification.classifier import LinkClassifier
from ..content.stdwrap import StdWrap
from ..exceptions import UnableToLinkError
from ..models.config import LinkConfig, RenderConfig
from ..models.link import LinkDescriptor, LinkResult, LinkType
from ..parsing.attributes import parse_tag_attributes
from ..parsing.codec import TypoLinkCodec
from ..security.email_obfuscator import EmailObfuscator
from ..security.url_policy import UrlPolicy

logger = logging.getLogger(__name__)


class LinkFactory:
    """
    Builds links from typolink configurations.

    The factory parses the parameter, classifies the target, hands the
    request to the builder for that link type and then decorates the
    result with the attributes every link type shares. Attributes end up
    in this order:

        href, target, data-mailto-* / data-window-*, ATagParams, rel,
        title, class from the parameter

    Example:
        factory = LinkFactory(RenderConfig(extTarget="_blank"))
        result = factory.create("TYPO3", LinkConfig(parameter="typo3.org"))
        result.to_html()
        # '<a href="http://typo3.org" target="_blank" rel="noreferrer">TYPO3</a>'
    """

    # 800x600 or 800x600:resizable=1,target=popup
    WINDOW_PATTERN = re.compile(r"^(\d+)x(\d+)(?::(.*))?")
    DEFAULT_WINDOW_NAME = "FEopenLink"

    def __init__(
        self,
        config: RenderConfig | None = None,
        page_resolver: PageResolver | None = None,
        codec: TypoLinkCodec | None = None,
        classifier: LinkClassifier | None = None,
        url_policy: UrlPolicy | None = None,
        obfuscator: EmailObfuscator | None = None,
    ):
        """
        Initialize the factory.

        Args:
            config: Site-wide rendering settings
            page_resolver: Resolver for page links; page links fail without one
            codec: Parameter codec
            classifier: Link type classifier
            url_policy: Policy for rel="noreferrer"
            obfuscator: Email obfuscator used for spam protection
        """
        self.config = config or RenderConfig()
        self.codec = codec or TypoLinkCodec()
        self.classifier = classifier or LinkClassifier()
        self.url_policy = url_policy or UrlPolicy(site_domains=set(self.config.site_domains))

        self._builders: dict[LinkType, LinkBuilder] = {}
        for builder in (
            UrlLinkBuilder(self.config),
            EmailLinkBuilder(self.config, obfuscator),
            FileLinkBuilder(self.config),
            TelephoneLinkBuilder(),
            PageLinkBuilder(page_resolver),
        ):
            self.register_builder(builder)

    def register_builder(self, builder: LinkBuilder) -> LinkFactory:
        """
        Register a builder, replacing the one for the same link type (fluent API).

        Args:
            builder: The builder to add

        Returns:
            Self for chaining
        """
        self._builders[builder.link_type] = builder
        return self

    def create(self, link_text: str, conf: LinkConfig, std_wrap: StdWrap | None = None) -> LinkResult:
        """
        Create a link.

        Args:
            link_text: Link text; an empty text is replaced by the target
            conf: The link configuration
            std_wrap: Evaluator for ``key.`` sub-configurations

        Returns:
            The generated link

        Raises:
            UnableToLinkError: If the target cannot be turned into a link
        """
        std_wrap = std_wrap or StdWrap()

        parameter = std_wrap.value(conf.parameter, conf.parameter_wrap).strip()
        descriptor = self.codec.decode(parameter)
        if conf.parameter_wrap and conf.parameter:
            # Positions left empty by parameter. fall back to the plain parameter
            descriptor = self._fill_empty_positions(descriptor, self.codec.decode(conf.parameter))
        if descriptor.is_empty:
            raise UnableToLinkError("Empty link parameter", link_text)

        classification = self.classifier.classify(descriptor.url)
        builder = self._builders.get(classification.type)
        if builder is None:
            raise UnableToLinkError(f"Unable to detect the link type of {descriptor.url!r}", link_text)

        result = builder.build(LinkRequest(descriptor, classification, conf, link_text))
        logger.debug(f"Built {classification.type.value} link {result.url}")

        self._add_window_attributes(result, conf)
        self._add_tag_params(result, std_wrap.value(conf.atag_params, conf.atag_params_wrap))

        if self.url_policy.needs_noreferrer(result.url, result.target):
            result.with_attribute("rel", self.url_policy.merge_rel(result.attributes.get("rel")))

        title = first_non_empty(std_wrap.value(conf.title, conf.title_wrap), descriptor.title)
        if title:
            result.with_attribute("title", title)

        if descriptor.css_class:
            result.with_attribute("class", self._merge_classes(result.attributes.get("class"), descriptor.css_class))

        return result

    def _fill_empty_positions(self, descriptor: LinkDescriptor, fallback: LinkDescriptor) -> LinkDescriptor:
        if descriptor.is_empty:
            return descriptor
        return replace(
            descriptor,
            target=descriptor.target or fallback.target,
            css_class=descriptor.css_class or fallback.css_class,
            title=descriptor.title or fallback.title,
            additional_params=descriptor.additional_params or fallback.additional_params,
        )

    def _add_window_attributes(self, result: LinkResult, conf: LinkConfig) -> None:
        """
        Add pop-up window data attributes.

        A ``WxH[:params]`` target opens a window of that size. With
        ``JSwindow`` any target opens a pop-up; a plain target then names
        the window and only ``JSwindow_params`` describe it.
        """
        match = self.WINDOW_PATTERN.match(result.target or "")
        if not match and not conf.jswindow:
            return

        if match:
            window_name = first_non_empty(conf.target, self.DEFAULT_WINDOW_NAME)
            features = {"width": match.group(1), "height": match.group(2)}
            inline_params = match.group(3) or ""
        else:
            window_name = first_non_empty(result.target, self.DEFAULT_WINDOW_NAME)
            features = {}
            inline_params = ""
        raw_params = f"{conf.jswindow_params},{inline_params}".lower()

        for param in raw_params.split(","):
            name, _, value = param.strip().partition("=")
            name = name.strip()
            if not name or (match and name in ("width", "height")):
                continue
            if name == "target":
                window_name = value.strip()
            else:
                features[name] = value.strip()

        result.with_attribute("target", window_name)
        result.with_attribute("data-window-url", result.url)
        result.with_attribute("data-window-target", window_name)
        if features:
            result.with_attribute("data-window-features", ",".join(f"{name}={value}" for name, value in features.items()))

    def _add_tag_params(self, result: LinkResult, params: str) -> None:
        for name, value in parse_tag_attributes(params).items():
            if name == "href":
                logger.debug(f"Ignoring href {value!r} from ATagParams, using {result.url!r}")
                continue
            if name == "target" and result.target:
                logger.debug(f"Ignoring target {value!r} from ATagParams, using {result.target!r}")
                continue
            result.with_attribute(name, value)

    def _merge_classes(self, existing: str | None, extra: str) -> str:
        classes = (existing or "").split()
        for css_class in extra.split():
            if css_class not in classes:
                classes.append(css_class)
        return " ".join(classes)
