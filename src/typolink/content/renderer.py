"""ContentRenderer: the typolink entry point, content parsing and image link wrapping."""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Mapping
from typing import Any, Optional, Union
from urllib.parse import quote

from bs4 import BeautifulSoup, Tag

from ..builders import PageResolver
from ..core.factory import LinkFactory
from ..exceptions import UnableToLinkError
from ..imaging import FileReference, ImageProcessor, ImageResource, ShowpicUrlBuilder
from ..models.config import ImageLinkConfig, LinkConfig, RenderConfig
from ..models.link import LinkResult, LinkType
from ..parsing.attributes import parse_tag_attributes
from .stdwrap import StdWrap, is_true

logger = logging.getLogger(__name__)

ConfigInput = Union[LinkConfig, Mapping[str, Any]]


class ContentRenderer:
    """
    Renders links and linked images for one data record.

    The renderer owns the current data record and the current file; both
    are visible to ``key.`` sub-configurations through ``field:`` and
    ``file:current:`` lookups.

    Example:
        renderer = ContentRenderer(RenderConfig(extTarget="_blank"))
        renderer.typolink("TYPO3", {"parameter": "typo3.org"})
        # '<a href="http://typo3.org" target="_blank" rel="noreferrer">TYPO3</a>'

        renderer.typolink("", {"parameter": "fileadmin/a.pdf", "returnLast": "url"})
        # 'fileadmin/a.pdf'
    """

    SHOWPIC_TARGET = "thePicture"
    DEFAULT_WINDOW_FEATURES = {"status": "0", "menubar": "0"}

    def __init__(
        self,
        config: Optional[RenderConfig] = None,
        page_resolver: Optional[PageResolver] = None,
        data: Optional[Mapping[str, Any]] = None,
        factory: Optional[LinkFactory] = None,
        image_processor: Optional[ImageProcessor] = None,
        showpic: Optional[ShowpicUrlBuilder] = None,
    ):
        """
        Initialize the renderer.

        Args:
            config: Site-wide rendering settings
            page_resolver: Resolver for page links
            data: The current data record
            factory: Link factory (built from config and page_resolver if omitted)
            image_processor: Calculates processed image sizes
            showpic: Builds the image pop-up urls
        """
        self.config = config or RenderConfig()
        self.data: dict[str, Any] = dict(data or {})
        self.current_file: Optional[FileReference] = None
        self.factory = factory or LinkFactory(self.config, page_resolver)
        self.image_processor = image_processor or ImageProcessor()
        self.showpic = showpic or ShowpicUrlBuilder(self.config.encryption_key, self.config.abs_ref_prefix)

    def set_current_file(self, file: Optional[FileReference]) -> None:
        self.current_file = file

    def std_wrap(self, content: str, conf: Optional[Mapping[str, Any]]) -> str:
        """Apply stdWrap properties to content."""
        if not conf:
            return content
        return self._std_wrap().apply(content, conf)

    def check_if(self, conf: Optional[Mapping[str, Any]]) -> bool:
        return self._std_wrap().check_if(conf)

    def typolink(self, link_text: str, conf: ConfigInput) -> Union[str, LinkResult]:
        """
        Render a link.

        Links that cannot be generated are logged as warnings and the link
        text is returned unchanged.

        Args:
            link_text: Text of the anchor; empty to use the target
            conf: LinkConfig or a TypoScript style mapping

        Returns:
            Anchor markup, the bare url (``returnLast = url``) or the
            LinkResult (``returnLast = result``)

        Raises:
            pydantic.ValidationError: If a mapping is not a valid configuration
        """
        return self._render_link(link_text, self._link_config(conf), self._std_wrap())

    def _render_link(self, link_text: str, conf: LinkConfig, std_wrap: StdWrap) -> Union[str, LinkResult]:
        try:
            result = self.factory.create(link_text, conf, std_wrap)
        except UnableToLinkError as e:
            logger.warning(f"The link could not be generated: {e}")
            return link_text

        if conf.return_last == "url":
            return result.url
        if conf.return_last == "result":
            return result
        return result.to_html()

    def typolink_url(self, conf: ConfigInput) -> str:
        """Render only the url of a link; empty if no link can be generated."""
        conf = self._link_config(conf).model_copy(update={"return_last": "url"})
        url = self.typolink("", conf)
        return url if isinstance(url, str) else url.url

    def parse_func(self, content: str, conf: Optional[Mapping[str, Any]]) -> str:
        """
        Re-render the tags configured in ``tags.`` inside HTML content.

        Each matching tag is replaced by its content object. The tag content
        is the current value and its attributes are available as
        ``parameters:<name>``, so anchors can be sent back through typolink.
        Everything else in the content is left as is.

        Example:
            conf = {
                "tags.": {
                    "a": "TEXT",
                    "a.": {"current": 1, "typolink.": {"parameter.": {"data": "parameters:href"}}},
                }
            }
            renderer.parse_func('<p><a href="typo3.org">TYPO3</a></p>', conf)
            # '<p><a href="http://typo3.org">TYPO3</a></p>'

        Args:
            content: HTML content
            conf: parseFunc properties; only ``tags.`` is evaluated

        Returns:
            The content with the configured tags rendered
        """
        tags_conf = (conf or {}).get("tags.") or {}
        handlers = {
            name.strip().lower(): (str(cobject), tags_conf.get(f"{name}.") or {})
            for name, cobject in tags_conf.items()
            if not name.endswith(".")
        }
        if not handlers or "<" not in content:
            return content

        soup = BeautifulSoup(content, "html.parser", multi_valued_attributes=None)
        elements = soup.find_all(list(handlers))
        if not elements:
            return content

        for element in elements:
            cobject, element_conf = handlers[element.name]
            rendered = self._render_tag(element, cobject, element_conf)
            fragment = BeautifulSoup(rendered, "html.parser", multi_valued_attributes=None)
            element.replace_with(*list(fragment.contents))

        return str(soup)

    def _render_tag(self, element: Tag, cobject: str, conf: Mapping[str, Any]) -> str:
        if cobject.strip().upper() != "TEXT":
            logger.debug(f"Keeping <{element.name}> as is, unsupported content object {cobject!r}")
            return str(element)

        std_wrap = StdWrap(self.data, self.current_file, current=element.decode_contents(), parameters=dict(element.attrs))
        rendered = std_wrap.render_content_object(cobject, conf)
        if conf.get("typolink."):
            link = self._render_link(rendered, self._link_config(conf["typolink."]), std_wrap)
            rendered = link if isinstance(link, str) else link.to_html()
        return rendered

    def get_img_resource(self, file: FileReference, conf: Optional[Mapping[str, Any]] = None) -> ImageResource:
        """
        Calculate the processed version of an image.

        Args:
            file: The original image
            conf: ``width``, ``height`` and ``crop`` with optional ``key.`` sub-configurations

        Returns:
            ImageResource with url and dimensions of the processed image
        """
        conf = conf or {}
        std_wrap = self._std_wrap(file)
        width = std_wrap.value(conf.get("width"), conf.get("width."))
        height = std_wrap.value(conf.get("height"), conf.get("height."))
        crop = std_wrap.value(conf.get("crop"), conf.get("crop.")) or None
        return self.image_processor.process(file, width, height, crop)

    def image_link_wrap(self, content: str, file: FileReference, conf: Union[ImageLinkConfig, Mapping[str, Any]]) -> str:
        """
        Wrap content, usually an image tag, in a link to the enlarged image.

        Args:
            content: The markup to wrap
            file: The image file
            conf: ImageLinkConfig or a TypoScript style mapping

        Returns:
            The linked content, or the content as is when not enabled
        """
        if not isinstance(conf, ImageLinkConfig):
            conf = ImageLinkConfig.model_validate(dict(conf))

        std_wrap = self._std_wrap(file)
        if not is_true(std_wrap.value(conf.enable, conf.enable_wrap)):
            return content

        parameters = self._popup_parameters(conf, std_wrap)
        image = self.get_img_resource(
            file,
            {"width": parameters.get("width", ""), "height": parameters.get("height", ""), "crop": parameters.get("crop")},
        )

        if conf.direct_image_link:
            url = self._public_url(image.url)
        else:
            url = self.showpic.build(file, parameters)

        if conf.std_wrap:
            content = std_wrap.apply(content, conf.std_wrap)

        if not conf.jswindow:
            link_conf = dict(conf.link_params)
            link_conf.pop("returnLast", None)
            link_conf["parameter"] = url
            if conf.target and "fileTarget" not in link_conf:
                link_conf["fileTarget"] = conf.target
            link = self.typolink(content, link_conf)
            return link if isinstance(link, str) else link.to_html()

        js = conf.jswindow_config
        if js.alt_url:
            url = js.alt_url
            if not js.alt_url_no_default_params:
                url += f"?file={quote(file.public_url)}{self.showpic.query(file, parameters)}"

        window_target = hashlib.md5(url.encode()).hexdigest() if js.new_window else self.SHOWPIC_TARGET
        attributes = {
            "href": url,
            "data-window-url": url,
            "data-window-target": window_target,
            "data-window-features": self._window_features(image, conf),
            "target": conf.target or self.SHOWPIC_TARGET,
        }
        for name, value in parse_tag_attributes(self.config.atag_params).items():
            attributes.setdefault(name, value)

        logger.debug(f"Wrapped image {file.public_url} in a pop-up link to {url}")
        return LinkResult(type=LinkType.FILE, url=url, link_text=content, attributes=attributes).to_html()

    def _popup_parameters(self, conf: ImageLinkConfig, std_wrap: StdWrap) -> dict[str, Any]:
        """Pop-up parameters in the order the showpic script expects them."""
        parameters: dict[str, Any] = {}
        if conf.sample:
            parameters["sample"] = 1

        for name, value, wrap in (
            ("width", conf.width, conf.width_wrap),
            ("height", conf.height, conf.height_wrap),
            ("effects", conf.effects, conf.effects_wrap),
            ("bodyTag", conf.body_tag, conf.body_tag_wrap),
            ("title", conf.title, conf.title_wrap),
            ("wrap", conf.wrap, conf.wrap_wrap),
            ("crop", conf.crop, conf.crop_wrap),
        ):
            evaluated = std_wrap.value(value, wrap)
            if evaluated:
                parameters[name] = evaluated
        return parameters

    def _window_features(self, image: ImageResource, conf: ImageLinkConfig) -> str:
        """Window size from the processed image, then ``JSwindow.params`` overrides."""
        expand_x, expand_y = conf.jswindow_config.expand_offsets
        features = {"width": str(image.width + expand_x), "height": str(image.height + expand_y)}
        features.update(self.DEFAULT_WINDOW_FEATURES)

        for param in conf.jswindow_config.params.split(","):
            name, _, value = param.partition("=")
            name, value = name.strip(), value.strip()
            if not name:
                continue
            if value:
                features[name] = value
            else:
                features.pop(name, None)

        return ",".join(f"{name}={value}" for name, value in features.items())

    def _public_url(self, path: str) -> str:
        prefix = self.config.abs_ref_prefix
        if not prefix or path.startswith("/") or "://" in path:
            return path
        return prefix + path

    def _link_config(self, conf: ConfigInput) -> LinkConfig:
        if isinstance(conf, LinkConfig):
            return conf
        return LinkConfig.model_validate(dict(conf))

    def _std_wrap(self, file: Optional[FileReference] = None) -> StdWrap:
        return StdWrap(self.data, file or self.current_file)


def typolink(
    link_text: str,
    conf: ConfigInput,
    config: Optional[RenderConfig] = None,
    page_resolver: Optional[PageResolver] = None,
) -> Union[str, LinkResult]:
    """
    Render a single link without keeping a renderer around.

    Args:
        link_text: Text of the anchor
        conf: LinkConfig or a TypoScript style mapping
        config: Site-wide rendering settings
        page_resolver: Resolver for page links

    Returns:
        See ContentRenderer.typolink
    """
    return ContentRenderer(config, page_resolver).typolink(link_text, conf)
