"""Tests for LinkFactory and LinkResult."""

import pytest
from typolink.builders import LinkBuilder, TelephoneLinkBuilder
from typolink.core import LinkFactory
from typolink.exceptions import UnableToLinkError
from typolink.models.config import LinkConfig, RenderConfig
from typolink.models.link import LinkResult, LinkType


class TestLinkResult:
    """Tests for the LinkResult model."""

    def test_href_first(self):
        """Test that href is always the first attribute."""
        result = LinkResult(LinkType.URL, "http://a.org", "A", {"target": "_blank", "href": "ignored"})
        assert list(result.attributes) == ["href", "target"]
        assert result.href == "http://a.org"

    def test_with_attribute_keeps_position(self):
        """Test that replacing an attribute does not move it."""
        result = LinkResult(LinkType.FILE, "a.pdf", "A", {"title": "old", "class": "c"})
        result.with_attribute("title", "new")
        assert list(result.attributes) == ["href", "title", "class"]
        assert result.title == "new"

    def test_with_href_updates_url(self):
        """Test that changing the href changes the url."""
        result = LinkResult(LinkType.FILE, "a.pdf").with_attribute("href", "b.pdf")
        assert result.url == "b.pdf"

    def test_without_attribute(self):
        """Test removing attributes."""
        result = LinkResult(LinkType.URL, "http://a.org", "A", {"rel": "x"}).without_attribute("rel")
        assert result.additional_attributes == {}

    def test_main_and_additional_attributes(self):
        """Test the split between dedicated and extra attributes."""
        result = LinkResult(LinkType.URL, "http://a.org", "A", {"target": "_blank", "class": "c", "data-x": "1"})
        assert (result.target, result.css_class, result.title) == ("_blank", "c", None)
        assert result.additional_attributes == {"data-x": "1"}

    def test_to_html(self):
        """Test anchor rendering."""
        result = LinkResult(LinkType.URL, "http://a.org?x=1&y=2", "A & B")
        assert str(result) == '<a href="http://a.org?x=1&amp;y=2">A & B</a>'


class TestLinkFactory:
    """Tests for LinkFactory."""

    def test_builders_follow_protocol(self):
        """Test that the built-in builders satisfy LinkBuilder."""
        assert isinstance(TelephoneLinkBuilder(), LinkBuilder)

    def test_create(self):
        """Test creating a link result."""
        result = LinkFactory(RenderConfig(extTarget="_blank")).create("TYPO3", LinkConfig(parameter="typo3.org"))
        assert result.type == LinkType.URL
        assert result.to_html() == '<a href="http://typo3.org" target="_blank" rel="noreferrer">TYPO3</a>'

    def test_unknown_target_raises(self):
        """Test that the factory reports unresolvable targets."""
        with pytest.raises(UnableToLinkError) as exc_info:
            LinkFactory().create("foo", LinkConfig(parameter="foo"))
        assert exc_info.value.link_text == "foo"

    def test_empty_parameter_raises(self):
        """Test that an empty parameter cannot be linked."""
        with pytest.raises(UnableToLinkError):
            LinkFactory().create("x", LinkConfig())

    def test_register_builder(self):
        """Test replacing the builder of a link type."""

        class ShortTelephoneBuilder:
            link_type = LinkType.TELEPHONE

            def build(self, request):
                return LinkResult(self.link_type, "tel:" + request.classification.value.replace("-", ""), "Call")

        factory = LinkFactory().register_builder(ShortTelephoneBuilder())
        result = factory.create("", LinkConfig(parameter="tel:030-123"))
        assert result.to_html() == '<a href="tel:030123">Call</a>'

    def test_page_without_resolver_message(self):
        """Test the error for page links without resolver."""
        with pytest.raises(UnableToLinkError, match="No page resolver"):
            LinkFactory().create("Home", LinkConfig(parameter="1"))
