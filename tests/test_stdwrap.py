"""Tests for stdWrap evaluation and checkIf."""

import logging

import pytest
from typolink import ContentRenderer
from typolink.content import StdWrap


@pytest.fixture
def std_wrap(image_file):
    return StdWrap(data={"header": "Hello", "uid": 12, "known": "somevalue", "empty": ""}, current_file=image_file)


class TestStdWrapValue:
    """Tests for StdWrap.value."""

    def test_without_conf(self, std_wrap):
        """Test that the plain value is returned as string."""
        assert std_wrap.value("plain", None) == "plain"
        assert std_wrap.value(42, None) == "42"
        assert std_wrap.value(None, None) == ""

    def test_field(self, std_wrap):
        """Test reading a field of the current record."""
        assert std_wrap.value("", {"field": "header"}) == "Hello"

    def test_data_alternatives(self, std_wrap):
        """Test that '//' alternatives are tried in order."""
        assert std_wrap.value("", {"data": "field:missing // field:header"}) == "Hello"

    def test_data_current_file(self, std_wrap):
        """Test reading properties of the current file."""
        assert std_wrap.value("", {"data": "file:current:title"}) == "The board"
        assert std_wrap.value("", {"data": "file:current:uid"}) == "1"

    def test_data_unknown_key(self, std_wrap, caplog):
        """Test that unsupported getText keys resolve to an empty string."""
        with caplog.at_level(logging.DEBUG, logger="typolink"):
            assert std_wrap.value("x", {"data": "register:foo"}) == ""
        assert "Unsupported getText key" in caplog.text

    def test_override(self, std_wrap):
        """Test that a non-blank override replaces the value."""
        assert std_wrap.value("a", {"override": "b"}) == "b"
        assert std_wrap.value("a", {"override": "  "}) == "a"

    def test_if_empty(self, std_wrap):
        """Test the fallback for empty values."""
        assert std_wrap.value("", {"field": "empty", "ifEmpty": "fallback"}) == "fallback"

    def test_trim_and_html_special_chars(self, std_wrap):
        """Test trimming and escaping."""
        assert std_wrap.value(" <b> ", {"trim": 1, "htmlSpecialChars": 1}) == "&lt;b&gt;"

    def test_wrap(self, std_wrap):
        """Test wrapping around the pipe."""
        assert std_wrap.value("x", {"wrap": "<p> | </p>"}) == "<p>x</p>"

    def test_data_wrap(self, std_wrap):
        """Test that dataWrap inserts getText values."""
        conf = {"dataWrap": 'class="lightbox" rel="lightbox[{field:uid}]"'}
        assert std_wrap.value("", conf) == 'class="lightbox" rel="lightbox[12]"'

    def test_cobject_text(self, std_wrap):
        """Test that a TEXT content object replaces the value."""
        conf = {"cObject": "TEXT", "cObject.": {"value": "http://typo3.com"}}
        assert std_wrap.value("http://typo3.org", conf) == "http://typo3.com"

    def test_unsupported_cobject(self, std_wrap):
        """Test that other content objects render nothing."""
        assert std_wrap.value("x", {"cObject": "IMAGE"}) == ""

    def test_prepend_and_append(self, std_wrap):
        """Test TEXT objects before and after the content."""
        conf = {"prepend": "TEXT", "prepend.": {"value": "["}, "append": "TEXT", "append.": {"field": "header"}}
        assert std_wrap.value("x", conf) == "[xHello"

    def test_current(self):
        """Test that current = 1 uses the current value."""
        std_wrap = StdWrap(current="<b>inner</b>")
        assert std_wrap.value("", {"current": "1"}) == "<b>inner</b>"
        assert std_wrap.value("", {"data": "current"}) == "<b>inner</b>"

    def test_tag_parameters(self):
        """Test reading attributes of a parsed tag."""
        std_wrap = StdWrap(parameters={"href": "typo3.org", "target": "_blank"})
        assert std_wrap.value("", {"data": "parameters:href"}) == "typo3.org"
        assert std_wrap.value("", {"data": "parameters : allParams"}) == 'href="typo3.org" target="_blank"'
        assert std_wrap.value("", {"data": "parameters:title"}) == ""


class TestCheckIf:
    """Tests for checkIf."""

    @pytest.mark.parametrize(
        "conf,expected",
        [
            ({"isNull.": {"field": "unknown"}}, True),
            ({"isNull.": {"field": "known"}}, False),
            ({"isTrue": "1"}, True),
            ({"isTrue": "0"}, False),
            ({"isTrue.": {"field": "known"}}, True),
            ({"isFalse": ""}, True),
            ({"isFalse.": {"field": "known"}}, False),
            ({"isTrue": "1", "isFalse": "1"}, False),
            ({}, True),
            (None, True),
        ],
    )
    def test_check_if(self, std_wrap, conf, expected):
        """Test the supported conditions."""
        assert std_wrap.check_if(conf) is expected

    def test_renderer_check_if(self):
        """Test checkIf against the renderer's data record."""
        renderer = ContentRenderer(data={"known": "somevalue"})
        assert renderer.check_if({"isNull.": {"field": "unknown"}}) is True
        assert renderer.check_if({"isNull.": {"field": "known"}}) is False

    def test_renderer_std_wrap(self):
        """Test stdWrap through the renderer."""
        renderer = ContentRenderer(data={"header": "Hi"})
        assert renderer.std_wrap("x", {"field": "header", "wrap": "<h1>|</h1>"}) == "<h1>Hi</h1>"
        assert renderer.std_wrap("x", None) == "x"
