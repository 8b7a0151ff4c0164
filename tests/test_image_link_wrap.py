"""Tests for wrapping images in links to their enlarged version."""

import base64
import html
import json
import re
from urllib.parse import parse_qs, urlsplit

import pytest
from typolink import ContentRenderer, RenderConfig

IMAGE_TAG = (
    '<img class="image-embed-item" src="/fileadmin/_processed_/team-t3board10-processed.jpg" '
    'width="500" height="300" loading="lazy" alt="" />'
)
WINDOW_FEATURES = "width=900,height=600,status=0,menubar=0"


@pytest.fixture
def conf():
    return {
        "wrap": '<a href="javascript:close();"> | </a>',
        "width": "900m",
        "height": "600m",
        "JSwindow": "1",
        "JSwindow.": {"newWindow": "0"},
        "crop.": {"data": "file:current:crop"},
        "linkParams.": {"ATagParams.": {"dataWrap": 'class="lightbox" rel="lightbox[{field:uid}]"'}},
        "enable": True,
    }


@pytest.fixture
def renderer(image_file):
    renderer = ContentRenderer(RenderConfig(encryption_key="secret"), data={"uid": 1})
    renderer.set_current_file(image_file)
    return renderer


def decoded_parameters(result: str) -> dict:
    href = html.unescape(re.search(r'href="(.*?)"', result).group(1))
    query = parse_qs(urlsplit(href).query)
    chunks = sorted((k for k in query if k.startswith("parameters[")), key=lambda k: int(k[11:-1]))
    return json.loads(base64.b64decode("".join(query[k][0] for k in chunks)))


class TestImageLinkWrap:
    """Tests for ContentRenderer.image_link_wrap."""

    def test_disabled(self, renderer, image_file, conf):
        """Test that the content is returned as is when not enabled."""
        conf["enable"] = False
        assert renderer.image_link_wrap(IMAGE_TAG, image_file, conf) == IMAGE_TAG

    def test_wraps_in_popup_link(self, renderer, image_file, conf):
        """Test the pop-up link around the image."""
        result = renderer.image_link_wrap(IMAGE_TAG, image_file, conf)
        assert result.startswith('<a href="index.php?eID=tx_cms_showpic&amp;file=1')
        assert result.endswith(IMAGE_TAG + "</a>")
        assert f'data-window-features="{WINDOW_FEATURES}"' in result
        assert 'data-window-target="thePicture"' in result
        assert ' target="thePicture"' in result

    def test_params_override_window_features(self, renderer, image_file, conf):
        """Test that JSwindow.params override, extend and keep the defaults."""
        conf["JSwindow."]["params"] = "width=420,status=1,menubar=1,foo=bar"
        result = renderer.image_link_wrap(IMAGE_TAG, image_file, conf)
        assert 'data-window-features="width=420,height=600,status=1,menubar=1,foo=bar"' in result

    def test_params_remove_window_feature(self, renderer, image_file, conf):
        """Test that an empty value removes a feature."""
        conf["JSwindow."]["params"] = "menubar="
        result = renderer.image_link_wrap(IMAGE_TAG, image_file, conf)
        assert 'data-window-features="width=900,height=600,status=0"' in result

    def test_new_window(self, renderer, image_file, conf):
        """Test that newWindow names the window after the url."""
        conf["JSwindow."]["newWindow"] = "1"
        result = renderer.image_link_wrap(IMAGE_TAG, image_file, conf)
        assert 'data-window-target="thePicture' not in result
        assert re.search(r'data-window-target="[0-9a-f]{32}"', result)

    def test_expand(self, renderer, image_file, conf):
        """Test that expand enlarges the window."""
        conf["JSwindow."]["expand"] = "20,40"
        result = renderer.image_link_wrap(IMAGE_TAG, image_file, conf)
        assert 'data-window-features="width=920,height=640,status=0,menubar=0"' in result

    def test_direct_image_link(self, renderer, image_file, conf):
        """Test linking the processed image instead of the pop-up script."""
        conf["directImageLink"] = "1"
        result = renderer.image_link_wrap(IMAGE_TAG, image_file, conf)
        assert "index.php?eID=tx_cms_showpic&amp;file=1" not in result
        assert '<a href="fileadmin/_processed_' in result
        assert 'data-window-url="fileadmin/_processed_' in result

    def test_alt_url(self, renderer, image_file, conf):
        """Test that altUrl gets the default parameters."""
        conf["JSwindow."]["altUrl"] = "/alternative-url"
        result = renderer.image_link_wrap(IMAGE_TAG, image_file, conf)
        assert '<a href="/alternative-url?file=fileadmin/user_upload/team-t3board10.jpg&amp;md5=' in result

    def test_alt_url_without_default_params(self, renderer, image_file, conf):
        """Test that altUrl_noDefaultParams leaves the alternative url alone."""
        conf["JSwindow."]["altUrl"] = "/alternative-url"
        conf["JSwindow."]["altUrl_noDefaultParams"] = "1"
        result = renderer.image_link_wrap(IMAGE_TAG, image_file, conf)
        assert '<a href="/alternative-url"' in result
        assert 'data-window-url="/alternative-url"' in result
        assert "/alternative-url?file=" not in result

    def test_target(self, renderer, image_file, conf):
        """Test that target changes the anchor target but not the window name."""
        conf["target"] = "myTarget"
        result = renderer.image_link_wrap(IMAGE_TAG, image_file, conf)
        assert ' target="myTarget"' in result
        assert 'data-window-target="thePicture"' in result

    def test_site_atag_params(self, image_file, conf):
        """Test that the site wide ATagParams are added to pop-up links."""
        renderer = ContentRenderer(RenderConfig(ATagParams='data-track="1"'))
        result = renderer.image_link_wrap(IMAGE_TAG, image_file, conf)
        assert 'data-track="1"' in result

    def test_parameters(self, renderer, image_file, conf):
        """Test that configured pop-up parameters are passed in order."""
        parameters = {
            "sample": "1",
            "width": "900m",
            "height": "600m",
            "effects": "gamma=1.3 | flip | rotate=180",
            "bodyTag": '<body style="margin:0; background:#fff;">',
            "title": "My Title",
            "wrap": '<div class="my-wrap">|</div>',
            "crop": image_file.crop,
        }
        result = renderer.image_link_wrap(IMAGE_TAG, image_file, {**conf, **parameters})

        decoded = decoded_parameters(result)
        assert decoded == {**parameters, "sample": 1}
        assert list(decoded) == list(parameters)

    def test_std_wrap(self, renderer, image_file, conf):
        """Test that stdWrap is applied to the content."""
        conf["stdWrap."] = {"append": "TEXT", "append.": {"value": "appendedString"}}
        result = renderer.image_link_wrap(IMAGE_TAG, image_file, conf)
        assert IMAGE_TAG + "appendedString</a>" in result

    def test_without_jswindow_uses_typolink(self, renderer, image_file, conf):
        """Test that linkParams. are used for a plain link."""
        del conf["JSwindow"]
        result = renderer.image_link_wrap(IMAGE_TAG, image_file, conf)
        assert result.startswith('<a href="index.php?eID=tx_cms_showpic&amp;file=1&amp;md5=')
        assert 'class="lightbox" rel="lightbox[1]">' + IMAGE_TAG + "</a>" in result
        assert "data-window-url" not in result

    def test_without_jswindow_target(self, renderer, image_file, conf):
        """Test that target is used for the plain link."""
        del conf["JSwindow"]
        conf["target"] = "_blank"
        result = renderer.image_link_wrap(IMAGE_TAG, image_file, conf)
        assert ' target="_blank"' in result
