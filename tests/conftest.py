"""Shared fixtures for typolink tests."""

import logging

import pytest
from typolink.imaging import FileReference
from typolink.models.config import RenderConfig


@pytest.fixture(autouse=True)
def reset_typolink_logger():
    """setup_logging() disables propagation; restore it so caplog sees records."""
    yield
    logger = logging.getLogger("typolink")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def render_config():
    return RenderConfig()


@pytest.fixture
def image_file():
    """A 1024x683 image with a full-size crop area."""
    return FileReference(
        uid=1,
        public_url="fileadmin/user_upload/team-t3board10.jpg",
        width=1024,
        height=683,
        crop='{"default":{"cropArea":{"x":0,"y":0,"width":1,"height":1},"selectedRatio":"NaN","focusArea":null}}',
        properties={"title": "The board", "alternative": "Team photo"},
    )
