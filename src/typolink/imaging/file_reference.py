"""File references and crop areas."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CropArea:
    """Crop rectangle with coordinates relative to the image size (0..1)."""

    x: float = 0.0
    y: float = 0.0
    width: float = 1.0
    height: float = 1.0

    @property
    def is_full(self) -> bool:
        return (self.x, self.y, self.width, self.height) == (0.0, 0.0, 1.0, 1.0)

    def apply(self, width: int, height: int) -> tuple[int, int]:
        """Absolute size of the cropped region, truncated to whole pixels."""
        return int(width * self.width), int(height * self.height)


@dataclass
class FileReference:
    """
    A file as used by content elements.

    Attributes:
        uid: Identifier of the file
        public_url: Url of the file relative to the web root, e.g. 'fileadmin/a.jpg'
        width: Original image width in pixels
        height: Original image height in pixels
        crop: Crop variants as JSON, e.g. '{"default":{"cropArea":{...}}}'
        properties: Any further metadata (title, alternative, ...)
    """

    uid: int
    public_url: str
    width: int = 0
    height: int = 0
    crop: str | None = None
    properties: dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return PurePosixPath(self.public_url).name

    def get_property(self, name: str) -> Any:
        """Look up a property by its record field name."""
        builtin = {
            "uid": self.uid,
            "public_url": self.public_url,
            "publicUrl": self.public_url,
            "name": self.name,
            "width": self.width,
            "height": self.height,
            "crop": self.crop,
        }
        if name in builtin:
            return builtin[name]
        return self.properties.get(name)

    def crop_area(self, crop: str | None = None, variant: str = "default") -> CropArea | None:
        """
        Parse the crop area of a variant.

        Args:
            crop: Crop JSON to use instead of the reference's own
            variant: Crop variant name

        Returns:
            CropArea, or None if no usable crop is configured
        """
        return parse_crop_area(crop if crop is not None else self.crop, variant)


def parse_crop_area(crop: str | None, variant: str = "default") -> CropArea | None:
    """
    Parse a crop variant collection.

    Invalid JSON and incomplete areas are ignored.

    Args:
        crop: Crop variants as JSON
        variant: Crop variant name

    Returns:
        CropArea, or None
    """
    if not crop:
        return None

    try:
        variants = json.loads(crop)
        area = variants[variant]["cropArea"]
        return CropArea(
            x=float(area["x"]),
            y=float(area["y"]),
            width=float(area["width"]),
            height=float(area["height"]),
        )
    except (ValueError, KeyError, TypeError) as e:
        logger.debug(f"Ignoring unusable crop configuration {crop!r}: {e}")
        return None
