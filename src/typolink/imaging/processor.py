"""Computation of processed image dimensions and urls."""

from __future__ import annotations

import hashlib
import logging
import re
from dataclasses import dataclass
from pathlib import PurePosixPath

from .file_reference import FileReference

logger = logging.getLogger(__name__)

_DIMENSION = re.compile(r"^\s*(\d+)\s*([mc]?)\s*$")


@dataclass(frozen=True)
class ImageResource:
    """A processed image: where it lives and how big it is."""

    url: str
    width: int
    height: int
    file: FileReference

    @property
    def is_original(self) -> bool:
        return self.url == self.file.public_url


def parse_dimension(spec: str) -> tuple[int | None, str]:
    """
    Parse a dimension such as ``800``, ``800m`` (maximum) or ``800c`` (crop-scale).

    Returns:
        (pixels or None, mode) where mode is '', 'm' or 'c'
    """
    match = _DIMENSION.match(spec or "")
    if not match:
        return None, ""
    return int(match.group(1)), match.group(2)


def _round(value: float) -> int:
    return int(value + 0.5)


class ImageProcessor:
    """
    Calculates the result of cropping and scaling an image.

    The pixels themselves are processed elsewhere; this class decides the
    target size and the url under which the processed file is published.

    Scaling rules:
        - ``W`` and ``H``: exact size
        - only ``W`` or only ``H``: the other side keeps the aspect ratio
        - ``Wm`` / ``Hm``: fit into the box, never upscale
        - ``Wc`` / ``Hc``: exact size, cropped to fit

    Example:
        processor = ImageProcessor()
        image = processor.process(file, width="400m", height="400m")
        image.width, image.height   # (400, 267) for a 1200x800 original
    """

    PROCESSED_FOLDER = "_processed_"
    PREFIX = "csm_"

    def process(
        self,
        file: FileReference,
        width: str = "",
        height: str = "",
        crop: str | None = None,
    ) -> ImageResource:
        """
        Crop and scale an image.

        Args:
            file: The original file
            width: Width instruction
            height: Height instruction
            crop: Crop JSON overriding the file's own crop

        Returns:
            ImageResource describing the processed image
        """
        source_width, source_height = file.width, file.height

        area = file.crop_area(crop)
        cropped = area is not None and not area.is_full
        if cropped:
            source_width, source_height = area.apply(source_width, source_height)

        target_width, target_height = self.scale(source_width, source_height, width, height)

        if not cropped and (target_width, target_height) == (file.width, file.height):
            return ImageResource(file.public_url, file.width, file.height, file)

        url = self._processed_url(file, target_width, target_height, crop or file.crop or "")
        logger.debug(f"Processed {file.public_url} to {target_width}x{target_height}")
        return ImageResource(url, target_width, target_height, file)

    def scale(self, width: int, height: int, width_spec: str = "", height_spec: str = "") -> tuple[int, int]:
        """
        Compute the target size for the given instructions.

        Args:
            width: Source width
            height: Source height
            width_spec: Width instruction
            height_spec: Height instruction

        Returns:
            (width, height) of the result
        """
        target_width, width_mode = parse_dimension(width_spec)
        target_height, height_mode = parse_dimension(height_spec)

        if not target_width and not target_height:
            return width, height
        if width <= 0 or height <= 0:
            return target_width or width, target_height or height

        if "m" in (width_mode, height_mode):
            ratios = [target / source for target, source in ((target_width, width), (target_height, height)) if target]
            ratio = min(min(ratios), 1.0)
            return _round(width * ratio), _round(height * ratio)

        if "c" in (width_mode, height_mode):
            return target_width or width, target_height or height

        if target_width and target_height:
            return target_width, target_height
        if target_width:
            return target_width, _round(height * target_width / width)
        return _round(width * target_height / height), target_height

    def _processed_url(self, file: FileReference, width: int, height: int, crop: str) -> str:
        path = PurePosixPath(file.public_url)
        storage = path.parts[0] if len(path.parts) > 1 else ""
        checksum = hashlib.sha1(f"{file.uid}|{file.public_url}|{width}x{height}|{crop}".encode()).hexdigest()[:10]
        name = f"{self.PREFIX}{path.stem}_{checksum}{path.suffix}"
        return str(PurePosixPath(storage, self.PROCESSED_FOLDER, name)) if storage else f"{self.PROCESSED_FOLDER}/{name}"
