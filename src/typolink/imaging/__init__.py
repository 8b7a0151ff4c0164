"""Image resources and pop-up urls."""

from .file_reference import CropArea, FileReference, parse_crop_area
from .processor import ImageProcessor, ImageResource, parse_dimension
from .showpic import ShowpicUrlBuilder

__all__ = [
    "CropArea",
    "FileReference",
    "ImageProcessor",
    "ImageResource",
    "ShowpicUrlBuilder",
    "parse_crop_area",
    "parse_dimension",
]
