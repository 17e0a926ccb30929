"""I/O utilities for images and reports."""

from pfm_normalize.io.image_io import (
    load_image,
    save_image,
    IMAGE_EXTENSIONS,
)
from pfm_normalize.io.report import save_report

__all__ = [
    "load_image",
    "save_image",
    "IMAGE_EXTENSIONS",
    "save_report",
]
