"""
PFM Normalize

Rescales float images (depth and confidence maps) into [0, 1] using an
outlier-robust value range estimated over a set of reference images.
"""

__version__ = "0.1.0"
__author__ = "pfm-normalize Contributors"

__all__ = [
    "normalize",
    "load_image",
    "save_image",
    "estimate_range",
    "rescale_image",
]


def __getattr__(name):
    """Lazy import for heavy modules to speed up CLI startup."""
    if name == "normalize":
        from pfm_normalize.core.pipeline import normalize
        return normalize
    elif name == "load_image":
        from pfm_normalize.io.image_io import load_image
        return load_image
    elif name == "save_image":
        from pfm_normalize.io.image_io import save_image
        return save_image
    elif name == "estimate_range":
        from pfm_normalize.core.range_estimation import estimate_range
        return estimate_range
    elif name == "rescale_image":
        from pfm_normalize.core.rescaling import rescale_image
        return rescale_image
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
