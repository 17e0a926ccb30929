"""Core range estimation and rescaling for pfm-normalize."""

from pfm_normalize.core.image import FloatImage, ImageSet
from pfm_normalize.core.sampling import collect_samples, reference_names
from pfm_normalize.core.range_estimation import (
    RangeEstimate,
    ValueRange,
    estimate_range,
    select_kth,
)
from pfm_normalize.core.rescaling import OutlierPolicy, RescaleResult, rescale_image

__all__ = [
    "FloatImage",
    "ImageSet",
    "collect_samples",
    "reference_names",
    "RangeEstimate",
    "ValueRange",
    "estimate_range",
    "select_kth",
    "OutlierPolicy",
    "RescaleResult",
    "rescale_image",
]
