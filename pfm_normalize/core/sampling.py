"""Collect valid sample values from a set of reference images."""

from typing import Iterable, List, Sequence

import numpy as np

from pfm_normalize.core.image import FloatImage


def reference_names(target: str, references: Sequence[str] = ()) -> List[str]:
    """
    Build the de-duplicated list of images used for statistics.

    The target is always part of the set. Names are compared by exact
    string identity; the first occurrence wins the position.

    Args:
        target: Name of the image to normalize
        references: Explicit reference image names (may be empty)

    Returns:
        Ordered list of distinct image names
    """
    names = list(references) if references else [target]
    names.append(target)
    return list(dict.fromkeys(names))


def sentinel_mask(values: np.ndarray, sentinel: float) -> np.ndarray:
    """
    Boolean mask of elements exactly equal to the sentinel.

    A NaN sentinel matches NaN elements, otherwise the test is plain
    float equality with no tolerance.
    """
    sentinel = np.float32(sentinel)
    if np.isnan(sentinel):
        return np.isnan(values)
    return values == sentinel


def collect_samples(images: Iterable[FloatImage], sentinel: float) -> np.ndarray:
    """
    Concatenate the valid values of all images into one sample sequence.

    Values equal to the sentinel are dropped, and so are NaNs since they
    have no place in an order statistic.

    Args:
        images: Images to sample (each distinct image should appear once)
        sentinel: No-value marker

    Returns:
        1-D float32 array of valid samples
    """
    chunks = []
    for image in images:
        values = image.values()
        keep = ~sentinel_mask(values, sentinel) & ~np.isnan(values)
        chunks.append(values[keep])

    if not chunks:
        return np.empty(0, dtype=np.float32)
    return np.concatenate(chunks).astype(np.float32, copy=False)
