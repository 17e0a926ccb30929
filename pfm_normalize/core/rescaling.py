"""Linear rescaling of an image into [0, 1] with an outlier policy."""

from dataclasses import dataclass
from enum import Enum

import numpy as np

from pfm_normalize.core.image import FloatImage
from pfm_normalize.core.logging_utils import get_logger
from pfm_normalize.core.range_estimation import ValueRange
from pfm_normalize.core.sampling import sentinel_mask


class OutlierPolicy(Enum):
    """What happens to values outside the operative range."""

    CLAMP = "clamp"      # saturate to 0.0 / 1.0
    DISCARD = "discard"  # replace with the sentinel

    @classmethod
    def from_flag(cls, clamp: bool) -> "OutlierPolicy":
        return cls.CLAMP if clamp else cls.DISCARD

    @property
    def verb(self) -> str:
        """Past-tense verb used when reporting outliers."""
        return "Clamped" if self is OutlierPolicy.CLAMP else "Removed"


@dataclass(frozen=True)
class RescaleResult:
    """Outcome of rescaling one image.

    Attributes:
        rescaled: Number of in-range values mapped into [0, 1].
        below: Number of values below the minimum (NaN counts here).
        above: Number of values above the maximum.
        skipped: Number of sentinel values left untouched.
        policy: Outlier policy that was applied.
        degenerate: True if the range had zero width.
    """

    rescaled: int
    below: int
    above: int
    skipped: int
    policy: OutlierPolicy
    degenerate: bool = False

    @property
    def outliers(self) -> int:
        return self.below + self.above


def rescale_image(
    image: FloatImage,
    value_range: ValueRange,
    sentinel: float,
    policy: OutlierPolicy = OutlierPolicy.DISCARD,
) -> RescaleResult:
    """
    Rescale the image in place into [0, 1].

    Sentinel elements are detected before any range comparison and are
    never modified. Values inside [minimum, maximum] (inclusive) become
    (v - minimum) / delta. Values above the maximum become 1.0 (clamp) or
    the sentinel (discard); every other value becomes 0.0 or the sentinel.

    A zero-width range maps every in-range value to 0.0.

    Args:
        image: Image to modify
        value_range: Operative range
        sentinel: No-value marker
        policy: Outlier policy

    Returns:
        RescaleResult with per-category counts
    """
    values = image.values()
    low = np.float32(value_range.minimum)
    high = np.float32(value_range.maximum)
    # float64 so wide float32 ranges do not overflow to inf
    delta = float(high) - float(low)
    fill = np.float32(sentinel)

    skip = sentinel_mask(values, sentinel)
    candidate = ~skip
    in_range = candidate & (values >= low) & (values <= high)
    above = candidate & (values > high)
    below = candidate & ~in_range & ~above

    degenerate = bool(delta == 0)
    if degenerate:
        get_logger().warning(
            f"Degenerate range {low} - {high}, mapping in-range values to 0.0"
        )
        values[in_range] = np.float32(0.0)
    else:
        scaled = (values[in_range].astype(np.float64) - float(low)) / delta
        values[in_range] = scaled.astype(np.float32)

    if policy is OutlierPolicy.CLAMP:
        values[above] = np.float32(1.0)
        values[below] = np.float32(0.0)
    else:
        values[above] = fill
        values[below] = fill

    return RescaleResult(
        rescaled=int(in_range.sum()),
        below=int(below.sum()),
        above=int(above.sum()),
        skipped=int(skip.sum()),
        policy=policy,
        degenerate=degenerate,
    )
