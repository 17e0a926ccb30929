"""Outlier-robust range estimation from order statistics.

The operative range is the pair of trimmed bounds: the c-th smallest and
the c-th largest sample, where c = floor(N * epsilon / 2). With epsilon
equal to zero the trimmed bounds are the true extrema. Either bound can
be replaced by an explicit override.
"""

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from pfm_normalize.errors import EmptySampleError, RangeError


@dataclass(frozen=True)
class ValueRange:
    """Closed interval [minimum, maximum] used for rescaling."""

    minimum: float
    maximum: float

    def __post_init__(self) -> None:
        if math.isnan(self.minimum) or math.isnan(self.maximum):
            raise RangeError(f"Range bounds must be numbers, got {self.minimum} - {self.maximum}")
        if self.maximum < self.minimum:
            raise RangeError(
                f"Range minimum {self.minimum} is above its maximum {self.maximum}"
            )

    @property
    def delta(self) -> float:
        return float(self.maximum) - float(self.minimum)

    @property
    def is_degenerate(self) -> bool:
        return self.delta == 0.0


@dataclass(frozen=True)
class RangeEstimate:
    """Result of range estimation.

    Attributes:
        sample_count: Number of valid samples N.
        trim_count: Number of samples trimmed from each tail (c).
        true_min: Smallest sample (diagnostics only).
        true_max: Largest sample (diagnostics only).
        operative: Range actually used for rescaling.
    """

    sample_count: int
    trim_count: int
    true_min: float
    true_max: float
    operative: ValueRange


def trim_count(sample_count: int, epsilon: float) -> int:
    """
    Number of samples to trim from each tail: floor(N * epsilon / 2).

    Capped at floor((N - 1) / 2) so the trimmed minimum never lies past
    the trimmed maximum. When epsilon > (N - 1) / N the result is therefore
    smaller than the plain floor(N * epsilon / 2); e.g. N = 10, epsilon = 1
    gives 4 instead of 5, selecting the two middle samples.
    """
    c = int(math.floor(sample_count * epsilon / 2))
    return max(0, min(c, (sample_count - 1) // 2))


def select_kth(values: np.ndarray, k: int, descending: bool = False) -> float:
    """
    Return the k-th (0-indexed) element of values under the given ordering.

    Uses a partial partition rather than a full sort. The input is not
    modified.

    Args:
        values: 1-D array of samples
        k: Position in the ordering, 0 <= k < len(values)
        descending: If True, order by "greater than" instead of "less than"

    Returns:
        The selected value
    """
    n = len(values)
    if not 0 <= k < n:
        raise IndexError(f"Selection index {k} out of range for {n} values")
    position = n - 1 - k if descending else k
    return float(np.partition(values, position)[position])


def estimate_range(
    samples: np.ndarray,
    epsilon: float = 0.0,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
) -> RangeEstimate:
    """
    Estimate the operative normalization range from the samples.

    Args:
        samples: 1-D array of valid (non-sentinel, non-NaN) values
        epsilon: Fraction of samples trimmed in total, split over both tails
        minimum: Explicit minimum, used verbatim instead of the estimate
        maximum: Explicit maximum, used verbatim instead of the estimate

    Returns:
        RangeEstimate with true extrema and the operative range

    Raises:
        EmptySampleError: If there are no samples
        RangeError: If the resulting minimum lies above the maximum
    """
    samples = np.asarray(samples, dtype=np.float32).reshape(-1)
    n = samples.size
    if n == 0:
        raise EmptySampleError("No valid values to estimate the range from")

    c = trim_count(n, epsilon)

    true_min = float(samples.min())
    true_max = float(samples.max())

    low = select_kth(samples, c) if minimum is None else float(np.float32(minimum))
    high = select_kth(samples, c, descending=True) if maximum is None else float(np.float32(maximum))

    return RangeEstimate(
        sample_count=n,
        trim_count=c,
        true_min=true_min,
        true_max=true_max,
        operative=ValueRange(low, high),
    )
