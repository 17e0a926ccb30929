"""Normalization pipeline: load, collect, estimate, rescale, save."""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from tqdm import tqdm

from pfm_normalize.config import NormalizationConfig
from pfm_normalize.core.image import FloatImage, ImageSet
from pfm_normalize.core.logging_utils import get_logger
from pfm_normalize.core.range_estimation import RangeEstimate, estimate_range
from pfm_normalize.core.rescaling import RescaleResult, rescale_image
from pfm_normalize.core.sampling import collect_samples, reference_names


@dataclass(frozen=True)
class NormalizationReport:
    """Diagnostics of a normalization run."""

    input_image: str
    output_image: str
    images: tuple
    valid_values: int
    true_min: float
    true_max: float
    minimum: float
    maximum: float
    epsilon: float
    trim_count: int
    policy: str
    outliers: int
    outliers_below: int
    outliers_above: int
    degenerate: bool

    @classmethod
    def build(cls, config: NormalizationConfig, images: tuple,
              estimate: RangeEstimate, result: RescaleResult) -> "NormalizationReport":
        return cls(
            input_image=config.input_image,
            output_image=config.output_image,
            images=images,
            valid_values=estimate.sample_count,
            true_min=estimate.true_min,
            true_max=estimate.true_max,
            minimum=estimate.operative.minimum,
            maximum=estimate.operative.maximum,
            epsilon=config.epsilon,
            trim_count=estimate.trim_count,
            policy=result.policy.value,
            outliers=result.outliers,
            outliers_below=result.below,
            outliers_above=result.above,
            degenerate=result.degenerate,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['images'] = list(self.images)
        return data


def normalize(
    config: NormalizationConfig,
    image_set: Optional[ImageSet] = None,
    saver: Optional[Callable[[FloatImage, Path], None]] = None,
) -> NormalizationReport:
    """
    Normalize config.input_image and write it to config.output_image.

    Every reference image is loaded once; the input image is shared between
    sampling and rescaling. Any failure propagates and nothing is written.

    Args:
        config: Validated normalization settings
        image_set: Image set to load through (default: files on disk)
        saver: Callable writing the result (default: io.image_io.save_image)

    Returns:
        NormalizationReport with the statistics of the run
    """
    logger = get_logger()
    if image_set is None:
        image_set = ImageSet()
    if saver is None:
        from pfm_normalize.io.image_io import save_image
        saver = save_image

    names = reference_names(config.input_image, config.references)
    images = [
        image_set.get(name)
        for name in tqdm(names, desc="Loading", unit="image", disable=not logger.verbose)
    ]
    target = image_set.get(config.input_image)

    samples = collect_samples(images, config.ignore)
    logger.info(f"{samples.size} valid values")

    estimate = estimate_range(
        samples,
        epsilon=config.epsilon,
        minimum=config.minimum,
        maximum=config.maximum,
    )
    logger.info(f"Minimal value: {estimate.true_min:g}")
    logger.info(f"Maximal value: {estimate.true_max:g}")
    logger.info(
        f"Normalizing range {estimate.operative.minimum:g} - {estimate.operative.maximum:g}"
    )

    result = rescale_image(target, estimate.operative, config.ignore, config.policy)
    logger.info(f"{result.policy.verb} {result.outliers} outliers")

    saver(target, Path(config.output_image))
    logger.success(f"Saved {config.output_image}")

    return NormalizationReport.build(config, tuple(names), estimate, result)
