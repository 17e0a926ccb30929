"""CLI for the normalization tool."""

import sys

import click
from pathlib import Path
from typing import Optional

from pfm_normalize.config import NormalizationConfig, load_config, split_image_list
from pfm_normalize.errors import ConfigurationError, NormalizeError


@click.command()
@click.argument('in_image')
@click.argument('out_image')
@click.option('--clamp', '-c', is_flag=True, default=False,
              help='Clamp (instead of remove) outliers')
@click.option('--epsilon', '-e', type=float, default=None,
              help='Fraction of outliers to remove [0.0]')
@click.option('--ignore', '-i', type=float, default=None,
              help='Value to ignore [-1.0]')
@click.option('--images', type=str, default=None,
              help='Calculate normalization based on these images (comma separated list). '
                   'If no image is given the normalization is calculated from IN_IMAGE')
@click.option('--minimum', type=float, default=None,
              help='Specify minimum (overrides automatic estimation)')
@click.option('--maximum', type=float, default=None,
              help='Specify maximum (overrides automatic estimation)')
@click.option('--config', type=click.Path(exists=True, path_type=Path),
              help='Path to config file')
@click.option('--report', type=click.Path(path_type=Path),
              help='Write normalization statistics to this JSON file')
@click.option('--quiet', '-q', is_flag=True, default=False,
              help='Only print warnings and errors')
def main(in_image: str, out_image: str, clamp: bool, epsilon: Optional[float],
         ignore: Optional[float], images: Optional[str], minimum: Optional[float],
         maximum: Optional[float], config: Optional[Path], report: Optional[Path],
         quiet: bool):
    """
    Normalizes the pixel values of IN_IMAGE into [0, 1] and writes OUT_IMAGE.

    The value range is estimated from the valid values of the reference
    images (IN_IMAGE is always included). With --epsilon, that fraction of
    values is trimmed from both tails before taking the minimum and maximum.
    Values equal to --ignore are excluded and left untouched. Values outside
    the range are replaced by the ignore value, or clamped with --clamp.

    Supported formats: .pfm, .tif/.tiff and .mrc
    """
    # Lazy import to speed up CLI startup
    from pfm_normalize.core.logging_utils import get_logger
    from pfm_normalize.core.pipeline import normalize
    from pfm_normalize.io.report import save_report

    logger = get_logger(verbose=not quiet)

    try:
        cfg = load_config(config)
        settings = NormalizationConfig.from_config(
            cfg,
            input_image=in_image,
            output_image=out_image,
            epsilon=epsilon,
            ignore=ignore,
            minimum=minimum,
            maximum=maximum,
            clamp=True if clamp else None,
            references=split_image_list(images),
        )
    except ConfigurationError as e:
        raise click.UsageError(str(e))

    try:
        result = normalize(settings)
        if report is not None:
            save_report(result.to_dict(), report)
            logger.success(f"Report written: {report}")
    except NormalizeError as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == '__main__':
    main()
