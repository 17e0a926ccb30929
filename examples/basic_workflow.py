#!/usr/bin/env python3
"""
Example workflow: Collect samples → Estimate one range → Rescale each map

This script demonstrates how to use the pfm-normalize package
programmatically to normalize a folder of depth maps against a single
range estimated over all of them.
"""

from pathlib import Path

from pfm_normalize.core.image import ImageSet
from pfm_normalize.core.range_estimation import estimate_range
from pfm_normalize.core.rescaling import OutlierPolicy, rescale_image
from pfm_normalize.core.sampling import collect_samples
from pfm_normalize.io.image_io import save_image


def main():
    """Normalize every depth map with a range shared across the folder."""

    # Configuration
    depth_folder = Path("data/depth")
    output_folder = Path("results/normalized")
    no_value = -1.0

    names = sorted(str(p) for p in depth_folder.glob("*.pfm"))

    print("=" * 60)
    print(f"Normalizing {len(names)} depth maps")
    print("=" * 60)

    # Step 1: Load every map once and estimate the shared range
    images = ImageSet().load(names)
    samples = collect_samples(images, no_value)
    estimate = estimate_range(samples, epsilon=0.02)
    print(f"{estimate.sample_count} valid values, "
          f"range {estimate.operative.minimum:g} - {estimate.operative.maximum:g}")

    # Step 2: Rescale and save each map (statistics are fixed by now)
    for image in images:
        result = rescale_image(image, estimate.operative, no_value, OutlierPolicy.CLAMP)
        save_image(image, output_folder / Path(image.name).name)
        print(f"  {image.name}: {result.outliers} outliers clamped")

    print("\n" + "=" * 60)
    print("Workflow complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
