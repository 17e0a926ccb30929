"""Loading and saving of float images (PFM, TIFF, MRC)."""

from pathlib import Path
from typing import Optional, Tuple

import cv2
import mrcfile
import numpy as np

from pfm_normalize.core.image import FloatImage
from pfm_normalize.errors import ImageLoadError, ImageSaveError

# Formats read and written through OpenCV
OPENCV_EXTENSIONS = {'.pfm', '.tif', '.tiff'}
MRC_EXTENSIONS = {'.mrc'}

# Supported image extensions
IMAGE_EXTENSIONS = OPENCV_EXTENSIONS | MRC_EXTENSIONS


def _load_mrc(file_path: Path) -> Tuple[np.ndarray, Optional[Tuple[float, float, float]]]:
    """Read the full MRC volume and its voxel size."""
    with mrcfile.open(file_path, mode='r', permissive=True) as mrc:
        if mrc.data is None:
            raise ImageLoadError(f"MRC file has no data block: {file_path}")
        data = np.array(mrc.data, dtype=np.float32)
        vs = mrc.voxel_size
        voxel_size = (float(vs.x), float(vs.y), float(vs.z))
    return data, voxel_size


def _load_opencv(file_path: Path) -> np.ndarray:
    """Read a PFM or TIFF file without any depth conversion."""
    img = cv2.imread(str(file_path), cv2.IMREAD_UNCHANGED)
    if img is None:
        raise ImageLoadError(f"Could not decode image: {file_path}")
    return img


def load_image(file_path: Path) -> FloatImage:
    """
    Load a float image from PFM, TIFF or MRC file.

    Args:
        file_path: Path to the image file

    Returns:
        FloatImage holding float32 data

    Raises:
        ImageLoadError: If the file is missing, unsupported or unreadable
    """
    file_path = Path(file_path)
    if not file_path.is_file():
        raise ImageLoadError(f"File not found: {file_path}")

    suffix = file_path.suffix.lower()
    if suffix not in IMAGE_EXTENSIONS:
        raise ImageLoadError(
            f"Unsupported image format: {file_path.suffix}. "
            f"Supported: {', '.join(sorted(IMAGE_EXTENSIONS))}"
        )

    voxel_size = None
    try:
        if suffix in MRC_EXTENSIONS:
            data, voxel_size = _load_mrc(file_path)
        else:
            data = _load_opencv(file_path)
    except ImageLoadError:
        raise
    except (OSError, ValueError, cv2.error) as e:
        raise ImageLoadError(f"Error reading {file_path}: {e}") from e

    return FloatImage(name=str(file_path), data=data, voxel_size=voxel_size)


def save_image(image: FloatImage, output_path: Path) -> None:
    """
    Save a float image; the format follows the output extension.

    Args:
        image: Image to write
        output_path: Destination path (.pfm, .tif, .tiff or .mrc)

    Raises:
        ImageSaveError: If the format is unsupported or writing fails
    """
    output_path = Path(output_path)
    suffix = output_path.suffix.lower()
    if suffix not in IMAGE_EXTENSIONS:
        raise ImageSaveError(
            f"Unsupported output format: {output_path.suffix}. "
            f"Supported: {', '.join(sorted(IMAGE_EXTENSIONS))}"
        )

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if suffix in MRC_EXTENSIONS:
            with mrcfile.new(output_path, overwrite=True) as mrc:
                mrc.set_data(image.data)
                if image.voxel_size is not None:
                    mrc.voxel_size = image.voxel_size
        elif not cv2.imwrite(str(output_path), image.data):
            raise ImageSaveError(f"OpenCV could not write {output_path}")
    except ImageSaveError:
        raise
    except (OSError, ValueError, cv2.error) as e:
        raise ImageSaveError(f"Error writing {output_path}: {e}") from e
