"""Float image container and the name-keyed image set."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import numpy as np


@dataclass(eq=False)
class FloatImage:
    """Mutable float32 image identified by the name it was loaded from.

    Attributes:
        name: Name (path string) the image is known by.
        data: Writable float32 array, 2-D or 3-D (channels or slices).
        voxel_size: Optional (x, y, z) voxel size in Angstrom, kept for MRC files.
    """

    name: str
    data: np.ndarray
    voxel_size: Optional[Tuple[float, float, float]] = field(default=None)

    def __post_init__(self) -> None:
        data = np.asarray(self.data, dtype=np.float32)
        if not data.flags.writeable or not data.flags.c_contiguous:
            data = np.ascontiguousarray(data).copy()
        self.data = data

    @property
    def value_count(self) -> int:
        """Number of scalar values in the image."""
        return int(self.data.size)

    @property
    def shape(self) -> Tuple[int, ...]:
        return self.data.shape

    def values(self) -> np.ndarray:
        """Return a flat view of all values (writes go to the image)."""
        return self.data.reshape(-1)

    def __getitem__(self, index: int) -> float:
        return float(self.values()[index])

    def __setitem__(self, index: int, value: float) -> None:
        self.values()[index] = value

    def __len__(self) -> int:
        return self.value_count


Loader = Callable[[Path], FloatImage]


class ImageSet:
    """Owns one shared FloatImage per distinct name.

    Images are loaded lazily on first access. Asking for the same name
    twice returns the very same object, so the target image used for
    sampling is the one that gets rescaled and saved.
    """

    def __init__(self, loader: Optional[Loader] = None) -> None:
        """Initialize an empty image set.

        Args:
            loader: Callable turning a path into a FloatImage. Defaults to
                    pfm_normalize.io.image_io.load_image.
        """
        if loader is None:
            from pfm_normalize.io.image_io import load_image
            loader = load_image
        self._loader = loader
        self._images: Dict[str, FloatImage] = {}

    def get(self, name: str) -> FloatImage:
        """Return the image for name, loading it on first use."""
        image = self._images.get(name)
        if image is None:
            image = self._loader(Path(name))
            image.name = name
            self._images[name] = image
        return image

    def load(self, names: Iterable[str]) -> List[FloatImage]:
        """Load every distinct name once, keeping first-occurrence order."""
        return [self.get(name) for name in dict.fromkeys(names)]

    @property
    def load_count(self) -> int:
        """Number of distinct images loaded so far."""
        return len(self._images)

    def __contains__(self, name: object) -> bool:
        return name in self._images

    def __len__(self) -> int:
        return len(self._images)
