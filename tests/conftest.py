"""Shared pytest fixtures for pfm-normalize tests."""

import pytest
import numpy as np
from pathlib import Path
import tempfile
from typing import Dict

import cv2

from pfm_normalize.core.image import FloatImage, ImageSet
from pfm_normalize.core.logging_utils import get_logger
from pfm_normalize.errors import ImageLoadError


@pytest.fixture(autouse=True, scope="session")
def status_logger():
    """Create the shared logger once, before any CliRunner swaps stdout."""
    return get_logger(verbose=True)


@pytest.fixture(autouse=True)
def verbose_logger(status_logger):
    """Reset verbosity after tests that run the CLI with --quiet."""
    yield
    status_logger.set_verbose(True)


# =============================================================================
# Image Fixtures
# =============================================================================

@pytest.fixture
def ramp_values():
    """The values 0..9 as float32 (scenario data)."""
    return np.arange(10, dtype=np.float32)


@pytest.fixture
def ramp_image(ramp_values):
    """A 2x5 image holding 0..9."""
    return FloatImage(name="ramp.pfm", data=ramp_values.reshape(2, 5).copy())


@pytest.fixture
def depth_map():
    """A 64x64 depth map with invalid (-1) pixels and a few spikes."""
    np.random.seed(42)
    data = np.random.uniform(1.0, 5.0, (64, 64)).astype(np.float32)
    data[:4, :] = -1.0
    data[10, 10] = 500.0
    data[20, 20] = -300.0
    return data


@pytest.fixture
def image_store() -> Dict[str, np.ndarray]:
    """In-memory named images for a fake loader."""
    return {}


@pytest.fixture
def image_set(image_store):
    """ImageSet backed by image_store; records every load."""
    calls = []

    def loader(path: Path) -> FloatImage:
        name = str(path)
        calls.append(name)
        if name not in image_store:
            raise ImageLoadError(f"File not found: {name}")
        return FloatImage(name=name, data=image_store[name].copy())

    images = ImageSet(loader=loader)
    images.calls = calls
    return images


# =============================================================================
# File System Fixtures
# =============================================================================

@pytest.fixture
def temp_output_dir():
    """Create temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def write_pfm(temp_output_dir):
    """Write a float32 array as PFM in the temp dir and return its path."""
    def _write(name: str, data: np.ndarray) -> Path:
        path = temp_output_dir / name
        assert cv2.imwrite(str(path), np.asarray(data, dtype=np.float32))
        return path
    return _write


@pytest.fixture
def ramp_pfm(write_pfm, ramp_values):
    """PFM file holding 0..9 as a 2x5 image."""
    return write_pfm("ramp.pfm", ramp_values.reshape(2, 5))


@pytest.fixture
def temp_config_file(temp_output_dir):
    """Create a temporary config YAML file."""
    import yaml
    config_path = temp_output_dir / "config.yaml"
    with open(config_path, 'w') as f:
        yaml.dump({'normalization': {'epsilon': 0.2, 'clamp': True}}, f)
    return config_path


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "benchmark: mark test as a performance benchmark"
    )
