"""Setup script for pfm-normalize package."""

from setuptools import setup, find_packages

setup(
    name="pfm-normalize",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy>=1.21.0",
        "opencv-python>=4.5.0",
        "mrcfile>=1.4.0",
        "pyyaml>=6.0",
        "click>=8.0",
        "tqdm>=4.60",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pfm-normalize=pfm_normalize.cli.normalize:main",
        ],
    },
)
