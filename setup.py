"""
Setup script for crs-matrix

Pure-Python package laid out under src/. Runtime dependency is numpy;
scipy is optional (interop with scipy.sparse) and used by the test suite.
"""

from pathlib import Path
from setuptools import setup, find_packages


# Read version from src/crs/__init__.py
def get_version():
    version_file = Path("src/crs/__init__.py")
    if version_file.exists():
        for line in version_file.read_text().splitlines():
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"').strip("'")
    return "0.1.0"


# Read long description from README
def get_long_description():
    readme = Path("README.md")
    if readme.exists():
        return readme.read_text(encoding="utf-8")
    return ""


setup(
    name="crs-matrix",
    version=get_version(),
    description="Compressed sparse row matrices with owned buffers and sparse-aware arithmetic",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "scipy": ["scipy"],
        "test": ["pytest", "scipy"],
    },
    zip_safe=True,
)
