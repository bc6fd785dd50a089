#!/usr/bin/env python3
"""
Setup script for the quasicrystal generation package.

Installs the quasicrystal package, its YAML configuration and the
quasicrystal-gen command line entry point.
"""
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="quasicrystal",
    version="0.1.0",
    description="Quasicrystal point patterns, bond graphs and a unified lattice interface",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["quasicrystal", "quasicrystal.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Physics",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "dev": ["pytest>=6.0.0", "pytest-cov>=2.12.0"],
        "recording": ["pandas>=1.3.0", "pyarrow>=5.0.0"],
    },
    entry_points={
        "console_scripts": [
            "quasicrystal-gen=quasicrystal.apps.generate.main:main",
        ],
    },
    package_data={
        "": ["*.yaml", "*.yml"],
    },
    include_package_data=True,
    zip_safe=False,
)
