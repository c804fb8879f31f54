#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
ChainSieve: Adaptive Statistical Pruning of Assembly Graph Chains

Separates sequencing/PCR noise from real low-frequency branches in local
assembly graphs before variant calling.

Version: 0.1
License: Dual Academic/Commercial (see LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md)
"""

from setuptools import setup, find_packages
import os

here = os.path.dirname(os.path.abspath(__file__))

# Read version from package
version = {}
with open(os.path.join(here, "chainsieve", "version.py")) as f:
    exec(f.read(), version)

# Read long description from README
with open(os.path.join(here, "README.md"), "r", encoding="utf-8") as f:
    long_description = f.read()

# Read requirements from requirements.txt
def read_requirements(filename):
    """Read requirements from file."""
    filepath = os.path.join(here, filename)
    if not os.path.exists(filepath):
        return []
    with open(filepath, "r") as f:
        return [line.strip() for line in f if line.strip() and not line.startswith("#")]

# Basic requirements (always installed)
install_requires = read_requirements("requirements.txt")

# Optional dependencies
extras_require = {
    "dev": read_requirements("requirements-dev.txt"),
}

setup(
    name="chainsieve",
    version=version["__version__"],
    author="ChainSieve Development Team",
    description="Adaptive statistical pruning of low-support chains in assembly graphs",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "License :: Other/Proprietary License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=install_requires,
    extras_require=extras_require,
    zip_safe=False,
    keywords="genome assembly bioinformatics variant-calling graph pruning",
)
