#!/usr/bin/env python
"""
Setup script for MRCLAM Dataset Pipeline

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

from setuptools import find_packages, setup

setup(
    name="mrclam_pipeline",
    version="0.1.0",
    author="Xiangyu Fu",
    author_email="xiangyu.fu@tum.de",
    description="Validated extraction of the UTIAS multi-robot localization (MRCLAM) dataset",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    license="MIT",
    python_requires=">=3.8",
    packages=find_packages(),
    install_requires=[
        # Core dependencies
        "PyYAML>=5.4",
        "pydantic>=2.0",
        "tqdm>=4.0",

        # Data processing
        "pandas>=1.2",
        "numpy>=1.21",

        # Configuration management
        "omegaconf>=2.3.0",
    ],
    extras_require={
        "test": [
            "pytest>=6.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "extract-mrclam = mrclam_pipeline.extract_cli:main",
        ],
    },
    include_package_data=True,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering :: Robotics",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    keywords="robotics dataset localization mrclam utias",
)
