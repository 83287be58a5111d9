#!/usr/bin/env python3
"""
Setup script for Bikewatch station traffic map
"""

from pathlib import Path

from setuptools import setup, find_packages

here = Path(__file__).parent

long_description = (here / "README.md").read_text(encoding="utf-8")

with open(here / "requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="bikewatch",
    version="1.0.0",
    author="Bikewatch Team",
    description="Interactive map of bike lanes and bike-share station traffic by time of day",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["bikewatch", "bikewatch.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    include_package_data=True,
)
