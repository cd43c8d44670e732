#!/usr/bin/env python3
"""
SKVS Setup Script
=================
Allows installation of the skvs package.

Usage:
    pip install -e .           # Development install
    pip install -e .[test]     # Development install with test tools
    pip install .              # Regular install
"""

from setuptools import setup, find_namespace_packages

setup(
    name="skvs",
    version="1.0.0",
    packages=find_namespace_packages(include=["skvs", "skvs.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "skvs=skvs.server:main",
        ],
    },
)
