#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from setuptools import setup, find_packages

setup(
    name="cargo_wrap",
    version="0.1.0",
    description="Thin wrapper around cargo build with captured output and build logs",
    author="Max Qian",
    author_email="lightapt@example.com",
    packages=find_packages(include=["cargo_wrap", "cargo_wrap.*"]),
    python_requires=">=3.11",
    install_requires=[
        "loguru>=0.5.0",
        "pydantic>=2.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0.0",
            "black>=21.5b2",
            "mypy>=0.812",
        ],
        "test": [
            "pytest>=6.0.0",
            "PyYAML>=6.0",
        ],
        "yaml": ["PyYAML>=6.0"],
    },
    entry_points={
        "console_scripts": [
            "cargo-wrap=cargo_wrap.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Build Tools",
    ],
)
