#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Utility modules for cargo_wrap.
"""

from __future__ import annotations

from .config import BuildConfig, BuildProfile

__all__ = [
    "BuildConfig",
    "BuildProfile",
]
