#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Builder implementations for cargo projects.
"""

from .cargo import CargoBuilder, resolve_cargo_path

__all__ = ['CargoBuilder', 'resolve_cargo_path']
