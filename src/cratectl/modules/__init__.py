"""Module discovery and per-module parameter sets."""

from __future__ import annotations

from .locator import MANIFEST_NAME, Module, find_modules, iter_modules, single_module
from .params import ParamSet, parse_param_lines, read_param_sets, tokenize

__all__ = [
    "MANIFEST_NAME",
    "Module",
    "ParamSet",
    "find_modules",
    "iter_modules",
    "parse_param_lines",
    "read_param_sets",
    "single_module",
    "tokenize",
]
