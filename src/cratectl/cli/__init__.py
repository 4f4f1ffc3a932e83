"""Cratectl CLI package."""

from __future__ import annotations

from importlib import import_module

__all__ = ["build_parser", "fmt_main", "lint_main", "main"]


def build_parser():
    return import_module("cratectl.cli.main").build_parser()


def main(argv=None):
    return import_module("cratectl.cli.main").main(argv)


def fmt_main(argv=None):
    return import_module("cratectl.cli.main").fmt_main(argv)


def lint_main(argv=None):
    return import_module("cratectl.cli.main").lint_main(argv)
