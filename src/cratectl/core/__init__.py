"""Shared runtime helpers: context, errors, logging, processes."""
