"""Halt-tiered orchestration of check invocations."""
