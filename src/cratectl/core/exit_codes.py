"""Process exit codes.

Check failures exit with their count, clamped to `MAX_FAILURE_EXIT`, so the
fixed error codes below never collide with a failure count.
"""

from __future__ import annotations

OK = 0
MAX_FAILURE_EXIT = 63
ERR_USAGE = 64
ERR_NOT_MODULE = 65
ERR_TOOL = 69
ERR_VALIDATION = 76
ERR_CONFIG = 78
ERR_INTERNAL = 99


def failure_exit_code(failures: int) -> int:
    if failures <= 0:
        return OK
    return min(failures, MAX_FAILURE_EXIT)
