"""Process access for toolchain version queries."""

from __future__ import annotations

import subprocess
from typing import Callable, Sequence

# Takes the full argv and returns captured stdout bytes. Raises OSError when
# the executable cannot be launched.
CommandRunner = Callable[[Sequence[str]], bytes]


def run_command(args: Sequence[str]) -> bytes:
    """Run ``args`` to completion and return its raw standard output.

    The exit status is not checked and no timeout is applied.
    """
    completed = subprocess.run(
        list(args),
        check=False,
        capture_output=True,
        stdin=subprocess.DEVNULL,
    )
    return completed.stdout


__all__ = ["CommandRunner", "run_command"]
