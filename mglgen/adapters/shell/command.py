"""
Shell command runner — execute one external tool and capture its output.

stderr is merged into stdout so a failure can be reported with the
tool's output exactly as it printed it. There is no timeout: a hung
tool hangs the run.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from collections.abc import Sequence

from pydantic import BaseModel

from mglgen.adapters.base import ToolError

logger = logging.getLogger(__name__)


class ToolResult(BaseModel):
    """A completed, successful tool invocation."""

    args: list[str]
    return_code: int = 0
    output: str = ""
    duration_ms: int = 0


def is_tool_available(name: str) -> bool:
    """Whether ``name`` resolves to an executable on PATH."""
    return shutil.which(name) is not None


def run_tool(args: Sequence[str]) -> ToolResult:
    """Run ``args`` to completion.

    Raises:
        ToolError: If the executable is missing or exits non-zero.
    """
    argv = [str(a) for a in args]
    start = time.monotonic()

    try:
        result = subprocess.run(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
    except OSError as e:
        raise ToolError(argv, output=str(e)) from e

    elapsed_ms = int((time.monotonic() - start) * 1000)

    if result.returncode != 0:
        raise ToolError(argv, output=result.stdout, return_code=result.returncode)

    tool_result = ToolResult(
        args=argv,
        return_code=result.returncode,
        output=result.stdout,
        duration_ms=elapsed_ms,
    )
    logger.debug("%s (%dms)", " ".join(argv), tool_result.duration_ms)
    return tool_result
