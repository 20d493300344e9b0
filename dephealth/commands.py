"""Blocking subprocess execution with structured results."""

from __future__ import annotations

import logging
import subprocess
import time
from pathlib import Path

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class CommandResult(BaseModel):
    """Outcome of one external command. ``exit_code`` is -1 if it never ran to completion."""

    argv: list[str]
    cwd: str
    exit_code: int
    duration_ms: int
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class CommandRunner:
    """Runs commands one at a time, without a shell.

    ``stream=False`` discards the child's output; ``stream=True`` lets it
    write straight to the user's terminal.
    """

    def __init__(self, timeout_sec: int | None = None) -> None:
        self.timeout_sec = timeout_sec

    def run(self, argv: list[str], cwd: Path, stream: bool = False) -> CommandResult:
        output = None if stream else subprocess.DEVNULL
        logger.debug("Running %s in %s", " ".join(argv), cwd)
        t0 = time.perf_counter()
        try:
            proc = subprocess.run(
                argv,
                cwd=str(cwd),
                stdin=output,
                stdout=output,
                stderr=output,
                timeout=self.timeout_sec,
                check=False,
            )
            exit_code, error = proc.returncode, ""
        except subprocess.TimeoutExpired:
            exit_code, error = -1, f"Command timed out after {self.timeout_sec}s"
        except FileNotFoundError as e:
            exit_code, error = -1, f"Command not found: {e}"
        except OSError as e:
            exit_code, error = -1, f"Error: {type(e).__name__}: {e}"

        duration_ms = int((time.perf_counter() - t0) * 1000)
        if error:
            logger.warning("%s failed to run in %s: %s", argv[0], cwd, error)
        else:
            logger.debug("%s exited %d after %dms", " ".join(argv), exit_code, duration_ms)

        return CommandResult(
            argv=list(argv),
            cwd=str(cwd),
            exit_code=exit_code,
            duration_ms=duration_ms,
            error=error,
        )
