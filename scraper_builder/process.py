"""Blocking child-process execution behind a swappable interface."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional, Protocol, Sequence

from .models import ProcessResult

logger = logging.getLogger("scraper_builder")


class ProcessRunner(Protocol):
    """Runs a command to completion and reports exit code and output.

    Implementations raise ``OSError`` when the command cannot be started and
    ``subprocess.TimeoutExpired`` when ``timeout`` elapses.
    """

    def run(
        self,
        command: Sequence[str],
        cwd: Path,
        timeout: Optional[float] = None,
    ) -> ProcessResult:
        ...


class SubprocessRunner:
    """ProcessRunner backed by :func:`subprocess.run`."""

    def run(
        self,
        command: Sequence[str],
        cwd: Path,
        timeout: Optional[float] = None,
    ) -> ProcessResult:
        logger.debug("Running %s in %s", " ".join(command), cwd)
        completed = subprocess.run(
            list(command),
            cwd=str(cwd),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
        return ProcessResult(
            command=tuple(command),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
