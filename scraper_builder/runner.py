"""Execute saved scrapers as isolated child processes."""

from __future__ import annotations

import logging
import subprocess
from typing import Optional

from .config import DEFAULT_RUN_OUTPUT_CHARS
from .errors import ExecutionFailedError, NotFoundError
from .models import RunOutcome
from .process import ProcessRunner, SubprocessRunner
from .results import resolve_latest_output
from .store import ArtifactStore, PathLike
from .utils import normalize_scraper_name, truncate

logger = logging.getLogger("scraper_builder")


class ScraperRunner:
    """Runs one scraper per call and hands successful runs to the resolver.

    The child process is started with the runtime's interpreter and the
    base directory as its working directory. It never sees the server's
    browser session; a scraper that needs a browser launches its own.
    """

    def __init__(
        self,
        store: ArtifactStore,
        process_runner: Optional[ProcessRunner] = None,
        timeout: Optional[float] = None,
        max_output_chars: int = DEFAULT_RUN_OUTPUT_CHARS,
    ) -> None:
        self.store = store
        self.process_runner = process_runner or SubprocessRunner()
        self.timeout = timeout
        self.max_output_chars = max_output_chars

    def run(self, name: str, directory: Optional[PathLike] = None) -> RunOutcome:
        safe_name = normalize_scraper_name(name)
        base_dir = self.store.resolve_base_dir(directory)
        script_path = self.store.script_path(safe_name, base_dir)
        if not script_path.is_file():
            raise NotFoundError(script_path)

        command = (*self.store.runtime.interpreter, str(script_path))
        logger.info("Running scraper %s", safe_name)
        try:
            result = self.process_runner.run(command, cwd=base_dir, timeout=self.timeout)
        except subprocess.TimeoutExpired as exc:
            message = f"Scraper timed out after {exc.timeout} seconds"
            raise ExecutionFailedError(message, self._bound(_timeout_output(exc), message)) from exc
        except OSError as exc:
            message = f"Could not start {command[0]}: {exc}"
            raise ExecutionFailedError(message, message) from exc

        if not result.ok:
            message = f"Command failed with exit code {result.returncode}: {script_path}"
            logger.info("Scraper %s exited with %d", safe_name, result.returncode)
            raise ExecutionFailedError(message, self._bound(result.output, message))

        return resolve_latest_output(
            safe_name,
            base_dir,
            self.store.data_dir(safe_name, base_dir),
            self.store.runtime.data_suffixes,
        )

    def _bound(self, output: str, fallback: str) -> str:
        return truncate(output or fallback, self.max_output_chars)


def _timeout_output(exc: subprocess.TimeoutExpired) -> str:
    parts = []
    for stream in (exc.stdout, exc.stderr):
        if not stream:
            continue
        if isinstance(stream, bytes):
            stream = stream.decode("utf-8", errors="replace")
        parts.append(stream.rstrip("\n"))
    return "\n".join(parts)
