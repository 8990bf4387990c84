"""Static validation of saved scrapers.

Validation never executes a scraper. It runs two gates in order:

1. A textual convention check that the source builds its output path as
   ``data/<scraper name>`` under the working directory. Matching is a plain
   substring test against the runtime's accepted patterns.
2. The runtime's no-emit static checker over the whole project. Only
   reached when the first gate passes.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Iterable, Optional

from .config import DEFAULT_CHECK_OUTPUT_CHARS, PYTHON_RUNTIME, ScraperRuntime
from .models import ValidationResult
from .process import ProcessRunner, SubprocessRunner
from .utils import truncate

logger = logging.getLogger("scraper_builder")

DATA_PATH_WARNING = """Data Path Warning:
The scraper does not seem to save data to a subdirectory (e.g., "data/scraper_name/").
Please ensure your code defines:
{hint}
This is required for the "run_scraper" tool to find your data."""


def follows_data_path_convention(code: str, patterns: Iterable[str]) -> bool:
    """Return True when ``code`` contains any accepted output-path shape."""
    return any(pattern in code for pattern in patterns)


class ScraperValidator:
    """Runs the convention gate and, if it passes, the static checker."""

    def __init__(
        self,
        runtime: ScraperRuntime = PYTHON_RUNTIME,
        process_runner: Optional[ProcessRunner] = None,
        max_output_chars: int = DEFAULT_CHECK_OUTPUT_CHARS,
    ) -> None:
        self.runtime = runtime
        self.process_runner = process_runner or SubprocessRunner()
        self.max_output_chars = max_output_chars

    def validate(self, name: str, code: str, project_dir: Path) -> ValidationResult:
        if not follows_data_path_convention(code, self.runtime.data_path_patterns):
            logger.info("Scraper %s does not follow the data path convention", name)
            return ValidationResult.warning(
                DATA_PATH_WARNING.format(hint=self.runtime.hint_for(name))
            )
        return self.check_project(project_dir)

    def check_project(self, project_dir: Path) -> ValidationResult:
        label = self.runtime.check_label
        try:
            result = self.process_runner.run(self.runtime.check_command, cwd=project_dir)
        except (OSError, subprocess.SubprocessError) as exc:
            logger.warning("Static checker could not run in %s: %s", project_dir, exc)
            return ValidationResult.failed(label, truncate(str(exc), self.max_output_chars))

        if result.ok:
            return ValidationResult.passed(label)

        diagnostics = result.stdout.strip() or result.stderr.strip()
        if not diagnostics:
            diagnostics = f"Command exited with status {result.returncode}"
        logger.info("Static check failed in %s (exit %d)", project_dir, result.returncode)
        return ValidationResult.failed(label, truncate(diagnostics, self.max_output_chars))
