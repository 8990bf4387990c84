"""Compose the store, validator and runner into save / list / run."""

from __future__ import annotations

import logging
from typing import Optional

from .config import ServerConfig
from .models import RunOutcome, SavedScraper, ScraperCatalog
from .process import ProcessRunner, SubprocessRunner
from .runner import ScraperRunner
from .store import ArtifactStore, PathLike
from .validation import ScraperValidator

logger = logging.getLogger("scraper_builder")


class ScraperLifecycle:
    """Entry point for managing scrapers as saved, validated, runnable files.

    Each call is independent; the filesystem is the only state carried
    between calls.
    """

    def __init__(
        self,
        config: Optional[ServerConfig] = None,
        process_runner: Optional[ProcessRunner] = None,
    ) -> None:
        self.config = config or ServerConfig()
        runner = process_runner or SubprocessRunner()
        self.store = ArtifactStore(self.config.runtime, self.config.base_dir)
        self.validator = ScraperValidator(
            self.config.runtime,
            runner,
            max_output_chars=self.config.check_output_chars,
        )
        self.runner = ScraperRunner(
            self.store,
            runner,
            timeout=self.config.run_timeout,
            max_output_chars=self.config.run_output_chars,
        )

    def save(
        self,
        name: str,
        code: str,
        directory: Optional[PathLike] = None,
        overwrite: bool = False,
    ) -> SavedScraper:
        """Persist the scraper first, then validate what was written."""
        artifact = self.store.save(name, code, directory, overwrite=overwrite)
        validation = self.validator.validate(artifact.name, code, artifact.base_dir)
        logger.info("Validation for %s: %s", artifact.name, validation.status.value)
        return SavedScraper(artifact=artifact, validation=validation)

    def list(self, directory: Optional[PathLike] = None) -> ScraperCatalog:
        return self.store.list(directory)

    def run(self, name: str, directory: Optional[PathLike] = None) -> RunOutcome:
        return self.runner.run(name, directory)
