"""Exceptions raised by the scraper lifecycle."""

from __future__ import annotations

from pathlib import Path


class ScraperError(Exception):
    """Base class for lifecycle failures reported back to the caller."""


class ConflictError(ScraperError):
    """A scraper with the same normalized name exists and overwrite is off."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f'Scraper "{path.name}" already exists. Set overwrite: true to replace it.'
        )


class NotFoundError(ScraperError):
    """No scraper file exists for the requested name."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Scraper script not found: {path}")


class ExecutionFailedError(ScraperError):
    """The scraper process could not be started or exited non-zero."""

    def __init__(self, message: str, output: str) -> None:
        self.message = message
        self.output = output
        super().__init__(f"Failed to run scraper: {message}\nOutput: {output}")


class CorruptOutputError(ScraperError):
    """The latest data file exists but does not contain valid JSON."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Scraper output {path} is not valid JSON: {reason}")


class InvalidScraperError(ScraperError):
    """The name or source cannot be stored as a scraper file."""
