"""Data models used throughout the scraper lifecycle."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Tuple


class ValidationStatus(str, Enum):
    """Outcome of validating a freshly saved scraper."""

    PASSED = "passed"
    WARNING = "warning"
    FAILED = "failed"


@dataclass
class ValidationResult:
    """Advisory verdict attached to a save; never blocks persistence."""

    status: ValidationStatus
    message: str

    @classmethod
    def passed(cls, label: str) -> "ValidationResult":
        return cls(ValidationStatus.PASSED, f"{label} Passed")

    @classmethod
    def warning(cls, reason: str) -> "ValidationResult":
        return cls(ValidationStatus.WARNING, reason)

    @classmethod
    def failed(cls, label: str, diagnostics: str) -> "ValidationResult":
        return cls(ValidationStatus.FAILED, f"{label} Failed:\n{diagnostics}")


@dataclass
class ScraperArtifact:
    """Persisted scraper source file."""

    name: str
    code: str
    base_dir: Path
    path: Path


@dataclass
class SavedScraper:
    """Artifact written by ``save`` together with its validation verdict."""

    artifact: ScraperArtifact
    validation: ValidationResult


@dataclass
class ScraperListing:
    """A scraper file discovered on disk."""

    name: str
    path: Path
    size: int


@dataclass
class ScraperCatalog:
    """Result of listing the scrapers directory of a base directory."""

    base_dir: Path
    exists: bool
    scrapers: List[ScraperListing] = field(default_factory=list)


@dataclass
class ProcessResult:
    """Exit status and captured streams of a finished child process."""

    command: Tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Combined stdout and stderr, skipping empty streams."""
        parts = [part for part in (self.stdout, self.stderr) if part and part.strip()]
        return "\n".join(part.rstrip("\n") for part in parts)


@dataclass
class RunOutcome:
    """Successful run of a scraper and whatever structured output it left."""

    name: str
    base_dir: Path
    message: str
    data_file: Optional[Path] = None
    data: Any = None

    @property
    def has_data(self) -> bool:
        return self.data_file is not None
