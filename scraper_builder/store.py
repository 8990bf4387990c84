"""Filesystem persistence for scraper sources and their data directories."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

from .config import DATA_DIRNAME, SCRAPERS_DIRNAME, PYTHON_RUNTIME, ScraperRuntime
from .errors import ConflictError, InvalidScraperError
from .models import ScraperArtifact, ScraperCatalog, ScraperListing
from .utils import normalize_scraper_name

logger = logging.getLogger("scraper_builder")

PathLike = Union[str, os.PathLike]


class ArtifactStore:
    """Lays out ``scrapers/`` and ``data/<name>/`` beneath a base directory.

    The base directory is resolved per call: an explicit ``directory``
    argument wins, then the store's configured default, then the process
    working directory at call time.
    """

    def __init__(
        self,
        runtime: ScraperRuntime = PYTHON_RUNTIME,
        default_base_dir: Optional[PathLike] = None,
    ) -> None:
        self.runtime = runtime
        self.default_base_dir = Path(default_base_dir) if default_base_dir else None

    def resolve_base_dir(self, directory: Optional[PathLike] = None) -> Path:
        if directory:
            return Path(directory).expanduser()
        if self.default_base_dir is not None:
            return self.default_base_dir
        return Path.cwd()

    def scrapers_dir(self, directory: Optional[PathLike] = None) -> Path:
        return self.resolve_base_dir(directory) / SCRAPERS_DIRNAME

    def script_path(self, name: str, directory: Optional[PathLike] = None) -> Path:
        safe_name = normalize_scraper_name(name)
        return self.scrapers_dir(directory) / f"{safe_name}{self.runtime.source_suffix}"

    def data_dir(self, name: str, directory: Optional[PathLike] = None) -> Path:
        safe_name = normalize_scraper_name(name)
        return self.resolve_base_dir(directory) / DATA_DIRNAME / safe_name

    def save(
        self,
        name: str,
        code: str,
        directory: Optional[PathLike] = None,
        overwrite: bool = False,
    ) -> ScraperArtifact:
        """Write scraper source, refusing to replace an existing file unless asked."""
        safe_name = normalize_scraper_name(name)
        if not safe_name:
            raise InvalidScraperError("Scraper name must not be empty.")
        try:
            source = code.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise InvalidScraperError(f"Scraper code cannot be encoded as UTF-8: {exc}") from exc

        base_dir = self.resolve_base_dir(directory)
        (base_dir / SCRAPERS_DIRNAME).mkdir(parents=True, exist_ok=True)
        (base_dir / DATA_DIRNAME).mkdir(parents=True, exist_ok=True)

        path = self.script_path(safe_name, base_dir)
        if path.exists() and not overwrite:
            raise ConflictError(path)

        path.write_bytes(source)
        logger.info("Saved scraper %s to %s", safe_name, path)
        return ScraperArtifact(name=safe_name, code=code, base_dir=base_dir, path=path)

    def list(self, directory: Optional[PathLike] = None) -> ScraperCatalog:
        """Enumerate scraper files in filesystem order."""
        base_dir = self.resolve_base_dir(directory)
        scrapers_dir = base_dir / SCRAPERS_DIRNAME
        if not scrapers_dir.is_dir():
            return ScraperCatalog(base_dir=base_dir, exists=False)

        listings = []
        with os.scandir(scrapers_dir) as entries:
            for entry in entries:
                if not entry.is_file():
                    continue
                if not entry.name.endswith(self.runtime.listed_suffixes):
                    continue
                listings.append(
                    ScraperListing(
                        name=entry.name,
                        path=Path(entry.path),
                        size=entry.stat().st_size,
                    )
                )
        return ScraperCatalog(base_dir=base_dir, exists=True, scrapers=listings)
