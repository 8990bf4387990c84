"""Locate and parse the structured output a scraper left behind."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Sequence

from .errors import CorruptOutputError
from .models import RunOutcome

logger = logging.getLogger("scraper_builder")

NO_DATA_DIR_MESSAGE = (
    "Scraper ran successfully, but no data directory was found for this scraper."
)
NO_DATA_FILES_MESSAGE = "Scraper ran successfully, but no JSON data files were found."


def data_files_newest_first(data_dir: Path, suffixes: Sequence[str]) -> List[str]:
    """Return matching file names in descending lexicographic order.

    Ordering is by plain string comparison of the names, so ``9.json``
    sorts ahead of ``10.json``. Modification times are ignored.
    """
    names = [
        entry.name
        for entry in data_dir.iterdir()
        if entry.is_file() and entry.name.endswith(tuple(suffixes))
    ]
    return sorted(names, reverse=True)


def resolve_latest_output(
    name: str,
    base_dir: Path,
    data_dir: Path,
    suffixes: Sequence[str] = (".json",),
) -> RunOutcome:
    """Build the outcome of a successful run from its data directory."""
    if not data_dir.is_dir():
        return RunOutcome(name=name, base_dir=base_dir, message=NO_DATA_DIR_MESSAGE)

    files = data_files_newest_first(data_dir, suffixes)
    if not files:
        return RunOutcome(name=name, base_dir=base_dir, message=NO_DATA_FILES_MESSAGE)

    latest = data_dir / files[0]
    try:
        data = json.loads(latest.read_text(encoding="utf-8"))
    except (ValueError, RecursionError) as exc:
        raise CorruptOutputError(latest, str(exc)) from exc

    logger.info("Loaded %s output from %s", name, latest)
    return RunOutcome(
        name=name,
        base_dir=base_dir,
        message=f"Scraper executed successfully. Retrieved data from {files[0]}",
        data_file=latest,
        data=data,
    )
