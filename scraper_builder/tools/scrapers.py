"""Scraper lifecycle operations as JSON-serializable tool responses.

These functions are the error boundary of the lifecycle: every
``ScraperError`` and filesystem failure is turned into
``{"success": False, "error": ...}`` instead of propagating.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..errors import ScraperError
from ..lifecycle import ScraperLifecycle
from .base import ToolResult

logger = logging.getLogger("scraper_builder")

NO_SCRAPERS_DIR_MESSAGE = "No scrapers directory found."


def save_scraper(
    lifecycle: ScraperLifecycle,
    name: str,
    code: str,
    directory: Optional[str] = None,
    overwrite: bool = False,
) -> ToolResult:
    try:
        saved = lifecycle.save(name, code, directory, overwrite=overwrite)
    except ScraperError as exc:
        return {"success": False, "error": str(exc)}
    except OSError as exc:
        logger.error("Failed to save scraper %s: %s", name, exc)
        return {"success": False, "error": f"Failed to save scraper: {exc}"}

    artifact = saved.artifact
    return {
        "success": True,
        "message": (
            f"Scraper saved to {artifact.path}. NEXT STEP: You MUST now call "
            f'"run_scraper" with name "{artifact.name}" to verify the scraper '
            "works correctly in this environment."
        ),
        "validation_status": saved.validation.message,
        "path": str(artifact.path),
        "current_working_directory": str(artifact.base_dir),
    }


def list_scrapers(
    lifecycle: ScraperLifecycle,
    directory: Optional[str] = None,
) -> ToolResult:
    try:
        catalog = lifecycle.list(directory)
    except OSError as exc:
        logger.error("Failed to list scrapers: %s", exc)
        return {"success": False, "error": f"Failed to list scrapers: {exc}"}

    if not catalog.exists:
        return {
            "success": True,
            "count": 0,
            "scrapers": [],
            "message": NO_SCRAPERS_DIR_MESSAGE,
        }
    return {
        "success": True,
        "count": len(catalog.scrapers),
        "scrapers": [
            {"name": item.name, "path": str(item.path), "size": item.size}
            for item in catalog.scrapers
        ],
        "current_working_directory": str(catalog.base_dir),
    }


def run_scraper(
    lifecycle: ScraperLifecycle,
    name: str,
    directory: Optional[str] = None,
) -> ToolResult:
    try:
        outcome = lifecycle.run(name, directory)
    except ScraperError as exc:
        return {"success": False, "error": str(exc)}
    except OSError as exc:
        logger.error("Failed to run scraper %s: %s", name, exc)
        return {"success": False, "error": f"Failed to run scraper: {exc}"}

    if not outcome.has_data:
        return {"success": True, "message": outcome.message, "data": None}
    return {
        "success": True,
        "message": outcome.message,
        "data_file": str(outcome.data_file),
        "data": outcome.data,
        "current_working_directory": str(outcome.base_dir),
    }
