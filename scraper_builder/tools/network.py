"""Fetch resources through the page's browser context."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from filetype import guess
from playwright.async_api import Error as PlaywrightError

from ..browser import BrowserSession
from ..config import DEFAULT_DOWNLOAD_TEXT_CHARS
from .base import ToolResult, describe_error

logger = logging.getLogger("scraper_builder")


def detect_binary_type(data: bytes) -> Optional[str]:
    """Return the MIME type of recognizably non-text payloads, else None."""
    kind = guess(data)
    if kind and not kind.mime.startswith("text/"):
        return kind.mime
    return None


async def download_resource(
    session: BrowserSession,
    url: str,
    save_path: Optional[str] = None,
) -> ToolResult:
    """Download ``url`` with the page's cookies; save it or return its text."""
    page = await session.get_page()
    try:
        response = await page.context.request.get(url)
        if not response.ok:
            return {
                "success": False,
                "error": f"Failed to fetch resource: {response.status} {response.status_text}",
            }
        data = await response.body()
    except PlaywrightError as exc:
        return {"success": False, "error": f"Download failed: {describe_error(exc)}"}

    if save_path:
        destination = Path(save_path).expanduser()
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_bytes(data)
        except OSError as exc:
            return {"success": False, "error": f"Download failed: {exc}"}
        logger.info("Downloaded %s to %s (%d bytes)", url, destination, len(data))
        return {
            "success": True,
            "path": str(destination),
            "size": len(data),
            "message": f"Resource downloaded successfully to {destination} ({len(data)} bytes)",
        }

    mime = detect_binary_type(data)
    if mime:
        return {
            "success": True,
            "size": len(data),
            "mime_type": mime,
            "message": f"Binary resource ({mime}, {len(data)} bytes). Pass save_path to store it.",
        }

    text = data.decode("utf-8", errors="replace")
    content = text
    if len(text) > DEFAULT_DOWNLOAD_TEXT_CHARS:
        content = (
            text[:DEFAULT_DOWNLOAD_TEXT_CHARS]
            + f"\n... (truncated, total length: {len(text)})"
        )
    return {"success": True, "size": len(data), "content": content}
