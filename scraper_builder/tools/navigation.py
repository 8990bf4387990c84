"""Page navigation."""

from __future__ import annotations

from typing import Literal

from ..browser import BrowserSession
from .base import ToolResult

WaitUntil = Literal["load", "domcontentloaded", "networkidle"]


async def navigate(
    session: BrowserSession,
    url: str,
    wait_until: WaitUntil = "domcontentloaded",
) -> ToolResult:
    """Open ``url`` in the session page, starting the browser if needed."""
    page = await session.get_page()
    await page.goto(url, wait_until=wait_until)
    title = await page.title()
    current_url = page.url
    return {
        "success": True,
        "title": title,
        "url": current_url,
        "message": f'Navigated to "{title}" ({current_url})',
    }
