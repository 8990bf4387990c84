"""PNG screenshots of the page or a single element."""

from __future__ import annotations

import base64
from typing import Optional

from playwright.async_api import Page

from .base import ToolResult, requires_page


@requires_page
async def screenshot(
    page: Page,
    full_page: bool = False,
    selector: Optional[str] = None,
) -> ToolResult:
    """Capture the viewport, the full page, or one element as base64 PNG."""
    if selector:
        element = await page.query_selector(selector)
        if element is None:
            return {"error": f"Element not found: {selector}"}
        data = await element.screenshot(type="png")
    else:
        data = await page.screenshot(type="png", full_page=full_page)

    return {
        "success": True,
        "image": {
            "type": "image",
            "data": base64.b64encode(data).decode("ascii"),
            "mimeType": "image/png",
        },
        "size": len(data),
        "message": f"Screenshot captured ({round(len(data) / 1024)}KB)",
    }
