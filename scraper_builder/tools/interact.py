"""Clicking, typing, scrolling and waiting on the session page."""

from __future__ import annotations

from typing import Literal, Optional

from playwright.async_api import Error as PlaywrightError, Page

from ..config import DEFAULT_CLICK_TIMEOUT_MS, DEFAULT_SCROLL_PIXELS, DEFAULT_WAIT_TIMEOUT_MS
from .base import ToolResult, describe_error, requires_page

ScrollDirection = Literal["up", "down", "top", "bottom"]
ElementState = Literal["visible", "hidden", "attached", "detached"]

SETTLE_AFTER_ACTION_MS = 500
SETTLE_AFTER_SCROLL_MS = 300

_SCROLL_JS = """({ dir, amount }) => {
  switch (dir) {
    case 'up': window.scrollBy(0, -amount); break;
    case 'top': window.scrollTo(0, 0); break;
    case 'bottom': window.scrollTo(0, document.body.scrollHeight); break;
    default: window.scrollBy(0, amount);
  }
}"""

_SCROLL_POSITION_JS = """() => ({
  x: window.scrollX,
  y: window.scrollY,
  pageHeight: document.body.scrollHeight,
  viewportHeight: window.innerHeight
})"""


@requires_page
async def click(
    page: Page,
    selector: str,
    timeout: int = DEFAULT_CLICK_TIMEOUT_MS,
) -> ToolResult:
    try:
        await page.click(selector, timeout=timeout or DEFAULT_CLICK_TIMEOUT_MS)
        await page.wait_for_timeout(SETTLE_AFTER_ACTION_MS)
    except PlaywrightError as exc:
        return {
            "success": False,
            "error": f'Failed to click "{selector}": {describe_error(exc)}',
        }
    return {"success": True, "message": f"Clicked element: {selector}"}


@requires_page
async def type_text(
    page: Page,
    selector: str,
    text: str,
    append: bool = False,
    press_enter: bool = False,
) -> ToolResult:
    """Fill an input, or type after its current value when ``append`` is set."""
    try:
        if append:
            await page.locator(selector).press_sequentially(text)
        else:
            await page.fill(selector, text)
        if press_enter:
            await page.press(selector, "Enter")
            await page.wait_for_timeout(SETTLE_AFTER_ACTION_MS)
    except PlaywrightError as exc:
        return {
            "success": False,
            "error": f'Failed to type into "{selector}": {describe_error(exc)}',
        }
    return {"success": True, "message": f'Typed "{text}" into {selector}'}


@requires_page
async def scroll(
    page: Page,
    direction: ScrollDirection = "down",
    pixels: int = DEFAULT_SCROLL_PIXELS,
    selector: Optional[str] = None,
) -> ToolResult:
    """Scroll the window, or bring ``selector`` into view."""
    if selector:
        try:
            await page.locator(selector).scroll_into_view_if_needed()
        except PlaywrightError as exc:
            return {
                "success": False,
                "error": f"Failed to scroll to element: {describe_error(exc)}",
            }
        return {"success": True, "message": f'Scrolled "{selector}" into view'}

    direction = direction or "down"
    await page.evaluate(
        _SCROLL_JS, {"dir": direction, "amount": pixels or DEFAULT_SCROLL_PIXELS}
    )
    await page.wait_for_timeout(SETTLE_AFTER_SCROLL_MS)
    position = await page.evaluate(_SCROLL_POSITION_JS)
    return {
        "success": True,
        "position": position,
        "message": f"Scrolled {direction}. Position: {position['y']}/{position['pageHeight']}px",
    }


@requires_page
async def wait_for(
    page: Page,
    selector: Optional[str] = None,
    state: ElementState = "visible",
    timeout: int = DEFAULT_WAIT_TIMEOUT_MS,
    network_idle: bool = False,
) -> ToolResult:
    """Wait for network idle or for ``selector`` to reach ``state``."""
    timeout = timeout or DEFAULT_WAIT_TIMEOUT_MS
    if not network_idle and not selector:
        return {"error": "Either selector or networkIdle must be specified"}

    try:
        if network_idle:
            await page.wait_for_load_state("networkidle", timeout=timeout)
            return {"success": True, "message": "Network is idle"}
        state = state or "visible"
        await page.locator(selector).wait_for(state=state, timeout=timeout)
    except PlaywrightError as exc:
        target = f'"{selector}"' if selector else "network idle"
        return {
            "success": False,
            "error": f"Timeout waiting for {target}: {describe_error(exc)}",
        }
    return {"success": True, "message": f'Element "{selector}" is now {state}'}
