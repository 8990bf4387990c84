"""Run ad-hoc JavaScript in the page context."""

from __future__ import annotations

from playwright.async_api import Error as PlaywrightError

from ..browser import BrowserSession
from .base import ToolResult, describe_error

# Evaluated inside the page so that exceptions thrown by the snippet come
# back as data instead of rejecting the evaluate() call.
_EVAL_WRAPPER_JS = """(code) => {
  try {
    return { success: true, result: eval(code) };
  } catch (err) {
    return { success: false, error: String(err && err.message || err) };
  }
}"""


async def execute_javascript(session: BrowserSession, script: str) -> ToolResult:
    """Evaluate ``script`` and return its (JSON-serializable) value."""
    page = await session.get_page()
    try:
        outcome = await page.evaluate(_EVAL_WRAPPER_JS, script)
    except PlaywrightError as exc:
        return {"success": False, "error": f"Tool execution failed: {describe_error(exc)}"}

    if not outcome.get("success"):
        return {"success": False, "error": f"Script execution failed: {outcome.get('error')}"}
    return {"success": True, "result": outcome.get("result")}
