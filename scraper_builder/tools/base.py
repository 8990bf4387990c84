"""Shared helpers for the page tools."""

from __future__ import annotations

import functools
from typing import Any, Awaitable, Callable, Dict

from playwright.async_api import Page

from ..browser import BrowserSession

NO_PAGE_ERROR = "No page loaded. Use navigate tool first."

ToolResult = Dict[str, Any]


def no_page_response() -> ToolResult:
    return {"error": NO_PAGE_ERROR}


def requires_page(
    func: Callable[..., Awaitable[ToolResult]],
) -> Callable[..., Awaitable[ToolResult]]:
    """Turn ``func(page, ...)`` into ``tool(session, ...)``.

    The wrapped tool fails fast with :data:`NO_PAGE_ERROR` when nothing has
    been navigated yet instead of opening a blank page.
    """

    @functools.wraps(func)
    async def wrapper(session: BrowserSession, *args: Any, **kwargs: Any) -> ToolResult:
        if not session.has_active_page():
            return no_page_response()
        page: Page = await session.get_page()
        return await func(page, *args, **kwargs)

    return wrapper


def describe_error(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__
