"""MCP server exposing browser tools and the scraper lifecycle."""

# Annotations stay evaluated at runtime: FastMCP finds the ``Context``
# parameter by its type when a tool is registered.

import functools
import json
import logging
import signal
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Callable, Dict, Literal, Optional

import anyio
import anyio.to_thread
from mcp.server.fastmcp import Context, FastMCP
from mcp.types import ImageContent, TextContent

from . import tools
from .browser import BrowserSession
from .config import (
    DEFAULT_CLICK_TIMEOUT_MS,
    DEFAULT_CONTENT_MAX_LENGTH,
    DEFAULT_EXTRACT_LIMIT,
    DEFAULT_FIND_LIMIT,
    DEFAULT_SCROLL_PIXELS,
    DEFAULT_WAIT_TIMEOUT_MS,
    ServerConfig,
    config_from_env,
)
from .lifecycle import ScraperLifecycle

logger = logging.getLogger("scraper_builder.mcp")

SERVER_NAME = "scraper-builder"
INSTRUCTIONS = """
Explore pages with navigate, screenshot, get_page_content, find_elements and
extract_text, then turn what you learned into a reusable scraper with
save_scraper. Always call run_scraper right after saving to verify it.
Scrapers must write JSON output to data/<scraper name>/ under the working
directory so run_scraper can return it.
"""


@dataclass
class AppContext:
    """Resources owned by one server run."""

    config: ServerConfig
    session: BrowserSession
    lifecycle: ScraperLifecycle


def _lifespan_for(config: ServerConfig):
    @asynccontextmanager
    async def app_lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
        session = BrowserSession(headed=config.headed, page_timeout=config.page_timeout)
        logger.info("Starting %s (runtime=%s)", SERVER_NAME, config.runtime.name)
        try:
            yield AppContext(
                config=config,
                session=session,
                lifecycle=ScraperLifecycle(config),
            )
        finally:
            logger.info("Shutting down %s", SERVER_NAME)
            with anyio.CancelScope(shield=True):
                await session.close()

    return app_lifespan


def _app(ctx: Context) -> AppContext:
    return ctx.request_context.lifespan_context


async def _in_thread(func: Callable[..., Dict[str, Any]], *args: Any, **kwargs: Any) -> Dict[str, Any]:
    return await anyio.to_thread.run_sync(functools.partial(func, *args, **kwargs))


async def navigate(
    ctx: Context,
    url: str,
    wait_until: Literal["load", "domcontentloaded", "networkidle"] = "domcontentloaded",
) -> Dict[str, Any]:
    """Navigate to a URL with the Playwright browser. Use this first when
    exploring a site to build a scraper. wait_until controls when navigation
    counts as complete (default: domcontentloaded)."""
    return await tools.navigate(_app(ctx).session, url, wait_until)


async def screenshot(
    ctx: Context,
    full_page: bool = False,
    selector: Optional[str] = None,
):
    """Take a PNG screenshot of the current page (or of the element matching
    selector) to understand the layout before writing scraper code."""
    result = await tools.screenshot(_app(ctx).session, full_page, selector)
    image = result.get("image")
    if not image:
        return result
    summary = {key: result[key] for key in ("success", "size", "message")}
    return [
        ImageContent(type="image", data=image["data"], mimeType=image["mimeType"]),
        TextContent(type="text", text=json.dumps(summary, indent=2)),
    ]


async def get_page_content(
    ctx: Context,
    simplified: bool = False,
    selector: Optional[str] = None,
    max_length: int = DEFAULT_CONTENT_MAX_LENGTH,
) -> Dict[str, Any]:
    """Get the page HTML, or with simplified=true a JSON outline of tag names,
    ids, classes and text snippets. Essential for finding CSS selectors."""
    return await tools.get_page_content(_app(ctx).session, simplified, selector, max_length)


async def find_elements(
    ctx: Context,
    selector: str,
    limit: int = DEFAULT_FIND_LIMIT,
) -> Dict[str, Any]:
    """Find elements matching a CSS selector and describe their tag, text,
    attributes, visibility and position."""
    return await tools.find_elements(_app(ctx).session, selector, limit)


async def extract_text(
    ctx: Context,
    selector: str,
    limit: int = DEFAULT_EXTRACT_LIMIT,
    include_html: bool = False,
) -> Dict[str, Any]:
    """Extract the text content of elements matching a CSS selector."""
    return await tools.extract_text(_app(ctx).session, selector, limit, include_html)


async def click(
    ctx: Context,
    selector: str,
    timeout: int = DEFAULT_CLICK_TIMEOUT_MS,
) -> Dict[str, Any]:
    """Click the element matching a CSS selector (timeout in ms)."""
    return await tools.click(_app(ctx).session, selector, timeout)


async def type_text(
    ctx: Context,
    selector: str,
    text: str,
    append: bool = False,
    press_enter: bool = False,
) -> Dict[str, Any]:
    """Type text into an input field, replacing its content unless append is
    true. Optionally press Enter afterwards."""
    return await tools.type_text(_app(ctx).session, selector, text, append, press_enter)


async def scroll(
    ctx: Context,
    direction: Literal["up", "down", "top", "bottom"] = "down",
    pixels: int = DEFAULT_SCROLL_PIXELS,
    selector: Optional[str] = None,
) -> Dict[str, Any]:
    """Scroll the page, or scroll the element matching selector into view.
    Useful for loading lazy content."""
    return await tools.scroll(_app(ctx).session, direction, pixels, selector)


async def wait_for(
    ctx: Context,
    selector: Optional[str] = None,
    state: Literal["visible", "hidden", "attached", "detached"] = "visible",
    timeout: int = DEFAULT_WAIT_TIMEOUT_MS,
    network_idle: bool = False,
) -> Dict[str, Any]:
    """Wait for an element to reach a state, or for the network to go idle."""
    return await tools.wait_for(_app(ctx).session, selector, state, timeout, network_idle)


async def execute_javascript(ctx: Context, script: str) -> Dict[str, Any]:
    """Execute JavaScript in the page. The value of the last expression is
    returned; document and window are available."""
    return await tools.execute_javascript(_app(ctx).session, script)


async def download_resource(
    ctx: Context,
    url: str,
    save_path: Optional[str] = None,
) -> Dict[str, Any]:
    """Download a resource using the browser context. Saves it to save_path
    when given, otherwise returns its text."""
    return await tools.download_resource(_app(ctx).session, url, save_path)


async def save_scraper(
    ctx: Context,
    name: str,
    code: str,
    directory: Optional[str] = None,
    overwrite: bool = False,
) -> Dict[str, Any]:
    """CRITICAL: Save a reusable scraper script. You MUST ALWAYS follow this
    with run_scraper to verify it works and fix any errors. The name is
    sanitized to a safe file name; directory defaults to the project root.
    The scraper must write JSON files to data/<name>/ under the working
    directory."""
    app = _app(ctx)
    return await _in_thread(
        tools.save_scraper, app.lifecycle, name, code, directory, overwrite=overwrite
    )


async def list_scrapers(ctx: Context, directory: Optional[str] = None) -> Dict[str, Any]:
    """List all saved scraper scripts that can be run."""
    return await _in_thread(tools.list_scrapers, _app(ctx).lifecycle, directory)


async def run_scraper(
    ctx: Context,
    name: str,
    directory: Optional[str] = None,
) -> Dict[str, Any]:
    """Execute a saved scraper and return the newest JSON data it wrote.
    ALWAYS run this after save_scraper. Do not include the file extension."""
    return await _in_thread(tools.run_scraper, _app(ctx).lifecycle, name, directory)


PAGE_TOOLS = (
    navigate,
    screenshot,
    get_page_content,
    find_elements,
    extract_text,
    click,
    scroll,
    wait_for,
    execute_javascript,
    download_resource,
)
SCRAPER_TOOLS = (save_scraper, list_scrapers, run_scraper)


def create_server(config: Optional[ServerConfig] = None) -> FastMCP:
    """Build a FastMCP server whose lifespan owns the browser session."""
    config = config or config_from_env()
    server = FastMCP(
        name=SERVER_NAME,
        instructions=INSTRUCTIONS,
        lifespan=_lifespan_for(config),
    )
    for tool in (*PAGE_TOOLS, *SCRAPER_TOOLS):
        server.add_tool(tool)
    server.add_tool(type_text, name="type")
    return server


def main(config: Optional[ServerConfig] = None, verbose: bool = False) -> None:
    """Entry point for running the MCP server over stdio."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        force=True,
    )
    # SIGTERM unwinds like Ctrl+C so the lifespan closes the browser.
    signal.signal(signal.SIGTERM, signal.default_int_handler)
    server = create_server(config)
    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Interrupted, %s stopped", SERVER_NAME)


if __name__ == "__main__":
    main()
