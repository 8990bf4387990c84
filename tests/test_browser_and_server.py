import json

import pytest
from mcp.shared.memory import create_connected_server_and_client_session

from conftest import QUOTES_SCRAPER
from scraper_builder.browser import BrowserSession
from scraper_builder.config import ServerConfig
from scraper_builder.mcp_server import create_server


class Closable:
    def __init__(self, log, label):
        self.log = log
        self.label = label

    async def close(self):
        self.log.append(self.label)

    async def stop(self):
        self.log.append(self.label)


@pytest.mark.asyncio
async def test_new_session_has_no_page_and_closes_cleanly():
    session = BrowserSession()

    assert session.has_active_page() is False
    await session.close()
    await session.close()
    assert session.has_active_page() is False


@pytest.mark.asyncio
async def test_close_releases_page_browser_and_playwright_in_order():
    log = []
    session = BrowserSession()
    session._page = Closable(log, "page")
    session._browser = Closable(log, "browser")
    session._playwright = Closable(log, "playwright")

    await session.close()

    assert log == ["page", "browser", "playwright"]
    assert session.has_active_page() is False


@pytest.mark.asyncio
async def test_server_registers_every_tool(tmp_path):
    server = create_server(ServerConfig(base_dir=tmp_path))

    names = {tool.name for tool in await server.list_tools()}

    assert names == {
        "navigate",
        "screenshot",
        "get_page_content",
        "find_elements",
        "extract_text",
        "click",
        "type",
        "scroll",
        "wait_for",
        "execute_javascript",
        "download_resource",
        "save_scraper",
        "list_scrapers",
        "run_scraper",
    }


@pytest.mark.asyncio
async def test_tool_schemas_hide_the_context_parameter(tmp_path):
    server = create_server(ServerConfig(base_dir=tmp_path))

    tools = {tool.name: tool for tool in await server.list_tools()}

    save_schema = tools["save_scraper"].inputSchema
    assert "ctx" not in save_schema["properties"]
    assert set(save_schema["required"]) == {"name", "code"}
    assert save_schema["properties"]["overwrite"]["default"] is False
    assert tools["click"].inputSchema["properties"]["timeout"]["default"] == 5000


def _payload(result):
    assert result.isError is False
    return json.loads(result.content[0].text)


@pytest.mark.asyncio
async def test_tools_called_through_a_client_use_the_lifespan_resources(tmp_path, passing_runtime):
    server = create_server(ServerConfig(base_dir=tmp_path, runtime=passing_runtime))

    async with create_connected_server_and_client_session(server._mcp_server) as client:
        saved = _payload(
            await client.call_tool("save_scraper", {"name": "quotes", "code": QUOTES_SCRAPER})
        )
        listed = _payload(await client.call_tool("list_scrapers", {}))
        shot = _payload(await client.call_tool("screenshot", {}))

    assert saved["success"] is True
    assert saved["path"] == str(tmp_path / "scrapers" / "quotes.py")
    assert listed["count"] == 1
    assert listed["scrapers"][0]["name"] == "quotes.py"
    assert shot == {"error": "No page loaded. Use navigate tool first."}
