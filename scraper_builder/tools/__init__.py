"""Tool implementations exposed by the MCP server.

- navigation: navigate
- content: get_page_content
- elements: find_elements, extract_text
- interact: click, type_text, scroll, wait_for
- screenshot: screenshot
- script: execute_javascript
- network: download_resource
- scrapers: save_scraper, list_scrapers, run_scraper
"""

from .content import get_page_content
from .elements import extract_text, find_elements
from .interact import click, scroll, type_text, wait_for
from .navigation import navigate
from .network import download_resource
from .scrapers import list_scrapers, run_scraper, save_scraper
from .screenshot import screenshot
from .script import execute_javascript

__all__ = [
    "navigate",
    "get_page_content",
    "find_elements",
    "extract_text",
    "click",
    "type_text",
    "scroll",
    "wait_for",
    "screenshot",
    "execute_javascript",
    "download_resource",
    "save_scraper",
    "list_scrapers",
    "run_scraper",
]
