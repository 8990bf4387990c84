"""Page HTML and simplified DOM outlines for scraper development."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from bs4 import BeautifulSoup, Comment, NavigableString, Tag
from playwright.async_api import Page

from ..config import DEFAULT_CONTENT_MAX_LENGTH
from .base import ToolResult, requires_page

MAX_OUTLINE_DEPTH = 10
MAX_OUTLINE_CHILDREN = 20
MAX_OUTLINE_CLASSES = 5
MAX_OUTLINE_TEXT = 100
SKIPPED_TAGS = {"script", "style", "noscript", "svg", "path"}

_OUTER_HTML_JS = """(sel) => {
  const el = document.querySelector(sel);
  return el ? el.outerHTML : '';
}"""


def _direct_text(tag: Tag) -> str:
    """Join the element's own text nodes, ignoring descendants and comments."""
    pieces = []
    for child in tag.children:
        if isinstance(child, NavigableString) and not isinstance(child, Comment):
            text = child.strip()
            if text:
                pieces.append(text)
    return " ".join(pieces)[:MAX_OUTLINE_TEXT]


def simplify_node(tag: Tag, depth: int = 0) -> Optional[Dict[str, Any]]:
    """Reduce an element to tag, id, classes, short text, links and children."""
    if depth > MAX_OUTLINE_DEPTH:
        return None
    name = tag.name.lower()
    if name in SKIPPED_TAGS:
        return None

    node: Dict[str, Any] = {"tag": name}
    if tag.get("id"):
        node["id"] = tag["id"]
    classes = [cls for cls in tag.get("class") or [] if cls]
    if classes:
        node["class"] = " ".join(classes[:MAX_OUTLINE_CLASSES])

    text = _direct_text(tag)
    if text:
        node["text"] = text

    href = tag.get("href")
    src = tag.get("src")
    test_id = tag.get("data-testid")
    if href:
        node["href"] = href[:MAX_OUTLINE_TEXT]
    if src:
        node["src"] = src[:MAX_OUTLINE_TEXT]
    if test_id:
        node["testId"] = test_id

    children = []
    for child in tag.find_all(True, recursive=False):
        simplified = simplify_node(child, depth + 1)
        if simplified is not None:
            children.append(simplified)
    if children:
        node["children"] = children[:MAX_OUTLINE_CHILDREN]
    return node


def simplify_html(html: str, selector: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """Build the outline for ``selector`` (or ``<body>``) of an HTML document."""
    soup = BeautifulSoup(html, "html.parser")
    root = soup.select_one(selector) if selector else soup.body
    if root is None:
        return {"error": "Element not found"}
    return simplify_node(root)


@requires_page
async def get_page_content(
    page: Page,
    simplified: bool = False,
    selector: Optional[str] = None,
    max_length: int = DEFAULT_CONTENT_MAX_LENGTH,
) -> ToolResult:
    """Return raw HTML, or a JSON outline of the DOM when ``simplified``."""
    max_length = max_length or DEFAULT_CONTENT_MAX_LENGTH

    if simplified:
        structure = simplify_html(await page.content(), selector)
        content = json.dumps(structure, indent=2)
        return {
            "success": True,
            "format": "simplified",
            "content": content[:max_length],
            "truncated": len(content) > max_length,
        }

    if selector:
        html = await page.evaluate(_OUTER_HTML_JS, selector) or ""
        if not html:
            return {"error": f"Element not found: {selector}"}
    else:
        html = await page.content()

    return {
        "success": True,
        "format": "html",
        "content": html[:max_length],
        "truncated": len(html) > max_length,
        "length": len(html),
    }
