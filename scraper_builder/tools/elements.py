"""Element lookup and text extraction by CSS selector."""

from __future__ import annotations

from playwright.async_api import Page

from ..config import DEFAULT_EXTRACT_LIMIT, DEFAULT_FIND_LIMIT
from .base import ToolResult, requires_page

_FIND_ELEMENTS_JS = """({ sel, lim }) => {
  const keep = ['id', 'class', 'href', 'src', 'alt', 'title', 'data-testid',
                'name', 'type', 'value', 'placeholder'];
  return Array.from(document.querySelectorAll(sel)).slice(0, lim).map((el, index) => {
    const rect = el.getBoundingClientRect();
    const attributes = {};
    for (const attr of el.attributes) {
      if (keep.includes(attr.name)) {
        attributes[attr.name] = attr.value.slice(0, 200);
      }
    }
    return {
      index,
      tag: el.tagName.toLowerCase(),
      text: (el.textContent || '').trim().slice(0, 200),
      attributes,
      visible: rect.width > 0 && rect.height > 0,
      position: {
        top: Math.round(rect.top),
        left: Math.round(rect.left),
        width: Math.round(rect.width),
        height: Math.round(rect.height)
      }
    };
  });
}"""

_EXTRACT_TEXT_JS = """({ sel, lim, html }) => {
  return Array.from(document.querySelectorAll(sel)).slice(0, lim).map(el => {
    const result = { text: (el.textContent || '').trim() };
    if (html) {
      result.html = el.innerHTML.slice(0, 500);
    }
    return result;
  });
}"""


@requires_page
async def find_elements(
    page: Page,
    selector: str,
    limit: int = DEFAULT_FIND_LIMIT,
) -> ToolResult:
    """Describe up to ``limit`` elements matching ``selector``."""
    elements = await page.evaluate(
        _FIND_ELEMENTS_JS, {"sel": selector, "lim": limit or DEFAULT_FIND_LIMIT}
    )
    return {
        "success": True,
        "selector": selector,
        "count": len(elements),
        "elements": elements,
    }


@requires_page
async def extract_text(
    page: Page,
    selector: str,
    limit: int = DEFAULT_EXTRACT_LIMIT,
    include_html: bool = False,
) -> ToolResult:
    """Collect trimmed text (and optionally inner HTML) of matching elements."""
    results = await page.evaluate(
        _EXTRACT_TEXT_JS,
        {"sel": selector, "lim": limit or DEFAULT_EXTRACT_LIMIT, "html": include_html},
    )
    return {
        "success": True,
        "selector": selector,
        "count": len(results),
        "results": results,
    }
