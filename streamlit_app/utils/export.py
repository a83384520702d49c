"""
Shopping list export.

Turns a loaded shopping list into printable text and a minimal HTML page,
and opens that page in a new browser tab.

# NOTE: Item text is inserted into the HTML as-is, without escaping. A name
    like "<b>Salt</b>" renders as markup in the exported tab. Keep it that way
    until there is a decision on how exported lists should treat markup.
"""

import json
from typing import Any, Dict, Iterable, Mapping

import streamlit.components.v1 as components

EXPORT_TEMPLATE = "<html><head><title>{title}</title></head><body><pre>{body}</pre></body></html>"


def format_item(item: Mapping[str, Any]) -> str:
    """
    Build one display line: quantity, unit and name, skipping absent parts.

    Examples:
        >>> format_item({"quantity": "2", "unit": "cups", "name": "Flour"})
        '2 cups Flour'
        >>> format_item({"quantity": None, "unit": None, "name": "Salt"})
        'Salt'
    """
    parts = [item.get("quantity"), item.get("unit"), item.get("name")]
    return " ".join(part for part in parts if part)


def build_export_text(items: Iterable[Mapping[str, Any]]) -> str:
    """Join the display lines with newlines ("" for no items)."""
    return "\n".join(format_item(item) for item in items)


def build_export_html(shopping_list: Dict[str, Any]) -> str:
    """
    Build the exported HTML page for a loaded shopping list.

    Args:
        shopping_list: List detail dict with "name" and "items"

    Returns:
        One HTML document whose title is the list name and whose body is a single
        <pre> block with the export text
    """
    return EXPORT_TEMPLATE.format(
        title=shopping_list["name"],
        body=build_export_text(shopping_list.get("items") or []),
    )


def build_open_tab_script(document: str) -> str:
    """
    Build a <script> that opens a blank tab, writes document and closes the stream.

    The document is embedded as a JS string literal; "</" is split so the
    surrounding <script> element is not terminated early. The tab receives
    the document unchanged.
    """
    literal = json.dumps(document).replace("</", "<\\/")
    return (
        "<script>\n"
        "const tab = window.open('', '_blank');\n"
        "if (tab) {\n"
        f"  tab.document.write({literal});\n"
        "  tab.document.close();\n"
        "}\n"
        "</script>"
    )


def open_in_new_tab(document: str) -> None:
    """Render the open-tab script in a zero-height component."""
    components.html(build_open_tab_script(document), height=0)
