"""
Error and empty-state rendering shared by all pages.

Controllers in utils/state.py reduce every failure to a message string; the
pages hand that string to one of these helpers, so a failed fetch, a failed
action and an empty collection look the same everywhere.
"""

from typing import Optional

import streamlit as st

BACKEND_HINT = "Is the API running? Start it with `uvicorn api.main:app --reload`."


def show_error(message: str, hint: Optional[str] = None) -> None:
    """
    Render a controller error, with an optional line of advice under it.

    Args:
        message: Message from the failed call (ApiError text)
        hint: What the user can try next
    """
    st.error(f"⚠️ {message}")
    if hint:
        st.caption(f"💡 {hint}")


def show_load_error(message: str) -> None:
    """Error for a failed fetch; adds the backend hint when the API was unreachable."""
    hint = BACKEND_HINT if message.startswith("Could not reach backend") else None
    show_error(message, hint)


def show_empty_state(
    title: str,
    subtitle: Optional[str] = None,
    action_label: Optional[str] = None,
    action_page_path: Optional[str] = None,
    key: Optional[str] = None,
) -> None:
    """
    Render an empty collection, optionally with a button leading to the page
    where the user can create the first entry.

    Args:
        title: Bold first line (e.g. "No recipes yet")
        subtitle: Optional explanation below it
        action_label: Button label; no button without it or without action_page_path
        action_page_path: Page to switch to (see ui.layout page constants)
        key: Widget key, needed when one page shows several empty states
    """
    st.info(f"📭 **{title}**")
    if subtitle:
        st.caption(subtitle)

    if action_label and action_page_path:
        if st.button(action_label, key=key, type="primary"):
            st.switch_page(action_page_path)
