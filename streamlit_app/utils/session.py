"""
Session management utilities for Streamlit pages.

This module provides:
- a persistent per-browser-session id (sent along with export events)
- refresh counters: integers the app bumps after a mutation so that views
  showing the affected data re-fetch it
- page-entry detection, so a view can re-fetch whenever the user navigates to it
"""

import uuid
from typing import Any, Callable, MutableMapping, Optional, TypeVar

import streamlit as st

SESSION_ID_KEY = "session_id"
ACTIVE_PAGE_KEY = "active_page"

RECIPES_REFRESH = "recipes"
SHOPPING_LISTS_REFRESH = "shopping_lists"

T = TypeVar("T")


def _state(store: Optional[MutableMapping[str, Any]]) -> MutableMapping[str, Any]:
    return st.session_state if store is None else store


def get_or_create_session_id(store: Optional[MutableMapping[str, Any]] = None) -> str:
    """
    Get or create a persistent session ID stored in st.session_state.

    The same id is reused across all pages within one browser session; a
    page reload or a new tab starts a new session.

    Returns:
        Session ID string (UUID format)
    """
    state = _state(store)
    if SESSION_ID_KEY not in state:
        state[SESSION_ID_KEY] = str(uuid.uuid4())
    return state[SESSION_ID_KEY]


def get_refresh_counter(name: str, store: Optional[MutableMapping[str, Any]] = None) -> int:
    """Current value of a refresh counter (0 if never bumped)."""
    return _state(store).get(f"refresh_{name}", 0)


def bump_refresh_counter(name: str, store: Optional[MutableMapping[str, Any]] = None) -> int:
    """
    Increment a refresh counter.

    Example:
        >>> bump_refresh_counter(RECIPES_REFRESH, {})
        1
    """
    state = _state(store)
    key = f"refresh_{name}"
    state[key] = state.get(key, 0) + 1
    return state[key]


def page_entered(page: str, store: Optional[MutableMapping[str, Any]] = None) -> bool:
    """
    Record the current page and report whether the user just navigated to it.

    Returns:
        True on the first run after switching to page, False on reruns of the same page
    """
    state = _state(store)
    entered = state.get(ACTIVE_PAGE_KEY) != page
    state[ACTIVE_PAGE_KEY] = page
    return entered


def get_view_state(key: str, factory: Callable[[], T], store: Optional[MutableMapping[str, Any]] = None) -> T:
    """
    Get a view-state controller from session state, creating it on first use.

    Args:
        key: Session state key
        factory: Zero-argument callable building a fresh controller
    """
    state = _state(store)
    if key not in state:
        state[key] = factory()
    return state[key]
