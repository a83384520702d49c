"""
Layout primitives for consistent page structure.

Provides the page header, KPI rows and the shared sidebar.
"""

from typing import Callable, List, Optional

import streamlit as st

from streamlit_app.utils.api_client import get_backend_url, get_health_status

RECIPES_PAGE = "pages/01_📖_Recipes.py"
ADD_RECIPE_PAGE = "pages/02_➕_Add_Recipe.py"
SHOPPING_LISTS_PAGE = "pages/03_🛒_Shopping_Lists.py"


def page_header(title: str, subtitle: Optional[str] = None, right: Optional[Callable[[], None]] = None) -> None:
    """
    Render a consistent page header with title and optional subtitle.

    Args:
        title: Main page title
        subtitle: Optional subtitle/description text
        right: Optional callable that renders right-side content (e.g., buttons)
    """
    if right is not None:
        col_title, col_right = st.columns([3, 1])
        with col_title:
            _title_block(title, subtitle)
        with col_right:
            right()
    else:
        _title_block(title, subtitle)


def _title_block(title: str, subtitle: Optional[str]) -> None:
    st.markdown(f"# {title}")
    if subtitle:
        st.markdown(f'<div class="rs-subtitle">{subtitle}</div>', unsafe_allow_html=True)


def kpi_row(kpis: List[dict]) -> None:
    """
    Render a row of KPI metrics.

    Args:
        kpis: List of dicts with keys label, value and optional icon
    """
    cols = st.columns(len(kpis))
    for col, kpi in zip(cols, kpis):
        with col:
            icon = kpi.get("icon", "")
            label = kpi.get("label", "")
            st.metric(label=f"{icon} {label}" if icon else label, value=kpi.get("value", ""))


def render_sidebar() -> None:
    """Sidebar with branding, navigation shortcuts and backend status."""
    with st.sidebar:
        st.markdown("### 🎯 **Recipe Sniper**")
        st.divider()

        if st.button("➕ Add a recipe", use_container_width=True, key="sidebar_add_recipe"):
            st.switch_page(ADD_RECIPE_PAGE)
        if st.button("🛒 Shopping lists", use_container_width=True, key="sidebar_lists"):
            st.switch_page(SHOPPING_LISTS_PAGE)

        st.divider()
        health = get_health_status()
        if health is not None:
            st.caption(f"🟢 Backend online · v{health.get('version', '?')}")
            if not health.get("database", True):
                st.caption("🟠 Database not answering")
        else:
            st.caption(f"🔴 Backend offline ({get_backend_url()})")
