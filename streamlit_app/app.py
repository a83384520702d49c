"""
Recipe Sniper - Streamlit Frontend Main Entry Point.

This is the main Streamlit application entry point and home page. It sets up
the page configuration, the sidebar with backend status and a short overview
of the stored recipes and shopping lists.

Note: Multi-page routing is handled automatically by Streamlit via the `pages/` folder:
- 01_📖_Recipes: browse/search recipes and build shopping lists from a selection
- 02_➕_Add_Recipe: scrape a recipe from a URL
- 03_🛒_Shopping_Lists: list overview and per-list detail (check off, edit, export)

Run with:
    streamlit run streamlit_app/app.py
"""

import sys
from pathlib import Path

# Add project root to path so `streamlit_app.*` and `api.config` import
# regardless of the working directory
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Import config early to load .env file before any other code accesses environment variables
import api.config  # noqa: F401

import streamlit as st

from streamlit_app.ui.feedback import show_load_error
from streamlit_app.ui.layout import (
    ADD_RECIPE_PAGE,
    RECIPES_PAGE,
    SHOPPING_LISTS_PAGE,
    kpi_row,
    page_header,
    render_sidebar,
)
from streamlit_app.ui.styles import load_global_styles
from streamlit_app.utils import api_client
from streamlit_app.utils.api_client import ApiError
from streamlit_app.utils.session import get_or_create_session_id, page_entered

# Page configuration - must be called before any other Streamlit commands
st.set_page_config(
    page_title="Recipe Sniper",
    page_icon="🎯",
    layout="wide",
    initial_sidebar_state="expanded",
)

get_or_create_session_id()
page_entered("home")

load_global_styles()
render_sidebar()

page_header(
    title="Recipe Sniper",
    subtitle="Paste a recipe link, pick what you want to cook, get one combined shopping list.",
)

try:
    recipes = api_client.get_all_recipes()
    shopping_lists = api_client.get_all_shopping_lists()
except ApiError as e:
    show_load_error(str(e))
else:
    kpi_row([
        {"icon": "📖", "label": "Recipes", "value": len(recipes)},
        {"icon": "🛒", "label": "Shopping lists", "value": len(shopping_lists)},
        {"icon": "🥕", "label": "Ingredients", "value": sum(r.get("ingredientCount", 0) for r in recipes)},
    ])

st.divider()

col_add, col_recipes, col_lists = st.columns(3)
with col_add:
    st.markdown("#### 1. Add recipes")
    st.caption("Paste the URL of any recipe page. Ingredients are read from the page automatically.")
    if st.button("➕ Add a recipe", type="primary", use_container_width=True):
        st.switch_page(ADD_RECIPE_PAGE)
with col_recipes:
    st.markdown("#### 2. Pick recipes")
    st.caption("Select the recipes you want to cook and turn them into a shopping list.")
    if st.button("📖 Browse recipes", use_container_width=True):
        st.switch_page(RECIPES_PAGE)
with col_lists:
    st.markdown("#### 3. Shop")
    st.caption("Check items off, fix quantities, or export a printable list.")
    if st.button("🛒 Shopping lists", use_container_width=True):
        st.switch_page(SHOPPING_LISTS_PAGE)
