"""
Global CSS Styling for Recipe Sniper.

This module provides load_global_styles() to inject consistent styling
across all pages.
"""

import streamlit as st


def load_global_styles() -> None:
    """
    Inject global CSS styles for the Recipe Sniper app.

    Keeps headings compact, narrows the content column on large screens and
    styles checked shopping-list items.
    """
    css = """
    <style>
        h1, h2, h3 {
            font-weight: 600 !important;
            letter-spacing: 0.02em !important;
        }

        .block-container {
            max-width: 1100px;
            padding-top: 2rem;
        }

        .rs-subtitle {
            color: #6b7280;
            margin-top: -0.75rem;
            margin-bottom: 1rem;
        }

        .rs-checked {
            text-decoration: line-through;
            color: #9ca3af;
        }

        .rs-muted {
            color: #6b7280;
            font-size: 0.9rem;
        }
    </style>
    """
    st.markdown(css, unsafe_allow_html=True)
