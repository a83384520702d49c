"""
UI building blocks for the Recipe Sniper Streamlit app.

- feedback: error, empty and busy states
- layout: page header, KPI row, sidebar
- styles: global CSS
"""
