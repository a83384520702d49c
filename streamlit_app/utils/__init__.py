"""
Utility modules for the Streamlit frontend.

This package contains:
- api_client: Backend API communication
- state: View-state controllers used by the pages
- export: Shopping list text/HTML export
- session: Session id, refresh counters and page-entry detection
"""
