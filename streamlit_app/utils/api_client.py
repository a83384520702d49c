"""
Backend API Client Module.

This module is the **single source of truth** for all backend API communication.
All HTTP calls to the FastAPI backend should go through functions in this module.

Key principles:
- Every call targets BACKEND_URL + "/api" + a resource path
- JSON in, JSON out
- One attempt per call: no retries and no client-side timeout
- Any failure raises ApiError carrying a human-readable message; views catch
  it and show the message (see streamlit_app/utils/state.py)

Error bodies from the backend look like {"error": "..."}. When a failed
response has no such field, the message is "Request failed: <status>".
"""

import os
from typing import Any, Dict, List, Optional

import requests
import streamlit as st

API_BASE = "/api"


class ApiError(Exception):
    """
    Raised for any failed backend call.

    Attributes:
        status_code: HTTP status, or None when the backend was unreachable
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def get_backend_url() -> str:
    """
    Get the backend API base URL from environment variable or use default.

    Returns:
        Backend URL string with trailing slash removed. Defaults to http://localhost:8000
        for local development; set BACKEND_URL (e.g. in .env) otherwise.
    """
    url = os.getenv("BACKEND_URL", "http://localhost:8000")
    return url.rstrip("/")


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    return body.get("error") or f"Request failed: {response.status_code}"


def _request(method: str, path: str, json: Any = None, params: Optional[Dict[str, Any]] = None) -> Any:
    """
    Issue one call against the API base path.

    Args:
        method: HTTP method
        path: Resource path below /api (e.g. "/recipes/3")
        json: Optional JSON body
        params: Optional query parameters

    Returns:
        Parsed JSON body, or None for empty (204) responses

    Raises:
        ApiError: On a non-2xx status or when the backend cannot be reached
    """
    url = f"{get_backend_url()}{API_BASE}{path}"
    try:
        response = requests.request(method, url, json=json, params=params)
    except requests.exceptions.RequestException as e:
        raise ApiError(f"Could not reach backend at {get_backend_url()}: {e}") from e

    if not response.ok:
        raise ApiError(_error_message(response), status_code=response.status_code)

    if response.status_code == 204 or not response.content:
        return None
    try:
        return response.json()
    except ValueError as e:
        raise ApiError(f"Invalid JSON from backend ({response.status_code})", response.status_code) from e


@st.cache_data(ttl=60)  # Cache for 60 seconds to avoid hitting backend too frequently
def get_health_status() -> Optional[Dict[str, Any]]:
    """
    Check backend health status by calling /health endpoint.

    Returns:
        The /health payload when the backend answers with status "ok", or None
        if the backend is unreachable or unhealthy.
    """
    try:
        response = requests.get(f"{get_backend_url()}/health", timeout=5)
        response.raise_for_status()
        data = response.json()
    except (requests.exceptions.RequestException, ValueError):
        return None
    return data if data.get("status") == "ok" else None


# ---------------------------------------------------------------------------
# Recipes
# ---------------------------------------------------------------------------

def add_recipe(url: str) -> Dict[str, Any]:
    """
    Scrape and store a recipe (POST /api/recipes).

    Returns:
        Recipe detail dict: id, url, title, createdAt, ingredients[{id, name, quantity, unit, rawText}]
    """
    return _request("POST", "/recipes", json={"url": url})


def get_all_recipes(search: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    List recipes (GET /api/recipes), optionally filtered by title.

    Args:
        search: Title substring. Omitted from the query when empty.

    Returns:
        List of summaries: id, url, title, ingredientCount, createdAt
    """
    params = {"search": search} if search else None
    return _request("GET", "/recipes", params=params)


def get_recipe(recipe_id: int) -> Dict[str, Any]:
    """Get one recipe with ingredients (GET /api/recipes/{id})."""
    return _request("GET", f"/recipes/{recipe_id}")


def delete_recipe(recipe_id: int) -> None:
    """Delete a recipe (DELETE /api/recipes/{id})."""
    _request("DELETE", f"/recipes/{recipe_id}")


# ---------------------------------------------------------------------------
# Shopping lists
# ---------------------------------------------------------------------------

def create_shopping_list(name: str, recipe_ids: List[int]) -> Dict[str, Any]:
    """
    Create a shopping list from recipes (POST /api/shopping-lists).

    Returns:
        List detail dict: id, name, createdAt, recipes[], items[{id, name, quantity, unit}]
    """
    return _request("POST", "/shopping-lists", json={"name": name, "recipeIds": recipe_ids})


def get_all_shopping_lists() -> List[Dict[str, Any]]:
    """
    List shopping lists (GET /api/shopping-lists).

    Returns:
        List of summaries: id, name, recipeCount, itemCount, createdAt
    """
    return _request("GET", "/shopping-lists")


def get_shopping_list(list_id: int) -> Dict[str, Any]:
    """Get one shopping list (GET /api/shopping-lists/{id})."""
    return _request("GET", f"/shopping-lists/{list_id}")


def update_shopping_list(list_id: int, name: str, items: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Rename a list and replace all its items (PUT /api/shopping-lists/{id}).

    Args:
        list_id: Shopping list id
        name: New name
        items: Complete collection of {id (None for new rows), name, quantity, unit}

    Returns:
        Updated list detail dict
    """
    return _request("PUT", f"/shopping-lists/{list_id}", json={"name": name, "items": items})


def add_recipes_to_shopping_list(list_id: int, recipe_ids: List[int]) -> Dict[str, Any]:
    """Append recipes to a list (POST /api/shopping-lists/{id}/recipes)."""
    return _request("POST", f"/shopping-lists/{list_id}/recipes", json={"recipeIds": recipe_ids})


def delete_shopping_list(list_id: int) -> None:
    """Delete a shopping list (DELETE /api/shopping-lists/{id})."""
    _request("DELETE", f"/shopping-lists/{list_id}")
