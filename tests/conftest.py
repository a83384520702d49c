"""
Shared fixtures.

Every test gets its own SQLite database file and event log under tmp_path,
so tests never touch data/ and never see each other's rows.
"""

import json
import os
from unittest.mock import patch

# Must be set before sniper.db is imported (it configures the engine on import)
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient

from sniper import db
from sniper.errors import ScrapeError
from sniper.models import ScrapeResult


@pytest.fixture(autouse=True)
def isolated_storage(tmp_path, monkeypatch):
    """Point the database, the event log and the page archive at tmp_path."""
    db.configure_database(f"sqlite:///{tmp_path / 'test.db'}")
    db.init_db()
    monkeypatch.setattr("sniper.events.EVENT_LOG_FILE", tmp_path / "events.log")
    monkeypatch.setenv("PAGE_STORAGE_DIR", str(tmp_path / "pages"))
    yield tmp_path
    db.engine.dispose()


@pytest.fixture
def client():
    """Create a test client for the FastAPI app."""
    from api.main import app

    return TestClient(app)


def recipe_html(title, ingredients, graph=False):
    """Minimal recipe page with a schema.org Recipe in JSON-LD."""
    recipe = {
        "@context": "https://schema.org",
        "@type": "Recipe",
        "name": title,
        "recipeIngredient": ingredients,
    }
    data = {"@context": "https://schema.org", "@graph": [{"@type": "WebPage"}, recipe]} if graph else recipe
    return (
        f"<html><head><title>{title}</title>"
        f'<script type="application/ld+json">{json.dumps(data)}</script>'
        f"</head><body><h1>{title}</h1></body></html>"
    )


@pytest.fixture
def fake_pages():
    """
    Replace the network scraper with an in-memory page registry.

    Usage:
        fake_pages["https://x.test/a"] = ("Pancakes", ["2 cups flour"])
    Unknown URLs fail like an HTTP 404.
    """
    pages = {}

    def _scrape(url, storage_dir=None):
        url = url.strip()
        if url not in pages:
            raise ScrapeError(f"HTTP 404 when fetching URL: {url}")
        title, ingredients = pages[url]
        return ScrapeResult(title=title, html=recipe_html(title, ingredients), saved_file="archive.html")

    with patch("sniper.recipes.scrape", side_effect=_scrape):
        yield pages
