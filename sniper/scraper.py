"""
Recipe page scraper.

Fetches a recipe page with browser-like headers, archives the raw HTML to disk
and extracts the page title. Ingredient parsing lives in sniper.extraction.

Usage:
    >>> result = scrape("https://example.com/pancakes")
    >>> result.title
    'Fluffy Pancakes'
"""

import logging
import re
from pathlib import Path
from typing import Optional, Union

import requests
from bs4 import BeautifulSoup

from api.config import ScrapeConfig
from sniper.errors import ScrapeError
from sniper.models import ScrapeResult

logger = logging.getLogger(__name__)

# Characters outside this set are replaced with "_" in archive filenames
_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")
MAX_FILENAME_LENGTH = 200


def archive_filename(url: str) -> str:
    """
    Build the archive filename for a URL.

    Args:
        url: Page URL

    Returns:
        Sanitized name, truncated to 200 characters, with ".html" appended

    Example:
        >>> archive_filename("https://example.com/a?b=1")
        'https___example.com_a_b_1.html'
    """
    return _UNSAFE_FILENAME_CHARS.sub("_", url)[:MAX_FILENAME_LENGTH] + ".html"


def extract_title(html: str) -> str:
    """Return the stripped <title> text, or "" when the page has none."""
    soup = BeautifulSoup(html, "html.parser")
    if soup.title is None:
        return ""
    return " ".join(soup.title.get_text().split())


class PageScraper:
    """
    Fetches and archives recipe pages.

    One requests.Session is reused per scraper so connection pooling and the
    browser headers apply to every fetch.
    """

    def __init__(self, session: Optional[requests.Session] = None, storage_dir: Optional[Union[str, Path]] = None):
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": ScrapeConfig.get_user_agent(),
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        })
        self.storage_dir = Path(storage_dir) if storage_dir else ScrapeConfig.get_storage_dir()
        self.timeout = ScrapeConfig.get_timeout()

    def fetch(self, url: str) -> str:
        """
        Fetch a page body.

        Args:
            url: Absolute http(s) URL

        Returns:
            Response body as text

        Raises:
            ValueError: If the URL is malformed or has no http(s) scheme
            ScrapeError: On network failure or an HTTP status >= 400
        """
        try:
            response = self.session.get(url, timeout=self.timeout, allow_redirects=True)
        except (requests.exceptions.MissingSchema,
                requests.exceptions.InvalidSchema,
                requests.exceptions.InvalidURL) as e:
            raise ValueError(f"Invalid URL: {url}") from e
        except requests.exceptions.RequestException as e:
            raise ScrapeError(f"Error fetching URL: {url} ({e})") from e

        if response.status_code >= 400:
            raise ScrapeError(f"HTTP {response.status_code} when fetching URL: {url}")

        return response.text

    def save(self, url: str, html: str) -> Path:
        """
        Archive a page body under storage_dir.

        Returns:
            Path of the written file
        """
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        path = self.storage_dir / archive_filename(url)
        path.write_text(html, encoding="utf-8")
        logger.debug(f"Saved {len(html)} chars of HTML to {path}")
        return path

    def scrape(self, url: str) -> ScrapeResult:
        """
        Fetch, archive and title a recipe page.

        Args:
            url: Recipe page URL

        Returns:
            ScrapeResult with title, html and saved_file

        Raises:
            ValueError: If url is blank or malformed
            ScrapeError: If the page cannot be fetched
        """
        if not url or not url.strip():
            raise ValueError("URL must not be blank")
        url = url.strip()

        logger.info(f"Scraping recipe page: {url}")
        html = self.fetch(url)
        saved = self.save(url, html)
        title = extract_title(html) or url

        return ScrapeResult(title=title, html=html, saved_file=str(saved))


def scrape(url: str, storage_dir: Optional[Union[str, Path]] = None) -> ScrapeResult:
    """
    Scrape one page with a fresh PageScraper.

    Args:
        url: Recipe page URL
        storage_dir: Optional archive directory (default: PAGE_STORAGE_DIR)

    Returns:
        ScrapeResult
    """
    scraper = PageScraper(storage_dir=storage_dir)
    try:
        return scraper.scrape(url)
    finally:
        scraper.session.close()
