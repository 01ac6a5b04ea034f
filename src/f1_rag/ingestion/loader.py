"""Page loader — headless-browser fetch with markup stripping.

Each call launches its own Chromium instance and closes it before
returning, so at most one browser is alive at any time.
"""

from __future__ import annotations

import logging
import re
import unicodedata

from bs4 import BeautifulSoup
from playwright.sync_api import sync_playwright

from f1_rag.config import settings

logger = logging.getLogger(__name__)

_BODY_HTML_JS = "() => document.body ? document.body.innerHTML : ''"


def normalise_text(text: str) -> str:
    """Unicode NFC, collapse whitespace, strip control chars."""
    text = unicodedata.normalize("NFC", text)
    text = re.sub(r"[^\S\n]+", " ", text)       # collapse spaces (keep \n)
    text = re.sub(r" ?\n ?", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)       # max two consecutive newlines
    text = re.sub(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]", "", text)
    return text.strip()


def strip_markup(html: str) -> str:
    """Drop every tag (and script/style bodies), keeping the visible text."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript", "template"]):
        tag.decompose()
    return soup.get_text(separator="\n", strip=True)


class PageFetcher:
    """Fetch the rendered text of a page through headless Chromium.

    Parameters
    ----------
    headless:
        Run the browser without a window.
    timeout_ms:
        Navigation timeout in milliseconds.
    """

    def __init__(
        self,
        *,
        headless: bool = settings.browser_headless,
        timeout_ms: int = settings.page_timeout_ms,
    ) -> None:
        self.headless = headless
        self.timeout_ms = timeout_ms

    def scrape(self, url: str) -> str:
        """Return the body HTML of *url*; raises on navigation failure."""
        with sync_playwright() as pw:
            browser = pw.chromium.launch(headless=self.headless)
            try:
                page = browser.new_page()
                # Ready once the DOM is parsed; network idle is not awaited.
                page.goto(url, wait_until="domcontentloaded", timeout=self.timeout_ms)
                return page.evaluate(_BODY_HTML_JS) or ""
            finally:
                browser.close()

    def fetch(self, url: str) -> str:
        """Return the normalised plain text of *url*, or ``""`` on any failure."""
        try:
            html = self.scrape(url)
        except Exception as exc:
            logger.error("Failed to scrape page %s: %s", url, exc)
            return ""

        if not html:
            logger.warning("No content scraped from %s", url)
            return ""

        return normalise_text(strip_markup(html))

    __call__ = fetch
