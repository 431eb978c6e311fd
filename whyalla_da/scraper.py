"""HTTP scraper for the Whyalla development register listing and PDFs."""

from __future__ import annotations

import random
import re
import threading
import time
from typing import List, Optional
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup

from .logging import get_logger

logger = get_logger(__name__)

DOCUMENT_LINK_SELECTOR = "td.u6ListTD a[href$='.pdf']"

# Lodged applications only; approved application PDFs are ignored.
REGISTER_PATTERN = re.compile(r"Development Register", re.IGNORECASE)


class WhyallaScraper:
    """Finds and downloads the development register PDFs."""

    def __init__(
        self,
        listing_url: str,
        timeout: float,
        retries: int,
        user_agent: str,
        proxy: Optional[str] = None,
        delay: float = 2.0,
        jitter: int = 5,
        select_all: bool = False,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.listing_url = listing_url
        self.timeout = timeout
        self.retries = retries
        self.delay = delay
        self.jitter = jitter
        self.select_all = select_all
        self._rng = rng or random.Random()
        self._client = httpx.Client(
            timeout=timeout,
            headers={"User-Agent": user_agent},
            follow_redirects=True,
            proxy=proxy,
            limits=httpx.Limits(max_connections=2, max_keepalive_connections=1),
        )
        self._lock = threading.Lock()

    def close(self) -> None:
        with self._lock:
            self._client.close()

    def list_documents(self) -> List[str]:
        logger.info("fetch_listing", url=self.listing_url)
        response = self._get(self.listing_url)
        if response is None:
            logger.warning("listing_fetch_failed", url=self.listing_url)
            return []
        urls = parse_listing_page(response.text, self.listing_url)
        logger.info("listing_parsed", url=self.listing_url, documents=len(urls))
        return urls

    def selected_documents(self) -> List[str]:
        urls = self.list_documents()
        if self.select_all:
            return urls
        return select_documents(urls, self._rng)

    def fetch_document(self, url: str) -> Optional[bytes]:
        logger.info("fetch_document", url=url)
        response = self._get(url)
        if response is None:
            logger.warning("document_fetch_failed", url=url)
            return None
        return response.content

    def _get(self, url: str) -> Optional[httpx.Response]:
        for attempt in range(1, self.retries + 1):
            try:
                with self._lock:
                    response = self._client.get(url)
                response.raise_for_status()
                self._pause()
                return response
            except httpx.HTTPError as exc:
                logger.warning(
                    "http_retry",
                    url=url,
                    attempt=attempt,
                    retries=self.retries,
                    error=str(exc),
                )
                if attempt == self.retries:
                    return None
                backoff = min(60.0, 2 ** (attempt - 1))
                time.sleep(backoff)
        return None

    def _pause(self) -> None:
        seconds = self.delay + self._rng.randrange(0, self.jitter + 1)
        if seconds > 0:
            time.sleep(seconds)


def parse_listing_page(html: str, base_url: str) -> List[str]:
    """Return the absolute, de-duplicated development register PDF links in page order."""
    soup = BeautifulSoup(html, "lxml")
    seen: set[str] = set()
    ordered: List[str] = []

    for anchor in soup.select(DOCUMENT_LINK_SELECTOR):
        href = (anchor.get("href") or "").strip()
        if not href or not REGISTER_PATTERN.search(href):
            continue
        full_url = urljoin(base_url, href)
        if full_url in seen:
            continue
        seen.add(full_url)
        ordered.append(full_url)

    return ordered


def select_documents(urls: List[str], rng: random.Random) -> List[str]:
    """
    Pick the most recent document plus one other at random, in random order.

    At most two documents are processed per run to bound memory use.
    """
    if not urls:
        return []
    selected = [urls[0]]
    if len(urls) > 1:
        selected.append(rng.choice(urls[1:]))
    if rng.randrange(2) == 0:
        selected.reverse()
    return selected
