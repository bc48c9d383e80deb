"""
Article Service Module

This module handles the source side of the pipeline: fetching a site's listing
page, harvesting article links from it, and fetching and extracting each
article's title and sanitized body.
"""

import random
import time
from typing import Callable, List, Optional, Tuple

import requests
from bs4 import BeautifulSoup

from config import settings
from data.models import OriginalPost, SiteConfig
from utils.exceptions import ArticleFetchError, ArticleParseError
from utils.helpers import to_absolute_url
from utils.html_cleaner import clean_html
from utils.logger import get_logger

logger = get_logger(__name__)


def extract_post_links(site: SiteConfig, page_html: str) -> List[str]:
    """
    Extract the article links of a listing page.

    Args:
        site: The site whose link selector and domain apply.
        page_html: The listing page markup.

    Returns:
        List[str]: Absolute links in document order, duplicates kept.
    """
    soup = BeautifulSoup(page_html, "html.parser")
    hrefs = (element.get("href") or "" for element in soup.select(site.link_selector))
    return [to_absolute_url(href, site.domain) for href in hrefs if href != ""]


def extract_post_details(original_link: str, page_html: str, site: SiteConfig) -> OriginalPost:
    """
    Extract the title and sanitized body of an article page.

    Args:
        original_link: The absolute URL of the article, kept as dedup key.
        page_html: The article page markup.
        site: The site whose title and content selectors apply.

    Returns:
        OriginalPost: The extracted post.

    Raises:
        ArticleParseError: If the title or the body cannot be found.
    """
    soup = BeautifulSoup(page_html, "html.parser")

    title_element = soup.select_one(site.title_selector)
    title = title_element.get_text().strip() if title_element else ""
    if not title:
        raise ArticleParseError(f"Post title not found with selector '{site.title_selector}'")

    html_content = "".join(str(element) for element in soup.select(site.content_selector))
    if not html_content:
        raise ArticleParseError(f"Post content not found with selector '{site.content_selector}'")

    return OriginalPost(
        original_link=original_link,
        title=title,
        html_content=clean_html(html_content),
    )


class ArticleService:
    """Service for fetching listing and article pages from source sites."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[int] = None,
        delay_range_ms: Optional[Tuple[int, int]] = None,
        sleep: Callable[[float], None] = time.sleep,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the article service.

        Args:
            session: HTTP session to use, a new one with browser-like headers by default.
            timeout: Seconds before an HTTP request is abandoned.
            delay_range_ms: Inclusive (min, max) pause before each article page fetch.
            sleep: Function used to pause, replaceable in tests.
            rng: Random generator used to draw the pause length.
        """
        self.session = session or requests.Session()
        if session is None:
            self.session.headers.update(settings.REQUEST_HEADERS)
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.delay_range_ms = delay_range_ms or (settings.REQUEST_DELAY_MIN_MS, settings.REQUEST_DELAY_MAX_MS)
        self._sleep = sleep
        self._rng = rng or random.Random()

    def fetch_page(self, url: str) -> str:
        """
        Download a page with a single GET request.

        Args:
            url: The page URL.

        Returns:
            str: The page markup.

        Raises:
            ArticleFetchError: On network errors or a non-2xx status.
        """
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ArticleFetchError(f"Error fetching {url}: {e}") from e
        return response.text

    def harvest_links(self, site: SiteConfig) -> List[str]:
        """
        Fetch a site's listing page and extract its article links.

        Raises:
            ArticleFetchError: If the listing page cannot be downloaded.
        """
        logger.info(f"[{site.id}] Fetching blog page {site.listing_url}")
        page_html = self.fetch_page(site.listing_url)
        links = extract_post_links(site, page_html)
        logger.info(f"[{site.id}] Extracted {len(links)} post link(s)")
        logger.debug(f"[{site.id}] Links: {links}")
        return links

    def wait_before_fetch(self) -> float:
        """
        Pause for a random duration drawn from the configured delay range.

        Returns:
            float: The pause length in seconds.
        """
        low, high = self.delay_range_ms
        delay_ms = self._rng.randint(low, high)
        logger.info(f"Waiting for {delay_ms} ms before fetching the next post")
        self._sleep(delay_ms / 1000)
        return delay_ms / 1000

    def fetch_post(self, original_link: str, site: SiteConfig) -> Optional[OriginalPost]:
        """
        Fetch an article page and extract the post from it.

        A pacing delay is observed before the request. Failures are logged and
        reported as None so that the caller can move on to the next post.

        Args:
            original_link: Absolute URL of the article.
            site: The site the article belongs to.

        Returns:
            Optional[OriginalPost]: The extracted post, or None if it was dropped.
        """
        self.wait_before_fetch()

        logger.info(f"[{site.id}] Fetching post page {original_link}")
        try:
            page_html = self.fetch_page(original_link)
        except ArticleFetchError as e:
            logger.error(f"[{site.id}] {e}")
            return None

        try:
            post = extract_post_details(original_link, page_html, site)
        except ArticleParseError as e:
            logger.warning(f"[{site.id}] {e} on {original_link}")
            return None

        logger.info(f"[{site.id}] Extracted post '{post.title}'")
        return post
