"""
Webflow Service Module

This module handles integration with the Webflow CMS API (v2).
It lists the items already stored in the blog collection to filter out known
articles, and creates and publishes items for reformulated posts.
"""

from typing import Any, Dict, List, Optional, Set

import requests

from config import settings
from data.models import PlatformItem, ReformulatedPost
from utils.exceptions import PlatformError, PublishError
from utils.helpers import safe_get, strip_html_tags, truncate_text
from utils.logger import get_logger

logger = get_logger(__name__)


def get_summary_from_html(html_content: str, max_length: int = settings.SUMMARY_MAX_LENGTH) -> str:
    """Plain-text summary of an HTML body, truncated with an ellipsis."""
    return truncate_text(strip_html_tags(html_content), max_length)


def build_item_payload(
    original_link: str,
    post: ReformulatedPost,
    original_link_field: str,
    author_name: str,
) -> Dict[str, Any]:
    """
    Build the create-item payload for a reformulated post.

    Args:
        original_link: Source article URL, stored for later deduplication.
        post: The reformulated post, with its thumbnail.
        original_link_field: Slug of the custom field holding the source URL.
        author_name: Value of the author field.

    Returns:
        dict: The JSON body of the create request.
    """
    field_data = {
        "name": post.title,
        "author-name": author_name,
        "post-summary": get_summary_from_html(post.html_content),
        "rich-text": post.html_content,
        "main-image-2": {"url": post.thumbnail_url},
        "thumbnail-image": {"url": post.thumbnail_url},
    }
    field_data[original_link_field] = original_link
    return {"fieldData": field_data}


class WebflowService:
    """Service for the Webflow CMS blog collection."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        collection_id: Optional[str] = None,
        original_link_field: Optional[str] = None,
        author_name: Optional[str] = None,
        base_url: Optional[str] = None,
        page_size: Optional[int] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the Webflow service.

        Args:
            api_key: Webflow API token, settings.WEBFLOW_API_KEY by default.
            collection_id: Id of the blog posts collection.
            original_link_field: Slug of the custom field holding the source URL.
            author_name: Value written to the author field of new items.
            base_url: API root URL.
            page_size: Items requested per list call.
            timeout: Seconds before a request is abandoned.
            session: HTTP session to use (tests inject a mock here).
        """
        api_key = api_key or settings.WEBFLOW_API_KEY
        if not api_key:
            raise ValueError("Missing required WEBFLOW_API_KEY")

        self.collection_id = collection_id or settings.WEBFLOW_COLLECTION_ID
        self.original_link_field = original_link_field or settings.WEBFLOW_ORIGINAL_LINK_FIELD
        self.author_name = author_name or settings.WEBFLOW_AUTHOR_NAME
        self.base_url = (base_url or settings.WEBFLOW_API_BASE_URL).rstrip("/")
        self.page_size = page_size or settings.WEBFLOW_PAGE_SIZE
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT

        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        })

    @property
    def items_url(self) -> str:
        return f"{self.base_url}/collections/{self.collection_id}/items"

    def _to_platform_item(self, raw: Dict[str, Any]) -> PlatformItem:
        return PlatformItem(
            id=str(raw.get("id", "")),
            original_link=safe_get(raw, "fieldData", self.original_link_field),
        )

    def list_items(self) -> List[PlatformItem]:
        """
        Fetch every item of the collection, following pagination.

        Returns:
            List[PlatformItem]: The stored items.

        Raises:
            PlatformError: If any page cannot be retrieved or decoded.
        """
        logger.info("Fetching all posts on Webflow")
        items: List[PlatformItem] = []
        offset = 0

        while True:
            try:
                response = self.session.get(
                    self.items_url,
                    params={"limit": self.page_size, "offset": offset},
                    timeout=self.timeout,
                )
            except requests.RequestException as e:
                raise PlatformError(f"Error listing Webflow items: {e}") from e

            if not response.ok:
                raise PlatformError(
                    f"Error listing Webflow items: {response.status_code} {response.reason}"
                )

            try:
                data = response.json()
            except ValueError as e:
                raise PlatformError(f"Invalid JSON listing Webflow items: {e}") from e

            page = data.get("items") or []
            items.extend(self._to_platform_item(raw) for raw in page)

            total = safe_get(data, "pagination", "total", default=len(items))
            offset += len(page)
            if not page or offset >= total:
                break

        logger.info(f"Retrieved {len(items)} item(s) from Webflow")
        return items

    def get_known_links(self) -> Set[str]:
        """Original links recorded on the stored items."""
        return {item.original_link for item in self.list_items() if item.original_link}

    def filter_new_links(self, links: List[str]) -> List[str]:
        """
        Keep the links that are not yet recorded on the platform.

        Comparison is exact string equality; order of the input is preserved.

        Raises:
            PlatformError: If the stored items cannot be listed.
        """
        logger.info("Filtering new post links")
        known_links = self.get_known_links()
        logger.debug(f"Already known links: {sorted(known_links)}")
        new_links = [link for link in links if link not in known_links]
        logger.info(f"{len(new_links)} new post link(s) out of {len(links)}")
        return new_links

    def create_item(self, original_link: str, post: ReformulatedPost) -> str:
        """
        Create a collection item for a reformulated post.

        Returns:
            str: The id of the created item.

        Raises:
            PublishError: On network errors, a non-2xx status, or a response without id.
        """
        payload = build_item_payload(original_link, post, self.original_link_field, self.author_name)
        logger.debug(f"Create payload: {payload}")

        try:
            response = self.session.post(self.items_url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise PublishError(f"Error creating post on Webflow: {e}") from e

        if not response.ok:
            raise PublishError(f"Error creating post on Webflow: {response.status_code} {response.reason}")

        try:
            data = response.json()
        except ValueError as e:
            raise PublishError(f"Invalid JSON creating post on Webflow: {e}") from e

        if not isinstance(data, dict):
            raise PublishError(f"Unexpected Webflow create response: {data!r}")

        item_id = data.get("id")
        if not item_id:
            raise PublishError("Webflow create response did not include an item id")

        logger.info(f"Post created successfully on Webflow with id {item_id}")
        return item_id

    def publish_items(self, item_ids: List[str]) -> bool:
        """
        Publish collection items.

        Returns:
            bool: True if the publish call succeeded, False otherwise.
        """
        payload = {"itemIds": list(item_ids)}
        logger.info(f"Publishing item(s) {payload['itemIds']} on Webflow")

        try:
            response = self.session.post(f"{self.items_url}/publish", json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Error publishing post on Webflow: {e}")
            return False

        if not response.ok:
            logger.error(f"Error publishing post on Webflow: {response.status_code} {response.reason}")
            return False

        logger.info("Post published successfully on Webflow")
        return True

    def publish_post(self, original_link: str, post: ReformulatedPost) -> Optional[str]:
        """
        Create an item for a post and publish it.

        Posts without a thumbnail are never created. A failed publish leaves the
        created item as a draft; it is not rolled back.

        Args:
            original_link: Source article URL.
            post: The reformulated post.

        Returns:
            Optional[str]: The created item id, or None if nothing was created.
        """
        if not post.thumbnail_url:
            logger.warning(
                f"Skip creating post '{post.title}' on Webflow because thumbnail URL is not available"
            )
            return None

        logger.info(f"Creating the post '{post.title}' on Webflow")
        try:
            item_id = self.create_item(original_link, post)
        except PublishError as e:
            logger.error(f"{e} (original link: {original_link})")
            return None

        if not self.publish_items([item_id]):
            logger.warning(f"Item {item_id} was created but left unpublished")

        return item_id
