"""
Service Protocol Definitions

This module defines typing.Protocol interfaces for the services composed by
the syndication pipeline. These protocols enable loose coupling, dependency
injection, and easier testing.

Protocols defined:
- ArticleServiceProtocol: Interface for harvesting links and extracting posts
- AIServiceProtocol: Interface for reformulation and thumbnail generation
- PublishingPlatformProtocol: Interface for the content platform (Webflow)
"""

from typing import List, Optional, Protocol

from data.models import OriginalPost, ReformulatedPost, SiteConfig


class ArticleServiceProtocol(Protocol):
    """Protocol defining the interface for source site access.

    Implementations should provide methods for:
    - Extracting article links from a site's listing page
    - Fetching an article page and extracting a sanitized post
    """

    def harvest_links(self, site: SiteConfig) -> List[str]:
        """Fetch the listing page of a site and extract absolute article links.

        Args:
            site: The site to harvest.

        Returns:
            Article links in document order.
        """
        ...

    def fetch_post(self, original_link: str, site: SiteConfig) -> Optional[OriginalPost]:
        """Fetch an article page and extract its title and sanitized body.

        Args:
            original_link: Absolute URL of the article.
            site: The site the article belongs to.

        Returns:
            The extracted post, or None if it was dropped.
        """
        ...


class AIServiceProtocol(Protocol):
    """Protocol defining the interface for generation operations."""

    def reformulate_post(self, site: SiteConfig, post: OriginalPost) -> Optional[ReformulatedPost]:
        """Reword a post's title and body.

        Returns:
            The reworded post, or None if either rewrite failed.
        """
        ...

    def generate_thumbnail(self, title: str) -> Optional[str]:
        """Generate a cover illustration.

        Returns:
            The image URL, or None if unavailable.
        """
        ...


class PublishingPlatformProtocol(Protocol):
    """Protocol defining the interface for the content platform."""

    def filter_new_links(self, links: List[str]) -> List[str]:
        """Keep the links not yet recorded on the platform."""
        ...

    def publish_post(self, original_link: str, post: ReformulatedPost) -> Optional[str]:
        """Create and publish an item for a post.

        Returns:
            The created item id, or None if nothing was created.
        """
        ...
