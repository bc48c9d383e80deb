"""
Data Models for the Blog Syndicator

This module contains the data classes passed between the pipeline stages.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SiteConfig:
    """Source blog site parameters driving harvesting and extraction."""
    id: str
    name: str                          # Display name, removed from reworded text
    domain: str                        # Used to absolutize relative links
    listing_url: str                   # Page listing the latest articles
    link_selector: str                 # CSS selector for article links on the listing page
    title_selector: str                # CSS selector for the title on an article page
    content_selector: str              # CSS selector for the body on an article page


@dataclass(frozen=True)
class OriginalPost:
    """Article as extracted from the source site, body already sanitized."""
    original_link: str                 # Absolute URL, dedup key on the platform
    title: str
    html_content: str

    def to_dict(self) -> dict:
        return {
            "originalLink": self.original_link,
            "title": self.title,
            "htmlContent": self.html_content,
        }


@dataclass
class ReformulatedPost:
    """Reworded article; the thumbnail is attached once generated."""
    title: str
    html_content: str
    thumbnail_url: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "title": self.title,
            "htmlContent": self.html_content,
        }
        if self.thumbnail_url:
            data["thumbnailUrl"] = self.thumbnail_url
        return data


@dataclass(frozen=True)
class PostPair:
    """An original post and its reformulation, as recorded in the run log."""
    original: OriginalPost
    reformulated: ReformulatedPost

    def to_dict(self) -> dict:
        return {
            "original": self.original.to_dict(),
            "reformulated": self.reformulated.to_dict(),
        }


@dataclass(frozen=True)
class PlatformItem:
    """The fields of a stored CMS item that the pipeline reads."""
    id: str
    original_link: Optional[str] = None
