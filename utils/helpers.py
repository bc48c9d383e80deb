"""
Helper Utility Module

This module provides small text and URL helpers used throughout the syndicator.
"""

import os
import re
from typing import Any, Dict

# Matches a tag, including an unterminated one at the end of the text
HTML_TAG_PATTERN = re.compile(r'<[^>]*>?')


def to_absolute_url(link: str, domain: str) -> str:
    """
    Resolve a link found on a site page into the absolute form used as dedup key.

    Links that already start with "http" are returned untouched; anything else
    is appended to "https://{domain}".

    Args:
        link: The href value as found in the page
        domain: The site's domain, e.g. "blog.example.com"

    Returns:
        str: The absolute URL
    """
    if link.startswith("http"):
        return link
    return f"https://{domain}{link}"


def strip_html_tags(text: str) -> str:
    """
    Remove HTML tags from text.

    Args:
        text: The text to clean

    Returns:
        str: Text with HTML tags removed
    """
    return HTML_TAG_PATTERN.sub('', text)


def truncate_text(text: str, max_length: int = 100, add_ellipsis: bool = True) -> str:
    """
    Truncate text to a maximum length.

    The kept prefix is exactly max_length characters long, so a truncated
    result with ellipsis is always max_length + 3 characters.

    Args:
        text: The text to truncate
        max_length: Maximum length
        add_ellipsis: Whether to add an ellipsis if text is truncated

    Returns:
        str: Truncated text
    """
    if not text or len(text) <= max_length:
        return text

    truncated = text[:max_length]
    if add_ellipsis:
        truncated += "..."

    return truncated


def safe_get(data: Dict[str, Any], *keys, default: Any = None) -> Any:
    """
    Safely get a value from a nested dictionary.

    Args:
        data: The dictionary to search
        *keys: The keys to follow
        default: Default value if key doesn't exist

    Returns:
        The value at the specified keys or the default value
    """
    for key in keys:
        try:
            data = data[key]
        except (KeyError, TypeError, IndexError):
            return default
    return data


def ensure_dir_exists(directory: str) -> None:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        directory: The directory path to check/create
    """
    if not os.path.exists(directory):
        os.makedirs(directory, exist_ok=True)
