"""
Source Site Configuration Loader

Reads the list of blog sites to syndicate from a JSON file. The file holds a
list of objects, one per site:

    [
        {
            "id": "example",
            "name": "Example Blog",
            "domain": "www.example.com",
            "listing_url": "https://www.example.com/blog",
            "link_selector": "article h2 a",
            "title_selector": "h1.post-title",
            "content_selector": "div.post-body"
        }
    ]
"""

import json
from dataclasses import fields
from pathlib import Path
from typing import Any, Tuple, Union

from data.models import SiteConfig
from utils.exceptions import ConfigurationError

SITE_FIELDS = tuple(f.name for f in fields(SiteConfig))


def parse_site(raw: Any, index: int = 0) -> SiteConfig:
    """
    Build a SiteConfig from one decoded JSON object.

    Raises:
        ConfigurationError: If the entry is not an object or a field is missing or empty.
    """
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Site #{index} must be an object, got {type(raw).__name__}")

    missing = [
        name for name in SITE_FIELDS
        if not isinstance(raw.get(name), str) or not raw.get(name).strip()
    ]
    if missing:
        raise ConfigurationError(f"Site #{index} is missing required field(s): {', '.join(missing)}")

    return SiteConfig(**{name: raw[name].strip() for name in SITE_FIELDS})


def load_sites(path: Union[str, Path]) -> Tuple[SiteConfig, ...]:
    """
    Load the site configurations from a JSON file.

    Args:
        path: Path to the sites file.

    Returns:
        Tuple[SiteConfig, ...]: The configured sites, in file order.

    Raises:
        ConfigurationError: If the file is missing, unreadable, or malformed.
    """
    p = Path(path)

    if not p.exists():
        raise ConfigurationError(f"Sites file not found: {p}")

    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Failed to read sites file: {p}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Failed to parse JSON in {p}: {e}") from e

    if not isinstance(data, list):
        raise ConfigurationError(f"Top-level JSON in {p} must be a list of sites")

    sites = tuple(parse_site(raw, index) for index, raw in enumerate(data))

    ids = [site.id for site in sites]
    duplicates = sorted({site_id for site_id in ids if ids.count(site_id) > 1})
    if duplicates:
        raise ConfigurationError(f"Duplicate site id(s) in {p}: {', '.join(duplicates)}")

    return sites
