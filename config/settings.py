"""
Configuration Settings for the Blog Syndicator

This module centralizes all configuration settings for the syndicator,
including environment variables, API keys, and application constants.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Determine the application root directory
APP_ROOT = Path(__file__).resolve().parent.parent

# Load environment variables from .env file
load_dotenv(dotenv_path=os.path.join(APP_ROOT, '.env'))

# API Keys and Authentication
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
WEBFLOW_API_KEY = os.getenv("WEBFLOW_API_KEY")

# =============================================================================
# Source Site Settings
# =============================================================================

SITES_FILE = os.getenv("SITES_FILE", os.path.join(APP_ROOT, "sites.json"))

# Randomized pause before each article page fetch, in milliseconds
REQUEST_DELAY_MIN_MS = int(os.getenv("REQUEST_DELAY_MIN_MS", "1000"))
REQUEST_DELAY_MAX_MS = int(os.getenv("REQUEST_DELAY_MAX_MS", "4000"))

REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "30"))   # Seconds, every HTTP call

# Web Scraping Settings
USER_AGENT = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36'
REQUEST_HEADERS = {
    'User-Agent': USER_AGENT,
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    'Accept-Language': 'fr-FR,fr;q=0.9,en;q=0.5',
    'Connection': 'keep-alive',
    'Upgrade-Insecure-Requests': '1'
}

# =============================================================================
# Webflow CMS Settings
# =============================================================================

WEBFLOW_API_BASE_URL = os.getenv("WEBFLOW_API_BASE_URL", "https://api.webflow.com/v2")
WEBFLOW_COLLECTION_ID = os.getenv("WEBFLOW_COLLECTION_ID", "665f2bee7532c57800729dbf")
WEBFLOW_ORIGINAL_LINK_FIELD = os.getenv("WEBFLOW_ORIGINAL_LINK_FIELD", "autopostgeneratororiginallink")
WEBFLOW_AUTHOR_NAME = os.getenv("WEBFLOW_AUTHOR_NAME", "testa")
WEBFLOW_PAGE_SIZE = 100              # Max items per list request allowed by the API

SUMMARY_MAX_LENGTH = 300             # Max length for post summary (before "...")

# =============================================================================
# Generation Service Settings
# =============================================================================

OPENAI_GPT_MODEL = os.getenv("OPENAI_GPT_MODEL", "gpt-4o")
OPENAI_IMAGE_MODEL = os.getenv("OPENAI_IMAGE_MODEL", "dall-e-3")
OPENAI_IMAGE_SIZE = os.getenv("OPENAI_IMAGE_SIZE", "1024x1024")

# =============================================================================
# Run Log Settings
# =============================================================================

RUN_LOG_DIR = os.getenv("RUN_LOG_DIR", os.path.join(APP_ROOT, "logs"))
