"""
Custom Exception Classes for the Blog Syndicator

This module defines custom exceptions for better error handling and
categorization of failures across the pipeline stages.
"""


class SyndicatorError(Exception):
    """Base exception for all Blog Syndicator errors."""
    pass


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(SyndicatorError):
    """Raised when configuration validation fails or required settings are missing."""
    pass


# =============================================================================
# Source Site Errors
# =============================================================================

class ArticleError(SyndicatorError):
    """Base exception for source article errors."""
    pass


class ArticleFetchError(ArticleError):
    """Raised when a listing or article page cannot be downloaded."""
    pass


class ArticleParseError(ArticleError):
    """Raised when the configured selectors find no usable title or content."""
    pass


# =============================================================================
# Generation Service Errors
# =============================================================================

class GenerationError(SyndicatorError):
    """Raised when the text or image generation service fails to produce output."""
    pass


# =============================================================================
# Content Platform Errors
# =============================================================================

class PlatformError(SyndicatorError):
    """Base exception for content platform (Webflow) errors."""
    pass


class PublishError(PlatformError):
    """Raised when an item cannot be created or published on the platform."""
    pass
