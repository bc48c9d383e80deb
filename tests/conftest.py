"""
Shared Test Fixtures for the Blog Syndicator

This module provides common fixtures used across all test modules.
Fixtures include mock HTTP responses, an OpenAI client stub, log capture,
and data factories for test objects.
"""

import pytest
from unittest.mock import MagicMock
from typing import Optional, Dict, Any, List
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from data.models import SiteConfig, OriginalPost, ReformulatedPost


# =============================================================================
# Logging Fixtures
# =============================================================================

@pytest.fixture
def capture_logs():
    """
    Capture log messages for assertion in tests.

    Records are captured on the root logger, which every application
    logger propagates to.

    Returns:
        list: A list that will contain captured log records.
    """
    import logging

    class LogCapture(logging.Handler):
        def __init__(self):
            super().__init__()
            self.records = []

        def emit(self, record):
            self.records.append(record)

    handler = LogCapture()
    handler.setLevel(logging.DEBUG)

    root_logger = logging.getLogger()
    original_level = root_logger.level
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(handler)

    yield handler.records

    root_logger.removeHandler(handler)
    root_logger.setLevel(original_level)


# =============================================================================
# HTTP Response Fixtures
# =============================================================================

@pytest.fixture
def mock_http_response():
    """
    Factory fixture for creating mock HTTP responses.

    Usage:
        def test_http_request(mock_http_response):
            response = mock_http_response(
                status_code=200,
                json_data={'key': 'value'}
            )

    Returns:
        callable: A factory function for creating mock responses.
    """
    def _create_response(
        status_code: int = 200,
        text: str = '',
        json_data: Optional[Dict[str, Any]] = None,
        reason: str = 'OK',
    ) -> MagicMock:
        """
        Create a mock HTTP response object.

        Args:
            status_code: HTTP status code (default 200).
            text: Text content (auto-generated from json_data if not provided).
            json_data: Dictionary to return from response.json().
            reason: HTTP reason phrase.

        Returns:
            MagicMock: A mock response object mimicking requests.Response.
        """
        import json
        from requests.exceptions import HTTPError

        mock_response = MagicMock()
        mock_response.status_code = status_code
        mock_response.reason = reason
        mock_response.ok = 200 <= status_code < 300

        if text:
            mock_response.text = text
        elif json_data is not None:
            mock_response.text = json.dumps(json_data)
        else:
            mock_response.text = ''

        if json_data is not None:
            mock_response.json.return_value = json_data
        else:
            mock_response.json.side_effect = ValueError("No JSON data")

        if status_code >= 400:
            mock_response.raise_for_status.side_effect = HTTPError(
                f"{status_code} Error",
                response=mock_response
            )
        else:
            mock_response.raise_for_status.return_value = None

        return mock_response

    return _create_response


@pytest.fixture
def mock_session():
    """
    A mock requests.Session with a real headers dict.

    Returns:
        MagicMock: The session; configure .get / .post per test.
    """
    session = MagicMock()
    session.headers = {}
    return session


# =============================================================================
# Data Model Factories
# =============================================================================

@pytest.fixture
def site_config_factory():
    """
    Factory fixture for creating SiteConfig test objects.

    Returns:
        callable: A factory function for creating SiteConfig objects.
    """
    def _create_site(
        id: str = 'example',
        name: str = 'Example Blog',
        domain: str = 'www.example.com',
        listing_url: str = 'https://www.example.com/blog',
        link_selector: str = 'article h2 a',
        title_selector: str = 'h1.post-title',
        content_selector: str = 'div.post-body',
    ) -> SiteConfig:
        return SiteConfig(
            id=id,
            name=name,
            domain=domain,
            listing_url=listing_url,
            link_selector=link_selector,
            title_selector=title_selector,
            content_selector=content_selector,
        )

    return _create_site


@pytest.fixture
def site(site_config_factory):
    """A default SiteConfig."""
    return site_config_factory()


@pytest.fixture
def original_post_factory():
    """
    Factory fixture for creating OriginalPost test objects.

    Returns:
        callable: A factory function for creating OriginalPost objects.
    """
    def _create_post(
        original_link: str = 'https://www.example.com/blog/first-post',
        title: str = 'First post',
        html_content: str = '<p>Hello <strong>world</strong></p>',
    ) -> OriginalPost:
        return OriginalPost(original_link=original_link, title=title, html_content=html_content)

    return _create_post


@pytest.fixture
def reformulated_post_factory():
    """
    Factory fixture for creating ReformulatedPost test objects.

    Returns:
        callable: A factory function for creating ReformulatedPost objects.
    """
    def _create_post(
        title: str = 'Premier article',
        html_content: str = '<p>Bonjour <strong>le monde</strong></p>',
        thumbnail_url: Optional[str] = 'https://images.example.net/cover.png',
    ) -> ReformulatedPost:
        return ReformulatedPost(title=title, html_content=html_content, thumbnail_url=thumbnail_url)

    return _create_post


# =============================================================================
# Source Page Fixtures
# =============================================================================

@pytest.fixture
def listing_page_html():
    """Listing page with one absolute and two relative post links."""
    return """
    <html><body>
      <article><h2><a href="https://www.example.com/blog/first-post">First</a></h2></article>
      <article><h2><a href="/blog/second-post">Second</a></h2></article>
      <article><h2><a href="/blog/third-post">Third</a></h2></article>
      <aside><a href="/about">About</a></aside>
    </body></html>
    """


@pytest.fixture
def post_page_factory():
    """
    Factory fixture building an article page.

    Returns:
        callable: (title, body) -> page markup.
    """
    def _create_page(title: str = 'First post', body: str = '<p>Hello</p>') -> str:
        return (
            '<html><head><title>Site</title></head><body>'
            f'<h1 class="post-title">{title}</h1>'
            f'<div class="post-body">{body}</div>'
            '</body></html>'
        )

    return _create_page


# =============================================================================
# AI Service Fixtures
# =============================================================================

@pytest.fixture
def mock_openai_client():
    """
    Stub of the OpenAI client exposing chat.completions and images.

    Use ``set_completions`` to queue the text returned by successive
    chat completion calls.

    Returns:
        MagicMock: The client stub.
    """
    client = MagicMock()

    def _completion(content: Optional[str]) -> MagicMock:
        completion = MagicMock()
        choice = MagicMock()
        choice.message.content = content
        completion.choices = [choice]
        return completion

    def set_completions(contents: List[Optional[str]]):
        client.chat.completions.create.side_effect = [_completion(c) for c in contents]

    def set_image_url(url: Optional[str]):
        image = MagicMock()
        image.url = url
        response = MagicMock()
        response.data = [image]
        client.images.generate.return_value = response

    client.set_completions = set_completions
    client.set_image_url = set_image_url
    set_image_url('https://images.example.net/cover.png')

    return client
