"""
Tests for Configuration

Tests the sites file loader and the settings validation.
"""

import json

import pytest
from unittest.mock import patch
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.sites import load_sites, parse_site
from config.validators import validate_settings, get_config_summary
from utils.exceptions import ConfigurationError

VALID_SITE = {
    'id': 'example',
    'name': 'Example Blog',
    'domain': 'www.example.com',
    'listing_url': 'https://www.example.com/blog',
    'link_selector': 'article h2 a',
    'title_selector': 'h1',
    'content_selector': 'div.post-body',
}


def _write_sites(tmp_path, data):
    path = tmp_path / 'sites.json'
    path.write_text(json.dumps(data), encoding='utf-8')
    return path


# =============================================================================
# Sites File Tests
# =============================================================================

class TestLoadSites:
    """Tests for load_sites and parse_site."""

    def test_loads_sites_in_order(self, tmp_path):
        path = _write_sites(tmp_path, [VALID_SITE, dict(VALID_SITE, id='other')])

        sites = load_sites(path)

        assert isinstance(sites, tuple)
        assert [s.id for s in sites] == ['example', 'other']
        assert sites[0].listing_url == 'https://www.example.com/blog'

    def test_empty_list_loads(self, tmp_path):
        assert load_sites(_write_sites(tmp_path, [])) == ()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_sites(tmp_path / 'nope.json')

    def test_invalid_json(self, tmp_path):
        path = tmp_path / 'sites.json'
        path.write_text('[{', encoding='utf-8')

        with pytest.raises(ConfigurationError, match="parse"):
            load_sites(path)

    def test_not_a_list(self, tmp_path):
        with pytest.raises(ConfigurationError, match="list"):
            load_sites(_write_sites(tmp_path, VALID_SITE))

    def test_missing_field(self):
        raw = dict(VALID_SITE)
        del raw['title_selector']

        with pytest.raises(ConfigurationError, match="title_selector"):
            parse_site(raw)

    def test_blank_field(self):
        with pytest.raises(ConfigurationError, match="domain"):
            parse_site(dict(VALID_SITE, domain='  '))

    def test_duplicate_ids(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Duplicate"):
            load_sites(_write_sites(tmp_path, [VALID_SITE, VALID_SITE]))


# =============================================================================
# Validation Tests
# =============================================================================

@pytest.fixture
def valid_settings():
    """Patch config.settings with a valid configuration."""
    with patch('config.settings') as mock_settings:
        mock_settings.OPENAI_API_KEY = 'sk-test'
        mock_settings.WEBFLOW_API_KEY = 'wf-test'
        mock_settings.WEBFLOW_COLLECTION_ID = 'col-1'
        mock_settings.WEBFLOW_ORIGINAL_LINK_FIELD = 'link'
        mock_settings.REQUEST_DELAY_MIN_MS = 1000
        mock_settings.REQUEST_DELAY_MAX_MS = 4000
        mock_settings.REQUEST_TIMEOUT = 30
        yield mock_settings


class TestValidateSettings:
    """Tests for validate_settings."""

    def test_valid(self, valid_settings, site):
        assert validate_settings([site]) is True

    def test_missing_openai_key(self, valid_settings, site):
        valid_settings.OPENAI_API_KEY = None

        with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
            validate_settings([site])

    def test_missing_webflow_key(self, valid_settings, site):
        valid_settings.WEBFLOW_API_KEY = ''

        with pytest.raises(ConfigurationError, match="WEBFLOW_API_KEY"):
            validate_settings([site])

    def test_no_sites(self, valid_settings):
        with pytest.raises(ConfigurationError, match="No blog site"):
            validate_settings([])

    def test_inverted_delay_range(self, valid_settings, site):
        valid_settings.REQUEST_DELAY_MAX_MS = 10

        with pytest.raises(ConfigurationError, match="REQUEST_DELAY_MAX_MS"):
            validate_settings([site])

    def test_reports_every_error(self, valid_settings):
        valid_settings.OPENAI_API_KEY = None
        valid_settings.WEBFLOW_API_KEY = None

        with pytest.raises(ConfigurationError) as exc_info:
            validate_settings([])

        message = str(exc_info.value)
        assert 'OPENAI_API_KEY' in message
        assert 'WEBFLOW_API_KEY' in message
        assert 'No blog site' in message


class TestConfigSummary:
    """Tests for get_config_summary."""

    def test_summary_hides_secrets(self, valid_settings, site):
        summary = get_config_summary([site])

        assert summary['sites'] == ['example']
        assert summary['webflow']['configured'] is True
        assert 'sk-test' not in str(summary)
        assert 'wf-test' not in str(summary)
