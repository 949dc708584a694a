"""Unit tests for EventPageFetcher."""
from unittest.mock import Mock

import pytest
import requests
import responses
from requests.exceptions import ConnectionError, Timeout

from scraper.event_page import (
    REQUEST_HEADERS,
    EventPageFetcher,
    FetchError,
    content_tab_url,
    detect_platform,
)

from conftest import GENERIC_URL, LUMA_URL, SOCIAL_LAYER_URL


class TestDetectPlatform:
    """Test cases for detect_platform."""

    @pytest.mark.parametrize('url,expected', [
        ('https://app.sola.day/event/detail/16716', 'sociallayer'),
        ('https://app.sola.day/event/detail/16716?tab=content', 'sociallayer'),
        ('https://lu.ma/builders-breakfast', 'luma'),
        ('https://www.lu.ma/builders-breakfast', 'luma'),
        ('https://luma.com/builders-breakfast', 'luma'),
        ('https://app.sola.day/profile/alice', 'generic'),
        ('https://example.com/events/1', 'generic'),
    ])
    def test_detect_platform(self, url, expected):
        """Test platform detection from the URL host and path."""
        assert detect_platform(url) == expected

    def test_content_tab_url(self):
        """Test the content tab parameter is appended with the right separator."""
        assert content_tab_url(SOCIAL_LAYER_URL) == SOCIAL_LAYER_URL + '?tab=content'
        assert content_tab_url(SOCIAL_LAYER_URL + '?lang=en') == SOCIAL_LAYER_URL + '?lang=en&tab=content'


class TestEventPageFetcher:
    """Test cases for EventPageFetcher class."""

    @responses.activate
    def test_fetch_success(self):
        """Test a 200 response returns the page body."""
        responses.add(responses.GET, GENERIC_URL, body='<html>ok</html>', status=200)

        fetcher = EventPageFetcher(timeout=5)
        html = fetcher.fetch(GENERIC_URL)

        assert html == '<html>ok</html>'
        assert len(responses.calls) == 1
        request = responses.calls[0].request
        assert request.headers['User-Agent'] == REQUEST_HEADERS['User-Agent']
        assert 'text/html' in request.headers['Accept']

    @responses.activate
    def test_fetch_social_layer_requests_content_tab(self):
        """Test SocialLayer pages are fetched with the content tab selected."""
        responses.add(
            responses.GET,
            SOCIAL_LAYER_URL + '?tab=content',
            body='<html>content</html>',
            status=200
        )

        html = EventPageFetcher().fetch(SOCIAL_LAYER_URL)

        assert html == '<html>content</html>'
        assert len(responses.calls) == 1
        assert responses.calls[0].request.url.endswith('?tab=content')

    @responses.activate
    def test_fetch_luma_url_unchanged(self):
        """Test non-SocialLayer URLs are requested as given."""
        responses.add(responses.GET, LUMA_URL, body='<html></html>', status=200)

        EventPageFetcher().fetch(LUMA_URL)

        assert responses.calls[0].request.url == LUMA_URL

    @responses.activate
    def test_fetch_http_error(self):
        """Test a non-2xx status raises FetchError with the status and reason."""
        responses.add(responses.GET, GENERIC_URL, body='missing', status=404)

        with pytest.raises(FetchError) as exc_info:
            EventPageFetcher().fetch(GENERIC_URL)

        assert str(exc_info.value) == 'Failed to fetch event page: 404 Not Found'
        assert exc_info.value.kind == FetchError.HTTP_STATUS
        assert exc_info.value.status == 404
        assert len(responses.calls) == 1

    @responses.activate
    def test_fetch_server_error_not_retried(self):
        """Test a 5xx status fails after a single request."""
        responses.add(responses.GET, GENERIC_URL, status=503)

        with pytest.raises(FetchError) as exc_info:
            EventPageFetcher().fetch(GENERIC_URL)

        assert '503' in str(exc_info.value)
        assert len(responses.calls) == 1

    @responses.activate
    def test_fetch_connection_error(self):
        """Test transport failures are reported as network errors."""
        responses.add(responses.GET, GENERIC_URL, body=ConnectionError('connection refused'))

        with pytest.raises(FetchError) as exc_info:
            EventPageFetcher().fetch(GENERIC_URL)

        assert str(exc_info.value).startswith('Network error while fetching event page:')
        assert 'connection refused' in str(exc_info.value)
        assert exc_info.value.kind == FetchError.NETWORK
        assert exc_info.value.status is None
        assert isinstance(exc_info.value.cause, ConnectionError)

    @responses.activate
    def test_fetch_timeout(self):
        """Test a timeout names the configured timeout."""
        responses.add(responses.GET, GENERIC_URL, body=Timeout('read timed out'))

        with pytest.raises(FetchError) as exc_info:
            EventPageFetcher(timeout=7).fetch(GENERIC_URL)

        assert str(exc_info.value) == (
            'Network error while fetching event page: timed out after 7s'
        )
        assert exc_info.value.kind == FetchError.NETWORK

    def test_fetch_uses_session_and_timeout(self):
        """Test a supplied session is used with the configured timeout."""
        session = Mock(spec=requests.Session)
        session.get.return_value = Mock(status_code=200, text='<html></html>', reason='OK')

        EventPageFetcher(timeout=3, session=session).fetch(GENERIC_URL)

        session.get.assert_called_once_with(
            GENERIC_URL,
            headers=REQUEST_HEADERS,
            timeout=3,
            allow_redirects=True
        )
