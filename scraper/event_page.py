"""HTTP fetcher for event pages."""
import logging
from typing import Optional
from urllib.parse import urlparse

import requests

logger = logging.getLogger(__name__)

SOCIAL_LAYER_HOST = 'app.sola.day'
SOCIAL_LAYER_BASE_URL = 'https://app.sola.day'
LUMA_HOSTS = ('lu.ma', 'luma.com')
LUMA_BASE_URL = 'https://lu.ma'

USER_AGENT = (
    'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)

REQUEST_HEADERS = {
    'User-Agent': USER_AGENT,
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8',
    'Accept-Language': 'en-US,en;q=0.5',
    'Connection': 'keep-alive',
    'Upgrade-Insecure-Requests': '1',
}


class FetchError(Exception):
    """Raised when an event page cannot be retrieved."""

    HTTP_STATUS = 'http_status'
    NETWORK = 'network'

    def __init__(
        self,
        message: str,
        kind: str,
        status: Optional[int] = None,
        cause: Optional[BaseException] = None
    ):
        super().__init__(message)
        self.kind = kind
        self.status = status
        self.cause = cause


def detect_platform(url: str) -> str:
    """
    Identify which event platform a URL belongs to.

    Args:
        url: Event page URL

    Returns:
        "sociallayer", "luma" or "generic"
    """
    parsed = urlparse(url)
    host = (parsed.hostname or '').lower()
    if host.startswith('www.'):
        host = host[4:]

    if host == SOCIAL_LAYER_HOST and parsed.path.startswith('/event/detail/'):
        return 'sociallayer'
    if host in LUMA_HOSTS:
        return 'luma'
    return 'generic'


def content_tab_url(url: str) -> str:
    """Return the SocialLayer URL that renders the event's content tab."""
    separator = '&' if '?' in url else '?'
    return f"{url}{separator}tab=content"


class EventPageFetcher:
    """Fetcher that retrieves the raw HTML of a single event page."""

    def __init__(self, timeout: float = 15, session: Optional[requests.Session] = None):
        """
        Initialize the fetcher.

        Args:
            timeout: HTTP request timeout in seconds (default: 15)
            session: Optional requests session to send the request with
        """
        self.timeout = timeout
        self.session = session

    def fetch(self, url: str) -> str:
        """
        Fetch the HTML of an event page with a single GET request.

        Args:
            url: Event page URL (already validated by the caller)

        Returns:
            Response body as text

        Raises:
            FetchError: On a non-2xx status or any transport failure
        """
        fetch_url = url
        if detect_platform(url) == 'sociallayer':
            fetch_url = content_tab_url(url)

        logger.info(f"Fetching event page {fetch_url}")
        getter = self.session.get if self.session is not None else requests.get

        try:
            response = getter(
                fetch_url,
                headers=REQUEST_HEADERS,
                timeout=self.timeout,
                allow_redirects=True
            )
        except requests.Timeout as e:
            logger.warning(f"Timed out fetching {fetch_url}: {e}")
            raise FetchError(
                f"Network error while fetching event page: timed out after {self.timeout}s",
                kind=FetchError.NETWORK,
                cause=e
            ) from e
        except requests.RequestException as e:
            logger.warning(f"Network error fetching {fetch_url}: {e}")
            raise FetchError(
                f"Network error while fetching event page: {e}",
                kind=FetchError.NETWORK,
                cause=e
            ) from e

        if not 200 <= response.status_code < 300:
            reason = response.reason or ''
            logger.warning(
                f"Event page {fetch_url} returned HTTP {response.status_code}"
            )
            raise FetchError(
                f"Failed to fetch event page: {response.status_code} {reason}".strip(),
                kind=FetchError.HTTP_STATUS,
                status=response.status_code
            )

        logger.info(
            f"Fetched {len(response.text)} characters from {fetch_url}"
        )
        return response.text
