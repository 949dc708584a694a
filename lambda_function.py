"""AWS Lambda handler for the Punto event scraper API."""
import base64
import json
import logging
import os
import re
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlparse

from processor import defaults
from processor.event_processor import EventProcessor, iso_timestamp
from processor.models import EventScrapeResult, ScrapeMetadata
from processor.suggestions import generate_zine_content_suggestions
from scraper.event_scraper import EventScraper

URL_REQUIRED = 'URL is required'
INVALID_URL = 'Invalid URL format'
INVALID_BODY = 'Invalid JSON body'
METHOD_NOT_ALLOWED = 'Method not allowed'

RESPONSE_HEADERS = {'Content-Type': 'application/json'}


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    EXTRA_FIELDS = (
        'url',
        'http_method',
        'status_code',
        'error_type',
        'processing_time_ms',
        'duration_seconds',
        'timeout_seconds',
    )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        for key in self.EXTRA_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                log_data[key] = value

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Configure logging with JSON formatter.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def load_config() -> Dict[str, Any]:
    """Read handler configuration from environment variables."""
    try:
        timeout = float(os.environ.get('TIMEOUT_SECONDS', '15'))
    except ValueError:
        timeout = 15.0
    undated_status = os.environ.get('UNDATED_EVENT_STATUS', defaults.DEFAULT_STATUS).lower()
    if undated_status not in defaults.EVENT_STATUSES:
        undated_status = defaults.DEFAULT_STATUS
    return {
        'log_level': os.environ.get('LOG_LEVEL', 'INFO'),
        'timeout_seconds': timeout if timeout > 0 else 15.0,
        'undated_status': undated_status,
    }


def is_valid_url(url: str) -> bool:
    """
    Check that a string is a syntactically valid absolute URL.

    Only structure is checked (scheme, host, port); reachability is not.
    """
    candidate = url.strip()
    if not candidate or re.search(r'\s', candidate):
        return False
    try:
        parsed = urlparse(candidate)
        parsed.port  # raises ValueError for a malformed port
    except ValueError:
        return False
    if not re.match(r'^[A-Za-z][A-Za-z0-9+.-]*$', parsed.scheme or ''):
        return False
    return bool(parsed.netloc)


def _http_method(event: Dict[str, Any]) -> str:
    method = event.get('httpMethod')
    if not method:
        method = ((event.get('requestContext') or {}).get('http') or {}).get('method')
    if not method:
        method = 'POST' if event.get('body') is not None else 'GET'
    return method.upper()


def _read_json_body(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Decode the JSON object sent as the request body.

    Raises:
        ValueError: If the body is missing, not JSON, or not a JSON object
    """
    body = event.get('body')
    if body is None:
        raise ValueError('Request body is empty')
    if event.get('isBase64Encoded'):
        body = base64.b64decode(body).decode('utf-8')
    data = json.loads(body) if isinstance(body, (str, bytes)) else body
    if not isinstance(data, dict):
        raise ValueError('Request body must be a JSON object')
    return data


def _wants_suggestions(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes')
    return value is True


def _response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'statusCode': status_code,
        'headers': dict(RESPONSE_HEADERS),
        'body': json.dumps(body)
    }


def _error_response(status_code: int, error: str, url: str) -> Dict[str, Any]:
    result = EventScrapeResult.failure(
        error,
        ScrapeMetadata(
            url=url,
            scraped_at=iso_timestamp(datetime.now(timezone.utc)),
            processing_time=0
        )
    )
    return _response(status_code, result.to_dict())


def parse_request(event: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Any, bool]:
    """
    Pull the target URL out of an API Gateway proxy event.

    Args:
        event: API Gateway REST (v1) or HTTP API (v2) proxy event

    Returns:
        Tuple of (error response or None, raw url value, suggestions flag)
    """
    method = _http_method(event)

    if method == 'GET':
        params = event.get('queryStringParameters') or {}
        return None, params.get('url'), _wants_suggestions(params.get('suggestions'))

    if method == 'POST':
        try:
            body = _read_json_body(event)
        except (ValueError, UnicodeDecodeError) as e:
            logging.getLogger(__name__).warning(f"Rejected request body: {e}")
            return _error_response(400, INVALID_BODY, ''), None, False
        return None, body.get('url'), _wants_suggestions(body.get('suggestions'))

    return _error_response(405, METHOD_NOT_ALLOWED, ''), None, False


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Main Lambda handler function for the event scraper API.

    Accepts ``GET ?url=...`` and ``POST {"url": ...}`` requests.

    Args:
        event: API Gateway proxy event
        context: Lambda context object

    Returns:
        API Gateway proxy response whose body is an EventScrapeResult
    """
    config = load_config()

    setup_logging(config['log_level'])
    logger = logging.getLogger(__name__)

    start_time = time.time()
    logger.info(
        "Scrape request received",
        extra={
            'http_method': _http_method(event or {}),
            'timeout_seconds': config['timeout_seconds']
        }
    )

    try:
        error_response, url, include_suggestions = parse_request(event or {})
        if error_response is not None:
            return error_response

        if url is None or url == '':
            logger.warning("Rejected request without a URL")
            return _error_response(400, URL_REQUIRED, '')

        if not isinstance(url, str) or not is_valid_url(url):
            logger.warning("Rejected malformed URL", extra={'url': str(url)})
            return _error_response(400, INVALID_URL, str(url))

        url = url.strip()
        scraper = EventScraper(
            processor=EventProcessor(undated_status=config['undated_status']),
            timeout=config['timeout_seconds']
        )
        result = scraper.scrape_event(url)

        body = result.to_dict()
        if include_suggestions and result.success:
            body['suggestions'] = generate_zine_content_suggestions(result)

        status_code = 200 if result.success else 500
        duration = time.time() - start_time
        logger.info(
            "Scrape request completed" if result.success else "Scrape request failed",
            extra={
                'url': url,
                'status_code': status_code,
                'duration_seconds': round(duration, 2)
            }
        )
        return _response(status_code, body)

    except Exception as e:
        duration = time.time() - start_time
        logger.error(
            f"Scrape request failed unexpectedly: {str(e)}",
            extra={
                'duration_seconds': round(duration, 2),
                'error_type': type(e).__name__
            },
            exc_info=True
        )
        return _error_response(500, str(e) or 'Internal server error', '')
