"""Absence-tolerant accessors over a parsed event page."""
import json
import logging
import re
from functools import cached_property
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

EVENT_SCHEMA_TYPES = {
    'Event', 'BusinessEvent', 'EducationEvent', 'SocialEvent', 'Festival',
    'ExhibitionEvent', 'MusicEvent', 'Hackathon',
}


def dig(data: Any, *keys) -> Any:
    """
    Walk nested dicts and lists, returning None at the first missing step.

    Args:
        data: Decoded JSON value
        *keys: Dict keys (str) or list indexes (int)

    Returns:
        The nested value or None
    """
    current = data
    for key in keys:
        if isinstance(key, int):
            if not isinstance(current, list) or not -len(current) <= key < len(current):
                return None
        elif not isinstance(current, dict):
            return None
        try:
            current = current[key]
        except (KeyError, IndexError):
            return None
    return current


def clean_text(value: Any) -> Optional[str]:
    """Collapse whitespace in a string, returning None when nothing is left."""
    if not isinstance(value, str):
        return None
    text = re.sub(r'\s+', ' ', value).strip()
    return text or None


def has_classes(element: Tag, *classes: str) -> bool:
    """Check that an element carries every one of the given CSS classes."""
    element_classes = element.get('class') or []
    return all(cls in element_classes for cls in classes)


class EventPage:
    """
    Parsed event page.

    Every accessor returns None or an empty list when the requested markup
    is missing or malformed, so callers only deal with absence.
    """

    def __init__(self, html: str, url: str = ''):
        self.html = html or ''
        self.url = url
        self.soup = BeautifulSoup(self.html, 'html.parser')

    def meta(self, *names: str) -> Optional[str]:
        """Return the content of the first meta tag matching a property or name."""
        for name in names:
            for attr in ('property', 'name'):
                tag = self.soup.find('meta', attrs={attr: name})
                if tag is not None:
                    content = clean_text(tag.get('content'))
                    if content:
                        return content
        return None

    def raw_meta(self, *names: str) -> Optional[str]:
        """Like meta() but keeps the content's whitespace and escapes."""
        for name in names:
            for attr in ('property', 'name'):
                tag = self.soup.find('meta', attrs={attr: name})
                if tag is not None and tag.get('content'):
                    return tag['content']
        return None

    def select(self, selector: str) -> List[Tag]:
        try:
            return self.soup.select(selector)
        except Exception as e:
            logger.debug(f"Selector '{selector}' failed: {e}")
            return []

    def select_text(self, selector: str) -> Optional[str]:
        for element in self.select(selector):
            text = clean_text(element.get_text(' '))
            if text:
                return text
        return None

    def find_all_with_classes(self, tag: str, *classes: str) -> List[Tag]:
        return [el for el in self.soup.find_all(tag) if has_classes(el, *classes)]

    @cached_property
    def title_tag(self) -> Optional[str]:
        tag = self.soup.find('title')
        return clean_text(tag.get_text()) if tag is not None else None

    @cached_property
    def text(self) -> str:
        """Visible text of the page with scripts and styles removed."""
        soup = BeautifulSoup(self.html, 'html.parser')
        for element in soup(['script', 'style', 'noscript', 'template']):
            element.decompose()
        return clean_text(soup.get_text(' ')) or ''

    @cached_property
    def json_ld(self) -> List[Dict[str, Any]]:
        """All JSON-LD objects on the page, with @graph containers flattened."""
        blocks: List[Dict[str, Any]] = []
        for script in self.soup.find_all('script', type='application/ld+json'):
            try:
                data = json.loads(script.string or '')
            except (json.JSONDecodeError, TypeError):
                continue
            items = data if isinstance(data, list) else [data]
            for item in items:
                if not isinstance(item, dict):
                    continue
                graph = item.get('@graph')
                if isinstance(graph, list):
                    blocks.extend(node for node in graph if isinstance(node, dict))
                else:
                    blocks.append(item)
        return blocks

    @cached_property
    def json_ld_event(self) -> Optional[Dict[str, Any]]:
        """The first JSON-LD block describing an event."""
        for block in self.json_ld:
            block_type = block.get('@type', '')
            types = block_type if isinstance(block_type, list) else [block_type]
            if any(t in EVENT_SCHEMA_TYPES for t in types):
                return block
        return None

    @cached_property
    def next_data(self) -> Optional[Dict[str, Any]]:
        """Decoded Next.js __NEXT_DATA__ payload."""
        script = self.soup.find('script', id='__NEXT_DATA__')
        if script is None or not script.string:
            return None
        try:
            data = json.loads(script.string)
        except json.JSONDecodeError as e:
            logger.debug(f"Malformed __NEXT_DATA__ payload: {e}")
            return None
        return data if isinstance(data, dict) else None

    @cached_property
    def luma_data(self) -> Optional[Dict[str, Any]]:
        """Luma's initial event data embedded in the Next.js payload."""
        data = dig(self.next_data, 'props', 'pageProps', 'initialData', 'data')
        return data if isinstance(data, dict) else None

    def luma(self, *keys) -> Any:
        return dig(self.luma_data, *keys)

    def search(self, pattern: str, flags: int = re.IGNORECASE) -> Optional[re.Match]:
        """Search the raw markup with a regular expression."""
        return re.search(pattern, self.html, flags)
