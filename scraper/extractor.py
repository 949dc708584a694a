"""Field extraction for event pages.

Each field of an event record is read by an ordered tuple of strategies.
A strategy takes an ``EventPage`` and returns a value or None; ``first_of``
returns the first non-empty value and skips strategies that raise, so a
missing or malformed block never affects other fields.
"""
import json
import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence
from urllib.parse import urljoin, urlparse
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from processor import defaults
from processor.event_processor import city_from_address, classify_organization
from processor.models import (
    Coordinates,
    ExtractedFields,
    Host,
    Location,
    Organization,
    Participant,
    ParticipantCount,
)
from scraper.event_page import LUMA_BASE_URL, LUMA_HOSTS, SOCIAL_LAYER_BASE_URL
from scraper.page_document import EventPage, clean_text, dig, has_classes

logger = logging.getLogger(__name__)

Strategy = Callable[[EventPage], Any]

_MONTHS = r'(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Sept|Oct|Nov|Dec)[a-z]*\.?'
_WEEKDAYS = r'(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun)[a-z]*\.?'
_CLOCK = r'\d{1,2}:\d{2}(?:\s*[AaPp][Mm])?'
_OFFSET = r'(?:GMT|UTC)(?:\s*[+-]\d{1,2}(?::?\d{2})?)?'
_ZONE_LABEL = r'(?:' + _OFFSET + r'|[A-Z]{2,5}\b)'
_DASH = r'\s*' + defaults.RANGE_DASH + r'\s*'

DATE_TEXT = re.compile(
    r'(?:' + _WEEKDAYS + r',?\s+)?' + _MONTHS + r'\s+\d{1,2}(?:' + _DASH + r'(?:' + _MONTHS
    + r'\s+)?\d{1,2})?,?\s+\d{4}'
    r'|\d{4}-\d{2}-\d{2}'
    r'|\d{1,2}\s+' + _MONTHS + _DASH + r'\d{1,2}\s+' + _MONTHS + r',?\s+\d{4}'
    r'|\d{1,2}(?:' + _DASH + r'\d{1,2})?\s+' + _MONTHS + r',?\s+\d{4}'
    r'|\d{1,2}/\d{1,2}/\d{4}'
)
TIME_RANGE_TEXT = re.compile(
    r'(' + _CLOCK + r')(?:' + _DASH + r'(' + _CLOCK + r'))?(?:\s+(' + _OFFSET + r'))?'
)

# Combined date and time lines, most specific first.
SCHEDULE_PATTERNS = (
    # "Tue, Nov 11, 2025 16:00 - 17:00 GMT-3"
    re.compile(
        r'(' + _WEEKDAYS + r',\s+' + _MONTHS + r'\s+\d{1,2},\s+\d{4})\s+(\d{1,2}:\d{2})'
        + _DASH + r'(\d{1,2}:\d{2})\s+(' + _ZONE_LABEL + r')'
    ),
    # "Nov 11, 2025 4:00 PM - 5:00 PM GMT-3"
    re.compile(
        r'(' + _MONTHS + r'\s+\d{1,2},\s+\d{4})\s+(\d{1,2}:\d{2}\s*[AP]M)'
        + _DASH + r'(\d{1,2}:\d{2}\s*[AP]M)\s+(' + _ZONE_LABEL + r')'
    ),
    # "2025-11-11 16:00-17:00 GMT-3"
    re.compile(
        r'(\d{4}-\d{2}-\d{2})\s+(\d{1,2}:\d{2})' + _DASH + r'(\d{1,2}:\d{2})\s+(' + _ZONE_LABEL + r')'
    ),
)

STATUS_LABELS = (
    ('ongoing', ('ongoing', 'happening now', 'live now', 'in progress')),
    ('completed', ('completed', 'ended', 'past event', 'finished')),
    ('upcoming', ('upcoming',)),
)


def is_empty(value: Any) -> bool:
    return value is None or value == '' or value == [] or value == {}


def first_of(strategies: Sequence[Strategy], page: EventPage, field_name: str = '') -> Any:
    """
    Return the first non-empty value produced by a strategy.

    Args:
        strategies: Extraction strategies in priority order
        page: Parsed event page
        field_name: Field being extracted, for logging

    Returns:
        The first non-empty value, or None when every strategy came up empty
    """
    for strategy in strategies:
        try:
            value = strategy(page)
        except Exception as e:
            logger.debug(
                f"Strategy {strategy.__name__} failed for field '{field_name}': {e}"
            )
            continue
        if not is_empty(value):
            return value
    return None


def collect_all(strategies: Sequence[Strategy], page: EventPage, field_name: str = '') -> List[Any]:
    """Concatenate the list results of all strategies, dropping duplicates."""
    collected: List[Any] = []
    for strategy in strategies:
        try:
            values = strategy(page) or []
        except Exception as e:
            logger.debug(
                f"Strategy {strategy.__name__} failed for field '{field_name}': {e}"
            )
            continue
        for value in values:
            if value and value not in collected:
                collected.append(value)
    return collected


def _absolute_url(page: EventPage, href: Any, base: Optional[str] = None) -> Optional[str]:
    if not isinstance(href, str) or not href.strip():
        return None
    url = urljoin(base or page.url, href.strip())
    return url if urlparse(url).scheme in ('http', 'https') else None


def _luma_profile(username: Any) -> Optional[str]:
    return f"{LUMA_BASE_URL}/{username}" if isinstance(username, str) and username else None


def _zone(name: str):
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip().replace('Z', '+00:00')
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _clock(moment: datetime) -> str:
    suffix = 'AM' if moment.hour < 12 else 'PM'
    return f"{moment.hour % 12 or 12}:{moment.minute:02d} {suffix}"


def _offset_label(moment: datetime) -> str:
    offset = moment.utcoffset() or timedelta(0)
    minutes = int(offset.total_seconds() // 60)
    if minutes == 0:
        return 'UTC'
    sign = '+' if minutes > 0 else '-'
    hours, rest = divmod(abs(minutes), 60)
    return f"GMT{sign}{hours}" + (f":{rest:02d}" if rest else '')


def _has_clock(value: Any) -> bool:
    return isinstance(value, str) and 'T' in value


def _iso_schedule(start_value: Any, end_value: Any) -> Optional[Dict[str, str]]:
    """Schedule fields from ISO 8601 start/end values, kept in their own offset."""
    start = _parse_timestamp(start_value)
    if start is None:
        return None
    end = _parse_timestamp(end_value)
    schedule = {'date': start.date().isoformat()}
    if _has_clock(start_value):
        clock = start.strftime('%H:%M')
        if end is not None and _has_clock(end_value):
            clock += ' - ' + end.strftime('%H:%M')
        schedule['time'] = clock
        schedule['timezone'] = _offset_label(start)
    if end is not None and end.date() != start.date():
        schedule['end_date'] = end.date().isoformat()
    return schedule


# -- id ---------------------------------------------------------------------

def _id_from_social_layer_url(page: EventPage) -> Optional[str]:
    match = re.search(r'/event/detail/(\d+)', page.url)
    return match.group(1) if match else None


def _id_from_luma_data(page: EventPage) -> Optional[str]:
    value = page.luma('event', 'api_id') or page.luma('api_id')
    return str(value) if value else None


def _id_from_json_ld(page: EventPage) -> Optional[str]:
    identifier = dig(page.json_ld_event, 'identifier')
    if isinstance(identifier, dict):
        identifier = identifier.get('value')
    return str(identifier) if identifier else None


def _id_from_luma_slug(page: EventPage) -> Optional[str]:
    parsed = urlparse(page.url)
    host = (parsed.hostname or '').lower()
    if host not in LUMA_HOSTS:
        return None
    slug = parsed.path.strip('/').split('/')[0]
    return slug or None


# -- title and description ----------------------------------------------------

def _title_from_og(page: EventPage) -> Optional[str]:
    return page.meta('og:title')


def _title_from_luma_data(page: EventPage) -> Optional[str]:
    return clean_text(page.luma('event', 'name'))


def _title_from_json_ld(page: EventPage) -> Optional[str]:
    return clean_text(dig(page.json_ld_event, 'name'))


def _title_from_twitter(page: EventPage) -> Optional[str]:
    return page.meta('twitter:title')


def _title_from_title_tag(page: EventPage) -> Optional[str]:
    return page.title_tag


def _title_from_heading(page: EventPage) -> Optional[str]:
    return page.select_text('h1')


def _decode_newlines(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.replace('\\n', '\n').replace('\\"', '"').strip() or None


def _description_from_og(page: EventPage) -> Optional[str]:
    return _decode_newlines(page.raw_meta('og:description'))


def _description_from_meta(page: EventPage) -> Optional[str]:
    return _decode_newlines(page.raw_meta('description', 'twitter:description'))


def _description_from_json_ld(page: EventPage) -> Optional[str]:
    description = dig(page.json_ld_event, 'description')
    return description.strip() if isinstance(description, str) and description.strip() else None


# -- schedule -----------------------------------------------------------------

def _schedule_from_luma_data(page: EventPage) -> Optional[Dict[str, str]]:
    event = page.luma('event')
    if not isinstance(event, dict):
        return None
    start = _parse_timestamp(event.get('start_at'))
    if start is None:
        return None

    tz_name = event.get('timezone') or 'UTC'
    zone = _zone(tz_name)
    start = start.astimezone(zone)
    end = _parse_timestamp(event.get('end_at'))

    schedule = {
        'date': f"{start.strftime('%A, %B')} {start.day}, {start.year}",
        'time': _clock(start),
        'timezone': tz_name,
    }
    if end is not None:
        end = end.astimezone(zone)
        schedule['time'] += ' - ' + _clock(end)
        if end.date() != start.date():
            schedule['end_date'] = end.date().isoformat()
    return schedule


def _schedule_from_social_layer_markup(page: EventPage) -> Optional[Dict[str, str]]:
    schedule: Dict[str, str] = {}
    for element in page.find_all_with_classes('div', 'font-semibold', 'text-base'):
        text = clean_text(element.get_text(' ')) or ''
        match = DATE_TEXT.search(text)
        if match:
            schedule['date'] = match.group(0)
            break
    for element in page.find_all_with_classes('div', 'text-gray-400', 'text-base'):
        text = clean_text(element.get_text(' ')) or ''
        match = TIME_RANGE_TEXT.search(text)
        if match:
            schedule['time'] = ' - '.join(part for part in match.group(1, 2) if part)
            if match.group(3):
                schedule['timezone'] = re.sub(r'\s+', '', match.group(3))
            break
    return schedule if 'date' in schedule else None


def _schedule_from_json_ld(page: EventPage) -> Optional[Dict[str, str]]:
    event = page.json_ld_event
    if not event:
        return None
    return _iso_schedule(event.get('startDate'), event.get('endDate'))


def _schedule_from_event_meta(page: EventPage) -> Optional[Dict[str, str]]:
    return _iso_schedule(
        page.meta('event:start_time', 'og:event:start_time'),
        page.meta('event:end_time', 'og:event:end_time'),
    )


def _schedule_from_text(page: EventPage) -> Optional[Dict[str, str]]:
    text = page.text
    for pattern in SCHEDULE_PATTERNS:
        match = pattern.search(text)
        if match:
            return {
                'date': match.group(1),
                'time': f"{match.group(2)} - {match.group(3)}",
                'timezone': re.sub(r'\s+', '', match.group(4)),
            }

    date_match = DATE_TEXT.search(text)
    if not date_match:
        return None
    schedule = {'date': date_match.group(0)}
    nearby = text[date_match.end():date_match.end() + 80]
    time_match = TIME_RANGE_TEXT.search(nearby)
    if time_match:
        schedule['time'] = ' - '.join(part for part in time_match.group(1, 2) if part)
        if time_match.group(3):
            schedule['timezone'] = re.sub(r'\s+', '', time_match.group(3))
    return schedule


# -- location -----------------------------------------------------------------

def _coordinates(latitude: Any, longitude: Any) -> Optional[Coordinates]:
    try:
        return Coordinates(lat=float(latitude), lng=float(longitude))
    except (TypeError, ValueError):
        return None


def _location_from_luma_data(page: EventPage) -> Optional[Location]:
    geo = page.luma('event', 'geo_address_info')
    if not isinstance(geo, dict):
        return None
    coordinate = page.luma('event', 'coordinate') or {}
    coordinates = _coordinates(coordinate.get('latitude'), coordinate.get('longitude'))

    if geo.get('mode') == 'obfuscated' and geo.get('city_state'):
        parts = [part.strip() for part in geo['city_state'].split(',')]
        return Location(
            name=defaults.OBFUSCATED_ADDRESS,
            address=defaults.OBFUSCATED_ADDRESS,
            city=parts[0] if parts else '',
            region=parts[1] if len(parts) > 1 else '',
            country=geo.get('country') or '',
            coordinates=coordinates,
        )

    address = geo.get('address') or ''
    return Location(
        name=address,
        address=geo.get('full_address') or '',
        city=geo.get('city') or city_from_address(address),
        region=geo.get('region') or '',
        country=geo.get('country') or '',
        coordinates=coordinates,
    )


def _location_from_social_layer_markup(page: EventPage) -> Optional[Location]:
    icon = page.soup.find(
        'i', class_=lambda cls: bool(cls) and cls.startswith('uil-location-point')
    )
    if icon is None:
        return None
    name_el = icon.find_next(lambda tag: tag.name == 'div' and has_classes(tag, 'font-semibold', 'text-base'))
    address_el = icon.find_next(lambda tag: tag.name == 'div' and has_classes(tag, 'text-gray-400', 'text-base'))
    if name_el is None:
        return None

    name = clean_text(name_el.get_text(' ')) or ''
    address = clean_text(address_el.get_text(' ')) if address_el is not None else ''
    parts = [part.strip() for part in (address or '').split(',')]
    return Location(
        name=name,
        address=address or '',
        city=parts[-3] if len(parts) >= 3 else '',
        region=parts[-2] if len(parts) >= 2 else '',
        country=parts[-1] if address else '',
    )


def _location_from_json_ld(page: EventPage) -> Optional[Location]:
    location = dig(page.json_ld_event, 'location')
    if isinstance(location, list):
        location = location[0] if location else None
    if isinstance(location, str):
        return Location(name=location.strip(), address=location.strip())
    if not isinstance(location, dict):
        return None
    if location.get('@type') == 'VirtualLocation':
        return Location(name='Online', address=location.get('url') or '')

    address = location.get('address')
    country = ''
    if isinstance(address, dict):
        country = address.get('addressCountry') or ''
        if isinstance(country, dict):
            country = country.get('name') or ''
        street = clean_text(address.get('streetAddress')) or ''
        city = clean_text(address.get('addressLocality')) or ''
        region = clean_text(address.get('addressRegion')) or ''
        full = ', '.join(part for part in (street, city, region, country) if part)
    else:
        full = clean_text(address) or ''
        city = city_from_address(full)
        region = ''

    geo = location.get('geo') or {}
    return Location(
        name=clean_text(location.get('name')) or full,
        address=full,
        city=city,
        region=region,
        country=country,
        coordinates=_coordinates(geo.get('latitude'), geo.get('longitude')) if isinstance(geo, dict) else None,
    )


# -- organization and people --------------------------------------------------

def _organization_from_luma_data(page: EventPage) -> Optional[Organization]:
    calendar = page.luma('calendar')
    if not isinstance(calendar, dict) or not calendar.get('name'):
        return None
    name = calendar['name'].strip()
    org_type = classify_organization(name)
    if org_type == 'unknown' and calendar.get('is_personal') is False:
        org_type = 'company'
    return Organization(name=name, type=org_type)


def _organization_from_social_layer_markup(page: EventPage) -> Optional[Organization]:
    for element in page.find_all_with_classes('div', 'flex-row-item-center', 'text-lg', 'mt-1'):
        name = clean_text(element.get_text(' '))
        if name:
            return Organization(name=name, type=classify_organization(name))
    return None


def _organization_from_json_ld(page: EventPage) -> Optional[Organization]:
    organizer = dig(page.json_ld_event, 'organizer')
    if isinstance(organizer, list):
        organizer = organizer[0] if organizer else None
    if isinstance(organizer, str):
        organizer = {'name': organizer}
    if not isinstance(organizer, dict):
        return None
    name = clean_text(organizer.get('name'))
    if not name:
        return None
    org_type = classify_organization(name)
    if org_type == 'unknown' and organizer.get('@type') == 'Organization':
        org_type = 'company'
    return Organization(name=name, type=org_type)


def _hosts_from_luma_data(page: EventPage) -> Optional[List[Host]]:
    hosts = page.luma('hosts')
    if not isinstance(hosts, list):
        return None
    return [
        Host(
            name=clean_text(host.get('name')) or 'Unknown',
            role='host',
            profile_url=_luma_profile(host.get('username')),
        )
        for host in hosts if isinstance(host, dict)
    ]


def _hosts_from_social_layer_markup(page: EventPage) -> Optional[List[Host]]:
    hosts = []
    for anchor in page.find_all_with_classes('a', 'inline-flex'):
        name_el = anchor.find(lambda tag: tag.name == 'div' and has_classes(tag, 'font-semibold', 'text-sm'))
        role_el = anchor.find(lambda tag: tag.name == 'div' and has_classes(tag, 'text-xs', 'text-gray-400'))
        if name_el is None or role_el is None:
            continue
        role = (clean_text(role_el.get_text()) or '').lower()
        if role not in defaults.HOST_ROLES:
            continue
        name = clean_text(name_el.get_text(' '))
        if name:
            hosts.append(Host(
                name=name,
                role=role,
                profile_url=_absolute_url(page, anchor.get('href'), SOCIAL_LAYER_BASE_URL),
            ))
    return hosts


def _hosts_from_json_ld(page: EventPage) -> Optional[List[Host]]:
    event = page.json_ld_event
    if not event:
        return None
    hosts = []
    for key, role in (('organizer', 'host'), ('performer', 'co-host')):
        people = event.get(key)
        for person in people if isinstance(people, list) else [people]:
            if isinstance(person, dict) and person.get('@type') == 'Person' and clean_text(person.get('name')):
                hosts.append(Host(
                    name=clean_text(person['name']),
                    role=role,
                    profile_url=_absolute_url(page, person.get('url')),
                ))
    return hosts


def _participants_from_luma_data(page: EventPage) -> Optional[List[Participant]]:
    guests = page.luma('featured_guests')
    if not isinstance(guests, list):
        return None
    return [
        Participant(
            name=clean_text(guest.get('name')) or 'Unknown',
            profile_url=_luma_profile(guest.get('username')),
            avatar=guest.get('avatar_url') or None,
        )
        for guest in guests if isinstance(guest, dict)
    ]


def _participants_from_social_layer_markup(page: EventPage) -> Optional[List[Participant]]:
    participants = []
    for anchor in page.soup.find_all('a', href=True):
        if (anchor.get('class') or []) != ['flex-row-item-center']:
            continue
        label = anchor.find(lambda tag: tag.name == 'div' and (tag.get('class') or []) == ['text-xs'])
        name_el = label.find('div') if label is not None else None
        name = clean_text(name_el.get_text(' ')) if name_el is not None else None
        if not name:
            continue
        avatar = anchor.find('img')
        participants.append(Participant(
            name=name,
            profile_url=_absolute_url(page, anchor['href'], SOCIAL_LAYER_BASE_URL),
            avatar=_absolute_url(page, avatar.get('src')) if avatar is not None else None,
        ))
    return participants


def _participant_count_from_luma_data(page: EventPage) -> Optional[ParticipantCount]:
    data = page.luma_data
    if data is None or 'guest_count' not in data:
        return None
    maximum = page.luma('event', 'max_capacity')
    return ParticipantCount(
        count=int(data.get('guest_count') or 0),
        max_participants=int(maximum) if isinstance(maximum, (int, float)) else None,
    )


def _participant_count_from_text(page: EventPage) -> Optional[ParticipantCount]:
    nouns = r'(?:participants|attendees|going|guests|registered|spots)'
    match = re.search(r'(\d[\d,]*)\s*/\s*(\d[\d,]*)\s+' + nouns, page.text, re.IGNORECASE)
    if match:
        return ParticipantCount(
            count=int(match.group(1).replace(',', '')),
            max_participants=int(match.group(2).replace(',', '')),
        )
    match = re.search(
        r'(\d[\d,]*)\s+(?:people\s+)?(?:participants|attendees|going|guests|registered)\b',
        page.text, re.IGNORECASE
    )
    if match:
        return ParticipantCount(count=int(match.group(1).replace(',', '')))
    return None


# -- tags and classification hints --------------------------------------------

def _split_keywords(value: Any) -> List[str]:
    if isinstance(value, str):
        return [part.strip() for part in value.split(',') if part.strip()]
    if isinstance(value, list):
        return [item.strip() for item in value if isinstance(item, str) and item.strip()]
    return []


def _tags_from_json_ld(page: EventPage) -> List[str]:
    return _split_keywords(dig(page.json_ld_event, 'keywords'))


def _tags_from_luma_data(page: EventPage) -> List[str]:
    tags = []
    for key in ('categories', 'tags'):
        for item in page.luma(key) or page.luma('event', key) or []:
            name = item.get('name') if isinstance(item, dict) else item
            if isinstance(name, str) and name.strip():
                tags.append(name.strip())
    return tags


def _tags_from_social_layer_markup(page: EventPage) -> List[str]:
    known = {tag.lower(): tag for tag in defaults.KNOWN_TAGS}
    tags = []
    for element in page.select('[data-testid="event-tag"], .event-tag, .tag'):
        text = clean_text(element.get_text(' '))
        if text:
            tags.append(text)
    for element in page.soup.find_all('div'):
        if element.attrs or element.find(True) is not None:
            continue
        text = clean_text(element.get_text())
        if text and text.lower() in known:
            tags.append(known[text.lower()])
    return tags


def _tags_from_meta_keywords(page: EventPage) -> List[str]:
    return _split_keywords(page.meta('keywords'))


def _category_from_markup(page: EventPage) -> Optional[str]:
    return page.select_text('[data-testid="event-category"], .event-category, .category')


def _event_type_from_markup(page: EventPage) -> Optional[str]:
    return page.select_text('[data-testid="event-type"], .event-type')


def _status_from_markup(page: EventPage) -> Optional[str]:
    text = (page.select_text('[data-testid="event-status"], .event-status') or '').lower()
    for status, labels in STATUS_LABELS:
        if any(label in text for label in labels):
            return status
    return None


# -- content --------------------------------------------------------------------

def _content_from_markdown_payload(page: EventPage) -> Optional[str]:
    match = page.search(r'"markdownStr"\s*:\s*"((?:[^"\\]|\\.)*)"', flags=0)
    if not match:
        return None
    try:
        text = json.loads(f'"{match.group(1)}"')
    except json.JSONDecodeError:
        text = _decode_newlines(match.group(1))
    return text.strip() if text else None


def _mirror_text(node: Any) -> str:
    if not isinstance(node, dict):
        return ''
    if node.get('type') == 'text':
        return node.get('text') or ''
    if node.get('type') == 'hard_break':
        return '\n'
    return ''.join(_mirror_text(child) for child in node.get('content') or [])


def _content_from_luma_mirror(page: EventPage) -> Optional[str]:
    blocks = page.luma('description_mirror', 'content')
    if not isinstance(blocks, list):
        return None
    paragraphs = [_mirror_text(block).strip() for block in blocks]
    return '\n\n'.join(p for p in paragraphs if p) or None


def _content_from_prose_mirror(page: EventPage) -> Optional[str]:
    container = page.soup.find('div', class_='ProseMirror')
    if container is None:
        return None
    paragraphs = [clean_text(p.get_text(' ')) for p in container.find_all('p')]
    return '\n\n'.join(p for p in paragraphs if p) or None


def _comments_from_text(page: EventPage) -> Optional[int]:
    match = re.search(r'(\d[\d,]*)\s+comments?\b', page.text, re.IGNORECASE)
    return int(match.group(1).replace(',', '')) if match else None


def _comments_from_markup(page: EventPage) -> Optional[int]:
    count = len(page.select('[data-testid="comment"], .comment-item'))
    return count or None


# -- media ----------------------------------------------------------------------

def _media_from_meta(page: EventPage) -> List[str]:
    return [
        url for url in (
            _absolute_url(page, page.meta('og:image', 'og:image:url')),
            _absolute_url(page, page.meta('twitter:image')),
        ) if url
    ]


def _media_from_json_ld(page: EventPage) -> List[str]:
    images = dig(page.json_ld_event, 'image')
    urls = []
    for image in images if isinstance(images, list) else [images]:
        if isinstance(image, dict):
            image = image.get('url')
        url = _absolute_url(page, image)
        if url:
            urls.append(url)
    return urls


def _media_from_luma_data(page: EventPage) -> List[str]:
    url = _absolute_url(page, page.luma('event', 'cover_url') or page.luma('cover_url'))
    return [url] if url else []


def _media_from_content_images(page: EventPage) -> List[str]:
    container = page.soup.find('div', class_='ProseMirror')
    if container is None:
        return []
    return [
        url for url in (_absolute_url(page, img.get('src')) for img in container.find_all('img'))
        if url
    ]


ID_STRATEGIES = (
    _id_from_social_layer_url,
    _id_from_luma_data,
    _id_from_json_ld,
    _id_from_luma_slug,
)
TITLE_STRATEGIES = (
    _title_from_og,
    _title_from_luma_data,
    _title_from_json_ld,
    _title_from_twitter,
    _title_from_title_tag,
    _title_from_heading,
)
DESCRIPTION_STRATEGIES = (
    _description_from_og,
    _description_from_meta,
    _description_from_json_ld,
)
SCHEDULE_STRATEGIES = (
    _schedule_from_luma_data,
    _schedule_from_social_layer_markup,
    _schedule_from_json_ld,
    _schedule_from_event_meta,
    _schedule_from_text,
)
LOCATION_STRATEGIES = (
    _location_from_luma_data,
    _location_from_social_layer_markup,
    _location_from_json_ld,
)
ORGANIZATION_STRATEGIES = (
    _organization_from_luma_data,
    _organization_from_social_layer_markup,
    _organization_from_json_ld,
)
HOST_STRATEGIES = (
    _hosts_from_luma_data,
    _hosts_from_social_layer_markup,
    _hosts_from_json_ld,
)
TAG_STRATEGIES = (
    _tags_from_json_ld,
    _tags_from_luma_data,
    _tags_from_social_layer_markup,
    _tags_from_meta_keywords,
)
CONTENT_STRATEGIES = (
    _content_from_markdown_payload,
    _content_from_luma_mirror,
    _content_from_prose_mirror,
)
COMMENT_STRATEGIES = (
    _comments_from_text,
    _comments_from_markup,
)
PARTICIPANT_STRATEGIES = (
    _participants_from_luma_data,
    _participants_from_social_layer_markup,
)
PARTICIPANT_COUNT_STRATEGIES = (
    _participant_count_from_luma_data,
    _participant_count_from_text,
)
MEDIA_STRATEGIES = (
    _media_from_meta,
    _media_from_json_ld,
    _media_from_luma_data,
    _media_from_content_images,
)


class EventExtractor:
    """Extractor that reads every event field from a page's markup."""

    FIELD_STRATEGIES = (
        ('id', ID_STRATEGIES),
        ('title', TITLE_STRATEGIES),
        ('description', DESCRIPTION_STRATEGIES),
        ('location', LOCATION_STRATEGIES),
        ('organization', ORGANIZATION_STRATEGIES),
        ('hosts', HOST_STRATEGIES),
        ('tags', TAG_STRATEGIES),
        ('category', (_category_from_markup,)),
        ('event_type', (_event_type_from_markup,)),
        ('status_hint', (_status_from_markup,)),
        ('content_description', CONTENT_STRATEGIES),
        ('comments', COMMENT_STRATEGIES),
        ('participants', PARTICIPANT_STRATEGIES),
        ('participant_count', PARTICIPANT_COUNT_STRATEGIES),
    )

    def extract(self, html: str, url: str = '') -> ExtractedFields:
        """
        Extract all event fields from a page.

        Args:
            html: Raw page markup
            url: Page URL, used for ids and resolving relative links

        Returns:
            ExtractedFields with None for every field no strategy could read
        """
        fields = ExtractedFields()
        try:
            page = EventPage(html, url)
        except Exception as e:
            logger.warning(f"Failed to parse event page {url}: {e}")
            return fields

        for name, strategies in self.FIELD_STRATEGIES:
            setattr(fields, name, first_of(strategies, page, name))

        schedule = first_of(SCHEDULE_STRATEGIES, page, 'schedule') or {}
        fields.date = schedule.get('date')
        fields.time = schedule.get('time')
        fields.timezone = schedule.get('timezone')
        fields.end_date = schedule.get('end_date')

        fields.media = collect_all(MEDIA_STRATEGIES, page, 'media')

        found = [name for name, value in vars(fields).items() if not is_empty(value)]
        logger.info(f"Extracted {len(found)} fields from {url or 'page'}: {', '.join(found)}")
        return fields
