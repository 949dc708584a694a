"""Event processor for normalizing extracted fields into event records."""
import logging
import re
from datetime import date, datetime, timezone
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from processor import defaults
from processor.models import (
    EventContent,
    ExtractedFields,
    Host,
    Location,
    Organization,
    ParticipantCount,
    SocialLayerEvent,
)

logger = logging.getLogger(__name__)

KeywordTable = Sequence[Tuple[str, Sequence[str]]]

_MONTH_WORD = r'([^\W\d_]+)\.?'
_DAY = r'(\d{1,2})(?:st|nd|rd|th)?'
_DASH = r'\s*' + defaults.RANGE_DASH + r'\s*'


def iso_timestamp(moment: datetime) -> str:
    """Format a datetime as an ISO 8601 UTC timestamp with millisecond precision."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime('%Y-%m-%dT%H:%M:%S.') + f"{moment.microsecond // 1000:03d}Z"


def matches_keyword(text: str, keyword: str) -> bool:
    """Check whether a keyword occurs in text as a whole word or phrase."""
    pattern = r'(?<!\w)' + re.escape(keyword) + r'(?!\w)'
    return re.search(pattern, text, re.IGNORECASE) is not None


def classify_text(blocks: Iterable[str], table: KeywordTable) -> Optional[str]:
    """
    Return the label of the first keyword table entry matching any text block.

    Blocks are checked in order, so earlier blocks take precedence.
    """
    for block in blocks:
        if not block:
            continue
        for label, keywords in table:
            if any(matches_keyword(block, keyword) for keyword in keywords):
                return label
    return None


def classify_organization(name: str) -> str:
    """Classify an organization name as company, team, residency or unknown."""
    label = classify_text([name or ''], defaults.ORGANIZATION_TYPE_KEYWORDS)
    return label or defaults.DEFAULT_ORGANIZATION_TYPE


def city_from_address(address: str) -> str:
    """
    Recover a city name from a free-form address.

    Known cities are recognised by their common spellings; otherwise the
    first capitalized word that is not a street or venue word is used.
    """
    if not address:
        return ''

    for city, aliases in defaults.CITY_ALIASES:
        if any(matches_keyword(address, alias) for alias in aliases):
            return city

    for word in re.split(r'[,\s]+', address):
        if len(word) <= 2 or word.lower() in defaults.NON_CITY_WORDS:
            continue
        if word[0].isupper() and not word.replace('.', '').isdigit():
            return word
    return ''


class EventProcessor:
    """Processor that turns an extractor's partial field set into a full record."""

    DATE_FORMATS = [
        '%Y-%m-%d',      # ISO 8601
        '%B %d, %Y',     # Full month name
        '%b %d, %Y',     # Abbreviated month name
        '%a, %b %d, %Y', # SocialLayer, e.g. "Tue, Nov 11, 2025"
        '%A, %B %d, %Y', # Luma, e.g. "Tuesday, November 11, 2025"
        '%d %B %Y',      # European, full month name
        '%d %b %Y',      # European, abbreviated month name
        '%m/%d/%Y',      # US format
        '%d/%m/%Y',      # European format
    ]

    def __init__(
        self,
        undated_status: str = defaults.DEFAULT_STATUS,
        month_names: Optional[Dict[str, int]] = None
    ):
        """
        Initialize the processor.

        Args:
            undated_status: Status reported when the event date cannot be parsed
            month_names: Extra month names (e.g. other languages) mapped to 1-12
        """
        if undated_status not in defaults.EVENT_STATUSES:
            raise ValueError(f"Unknown event status: {undated_status}")
        self.undated_status = undated_status
        self.months = dict(defaults.MONTHS)
        for name, number in (month_names or {}).items():
            if not 1 <= int(number) <= 12:
                raise ValueError(f"Invalid month number for '{name}': {number}")
            self.months[name.lower()] = int(number)

    def assemble(
        self,
        fields: ExtractedFields,
        url: str,
        now: Optional[datetime] = None
    ) -> SocialLayerEvent:
        """
        Build a complete event record, filling gaps with defaults.

        Args:
            fields: Partial field set from the extractor
            url: Input URL, echoed back verbatim
            now: Scrape completion time (default: current UTC time)

        Returns:
            SocialLayerEvent with every field populated
        """
        now = now or datetime.now(timezone.utc)

        title = _text_or(fields.title, defaults.DEFAULT_TITLE)
        description = _text_or(fields.description, defaults.DEFAULT_DESCRIPTION)
        tags = self.normalize_tags(fields.tags or [])
        hosts = [self._normalize_host(host) for host in fields.hosts or [] if host.name]
        participants = [p for p in fields.participants or [] if p.name]

        event = SocialLayerEvent(
            id=_text_or(fields.id, defaults.DEFAULT_ID),
            title=title,
            description=description,
            date=_text_or(fields.date, defaults.DEFAULT_DATE),
            time=_text_or(fields.time, defaults.DEFAULT_TIME),
            timezone=_text_or(fields.timezone, defaults.DEFAULT_TIMEZONE),
            location=fields.location or Location(),
            organization=self._normalize_organization(fields.organization),
            hosts=hosts,
            tags=tags,
            category=self.classify_category(fields.category, title, description, tags),
            event_type=self.classify_event_type(fields.event_type, title, description, tags),
            status=self.derive_status(fields, now),
            content=EventContent(
                description=_text_or(fields.content_description, description),
                media=list(dict.fromkeys(m for m in fields.media or [] if m)),
                comments=_non_negative(fields.comments, defaults.DEFAULT_COMMENTS),
            ),
            participants=participants,
            participant_count=self._normalize_participant_count(
                fields.participant_count, len(participants)
            ),
            url=url,
            scraped_at=iso_timestamp(now),
        )

        logger.debug(
            f"Assembled event '{event.title}' ({event.status}, {event.event_type})"
        )
        return event

    def parse_date_range(self, text: str) -> Optional[Tuple[date, date]]:
        """
        Parse an event date, or a date range, out of display text.

        Args:
            text: Date text such as "Tue, Nov 11, 2025", "2025-11-11",
                "Nov 11 - 13, 2025" or "11 de noviembre de 2025"

        Returns:
            (start, end) dates, identical for single-day events, or None
            when no unambiguous date can be read
        """
        if not text:
            return None
        text = text.strip()

        for fmt in self.DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt).date()
                return parsed, parsed
            except ValueError:
                continue

        for parser in (
            self._parse_iso,
            self._parse_cross_month_range,
            self._parse_month_first,
            self._parse_day_first_cross_month,
            self._parse_day_first,
            self._parse_numeric,
        ):
            try:
                span = parser(text)
            except ValueError:
                span = None
            if span:
                return span
        return None

    def parse_event_date(self, text: str) -> Optional[date]:
        span = self.parse_date_range(text)
        return span[0] if span else None

    def derive_status(self, fields: ExtractedFields, now: datetime) -> str:
        """
        Derive upcoming/ongoing/completed from the event date.

        An explicit status label on the page wins. Otherwise the event is
        upcoming when it starts after today, completed when it ended before
        today and ongoing in between. Undated events get ``undated_status``.
        """
        if fields.status_hint in defaults.EVENT_STATUSES:
            return fields.status_hint

        try:
            span = self.parse_date_range(fields.date or '')
            if span is None:
                return self.undated_status

            start, end = span
            if fields.end_date:
                explicit_end = self.parse_event_date(fields.end_date)
                if explicit_end and explicit_end >= start:
                    end = max(end, explicit_end)

            today = now.astimezone(timezone.utc).date()
            if start > today:
                return 'upcoming'
            if end < today:
                return 'completed'
            return 'ongoing'
        except Exception as e:
            logger.warning(f"Failed to derive status from '{fields.date}': {e}")
            return self.undated_status

    def classify_event_type(
        self,
        explicit: Optional[str],
        title: str,
        description: str,
        tags: List[str]
    ) -> str:
        explicit = _text_or(explicit, '')
        if explicit:
            return explicit.lower()
        label = classify_text(
            [title, ' '.join(tags), description], defaults.EVENT_TYPE_KEYWORDS
        )
        return label or defaults.DEFAULT_EVENT_TYPE

    def classify_category(
        self,
        explicit: Optional[str],
        title: str,
        description: str,
        tags: List[str]
    ) -> str:
        explicit = _text_or(explicit, '')
        if explicit:
            return explicit
        label = classify_text(
            [' | '.join(tags), title, description], defaults.CATEGORY_KEYWORDS
        )
        return label or defaults.DEFAULT_CATEGORY

    def normalize_tags(self, tags: Iterable[str]) -> List[str]:
        """Strip tags and drop blanks and case-insensitive duplicates, keeping order."""
        seen = set()
        normalized = []
        for tag in tags:
            if not isinstance(tag, str):
                continue
            tag = re.sub(r'\s+', ' ', tag).strip().lstrip('#')
            if not tag or tag.lower() in seen:
                continue
            seen.add(tag.lower())
            normalized.append(tag)
        return normalized

    def _normalize_organization(self, organization: Optional[Organization]) -> Organization:
        if organization is None:
            return Organization(
                name=defaults.DEFAULT_ORGANIZATION_NAME,
                type=defaults.DEFAULT_ORGANIZATION_TYPE
            )
        org_type = organization.type
        if org_type not in defaults.ORGANIZATION_TYPES or org_type == 'unknown':
            org_type = classify_organization(organization.name)
        return Organization(name=organization.name.strip(), type=org_type)

    def _normalize_host(self, host: Host) -> Host:
        role = host.role.lower().replace(' ', '-') if host.role else 'host'
        if role not in defaults.HOST_ROLES:
            role = 'host'
        return Host(name=host.name.strip(), role=role, profile_url=host.profile_url)

    def _normalize_participant_count(
        self,
        participant_count: Optional[ParticipantCount],
        listed: int
    ) -> ParticipantCount:
        if participant_count is None:
            return ParticipantCount(count=listed)
        maximum = participant_count.max_participants
        if maximum is not None and maximum < 0:
            maximum = None
        return ParticipantCount(
            count=_non_negative(participant_count.count, listed),
            max_participants=maximum
        )

    def _month(self, word: str) -> Optional[int]:
        return self.months.get(word.lower().rstrip('.'))

    def _parse_iso(self, text: str) -> Optional[Tuple[date, date]]:
        match = re.search(r'\b(\d{4})-(\d{2})-(\d{2})(?!\d)', text)
        if not match:
            return None
        start = date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
        return start, start

    def _parse_cross_month_range(self, text: str) -> Optional[Tuple[date, date]]:
        # "Nov 30 - Dec 2, 2025", "Dec 30 - Jan 2, 2026"
        pattern = _MONTH_WORD + r'\s+' + _DAY + _DASH + _MONTH_WORD + r'\s+' + _DAY + r',?\s+(\d{4})'
        for match in re.finditer(pattern, text):
            first, second = self._month(match.group(1)), self._month(match.group(3))
            if first and second:
                return _month_span(
                    int(match.group(5)), first, int(match.group(2)), second, int(match.group(4))
                )
        return None

    def _parse_month_first(self, text: str) -> Optional[Tuple[date, date]]:
        # "Tue, Nov 11, 2025", "November 11 - 13, 2025"
        pattern = _MONTH_WORD + r'\s+' + _DAY + r'(?:' + _DASH + _DAY + r')?,?\s+(\d{4})'
        for match in re.finditer(pattern, text):
            month = self._month(match.group(1))
            if month:
                year = int(match.group(4))
                start = date(year, month, int(match.group(2)))
                end = date(year, month, int(match.group(3))) if match.group(3) else start
                return start, max(start, end)
        return None

    def _parse_day_first_cross_month(self, text: str) -> Optional[Tuple[date, date]]:
        # "30 Nov - 2 Dec 2025", "30 de noviembre - 2 de diciembre de 2025"
        pattern = (
            r'\b' + _DAY + r'\s+(?:de\s+)?' + _MONTH_WORD + _DASH
            + _DAY + r'\s+(?:de\s+)?' + _MONTH_WORD + r',?\s+(?:de\s+)?(\d{4})'
        )
        for match in re.finditer(pattern, text, re.IGNORECASE):
            first, second = self._month(match.group(2)), self._month(match.group(4))
            if first and second:
                return _month_span(
                    int(match.group(5)), first, int(match.group(1)), second, int(match.group(3))
                )
        return None

    def _parse_day_first(self, text: str) -> Optional[Tuple[date, date]]:
        # "11 November 2025", "11 - 13 Nov 2025", "11 de noviembre de 2025"
        pattern = (
            r'\b' + _DAY + r'(?:' + _DASH + _DAY + r')?\s+(?:de\s+)?'
            + _MONTH_WORD + r',?\s+(?:de\s+)?(\d{4})'
        )
        for match in re.finditer(pattern, text, re.IGNORECASE):
            month = self._month(match.group(3))
            if month:
                year = int(match.group(4))
                start = date(year, month, int(match.group(1)))
                end = date(year, month, int(match.group(2))) if match.group(2) else start
                return start, max(start, end)
        return None

    def _parse_numeric(self, text: str) -> Optional[Tuple[date, date]]:
        match = re.search(r'\b(\d{1,2})/(\d{1,2})/(\d{4})\b', text)
        if not match:
            return None
        first, second, year = int(match.group(1)), int(match.group(2)), int(match.group(3))
        # US order unless the first number cannot be a month
        if first > 12:
            start = date(year, second, first)
        else:
            start = date(year, first, second)
        return start, start


def _month_span(
    year: int,
    first_month: int,
    first_day: int,
    second_month: int,
    second_day: int
) -> Tuple[date, date]:
    """Build a range whose year is written once, after its end date."""
    # "Dec 30 - Jan 2, 2026" starts in the previous year
    start_year = year - 1 if second_month < first_month else year
    start = date(start_year, first_month, first_day)
    end = date(year, second_month, second_day)
    return start, max(start, end)


def _text_or(value: Optional[str], default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _non_negative(value, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return max(0, number)
