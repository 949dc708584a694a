"""Data models for scraped event pages."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Coordinates:
    """Geographic coordinates of a venue."""
    lat: float
    lng: float


@dataclass(frozen=True)
class Location:
    """Venue of an event."""
    name: str = ''
    address: str = ''
    city: str = ''
    region: str = ''
    country: str = ''
    coordinates: Optional[Coordinates] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'name': self.name,
            'address': self.address,
            'city': self.city,
            'region': self.region,
            'country': self.country,
        }
        if self.coordinates is not None:
            data['coordinates'] = {
                'lat': self.coordinates.lat,
                'lng': self.coordinates.lng,
            }
        return data


@dataclass(frozen=True)
class Organization:
    """Organizer of an event."""
    name: str = ''
    type: str = 'unknown'  # "company", "team", "residency", "unknown"

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'type': self.type}


@dataclass(frozen=True)
class Host:
    """Person hosting an event."""
    name: str
    role: str = 'host'  # "host" or "co-host"
    profile_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {'name': self.name, 'role': self.role}
        if self.profile_url:
            data['profileUrl'] = self.profile_url
        return data


@dataclass(frozen=True)
class Participant:
    """Person attending an event."""
    name: str
    profile_url: Optional[str] = None
    avatar: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {'name': self.name}
        if self.profile_url:
            data['profileUrl'] = self.profile_url
        if self.avatar:
            data['avatar'] = self.avatar
        return data


@dataclass(frozen=True)
class EventContent:
    """Long-form content attached to an event page."""
    description: str = ''
    media: List[str] = field(default_factory=list)
    comments: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'description': self.description,
            'media': list(self.media),
            'comments': self.comments,
        }


@dataclass(frozen=True)
class ParticipantCount:
    """Attendance figures for an event."""
    count: int = 0
    max_participants: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {'count': self.count}
        if self.max_participants is not None:
            data['maxParticipants'] = self.max_participants
        return data


@dataclass(frozen=True)
class SocialLayerEvent:
    """Structured record produced from a single event page."""
    id: str
    title: str
    description: str
    date: str
    time: str
    timezone: str
    location: Location
    organization: Organization
    hosts: List[Host]
    tags: List[str]
    category: str
    event_type: str
    status: str  # "upcoming", "ongoing", "completed"
    content: EventContent
    participants: List[Participant]
    participant_count: ParticipantCount
    url: str
    scraped_at: str

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys used by the HTTP API."""
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'date': self.date,
            'time': self.time,
            'timezone': self.timezone,
            'location': self.location.to_dict(),
            'organization': self.organization.to_dict(),
            'hosts': [host.to_dict() for host in self.hosts],
            'tags': list(self.tags),
            'category': self.category,
            'eventType': self.event_type,
            'status': self.status,
            'content': self.content.to_dict(),
            'participants': [p.to_dict() for p in self.participants],
            'participantCount': self.participant_count.to_dict(),
            'url': self.url,
            'scrapedAt': self.scraped_at,
        }


@dataclass(frozen=True)
class ScrapeMetadata:
    """Request bookkeeping attached to every scrape result."""
    url: str
    scraped_at: str
    processing_time: int = 0  # milliseconds

    def to_dict(self) -> Dict[str, Any]:
        return {
            'url': self.url,
            'scrapedAt': self.scraped_at,
            'processingTime': self.processing_time,
        }


@dataclass(frozen=True)
class EventScrapeResult:
    """Envelope returned for every scrape, successful or not."""
    success: bool
    metadata: ScrapeMetadata
    data: Optional[SocialLayerEvent] = None
    error: Optional[str] = None

    def __post_init__(self):
        if self.success != (self.data is not None):
            raise ValueError('data must be present if and only if success is true')

    @classmethod
    def ok(cls, data: SocialLayerEvent, metadata: ScrapeMetadata) -> 'EventScrapeResult':
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def failure(cls, error: str, metadata: ScrapeMetadata) -> 'EventScrapeResult':
        return cls(success=False, error=error, metadata=metadata)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {'success': self.success}
        if self.data is not None:
            body['data'] = self.data.to_dict()
        if self.error is not None:
            body['error'] = self.error
        body['metadata'] = self.metadata.to_dict()
        return body


@dataclass
class ExtractedFields:
    """Partial field set produced by the extractor.

    ``None`` means no extraction strategy found a value; the processor
    replaces it with the documented default.
    """
    id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[str] = None
    end_date: Optional[str] = None
    time: Optional[str] = None
    timezone: Optional[str] = None
    location: Optional[Location] = None
    organization: Optional[Organization] = None
    hosts: Optional[List[Host]] = None
    tags: Optional[List[str]] = None
    category: Optional[str] = None
    event_type: Optional[str] = None
    status_hint: Optional[str] = None
    content_description: Optional[str] = None
    media: Optional[List[str]] = None
    comments: Optional[int] = None
    participants: Optional[List[Participant]] = None
    participant_count: Optional[ParticipantCount] = None
