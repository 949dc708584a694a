"""Unit tests for zine content suggestions."""
from datetime import datetime, timezone

from processor.event_processor import EventProcessor
from processor.models import (
    EventScrapeResult,
    ExtractedFields,
    Location,
    Organization,
    ParticipantCount,
    ScrapeMetadata,
)
from processor.suggestions import GENERIC_SUGGESTIONS, UNAVAILABLE, generate_zine_content_suggestions

NOW = datetime(2025, 11, 11, 12, 0, tzinfo=timezone.utc)
METADATA = ScrapeMetadata(url='https://example.com/e', scraped_at='2025-11-11T12:00:00.000Z')


def _result(fields: ExtractedFields) -> EventScrapeResult:
    event = EventProcessor().assemble(fields, 'https://example.com/e', NOW)
    return EventScrapeResult.ok(event, METADATA)


class TestSuggestions:
    """Test cases for generate_zine_content_suggestions."""

    def test_failed_result(self):
        """Test a failed scrape yields the single unavailable message."""
        result = EventScrapeResult.failure('boom', METADATA)
        assert generate_zine_content_suggestions(result) == [UNAVAILABLE]

    def test_full_event(self):
        """Test event-specific suggestions come first, in order."""
        fields = ExtractedFields(
            title='Zine Fest',
            description='A festival of zines.',
            date='2025-11-20',
            location=Location(name='Town Hall', city='Brooklyn'),
            organization=Organization(name='Paper Collective', type='team'),
            tags=['zines', 'art'],
            participant_count=ParticipantCount(count=25),
            media=['https://example.com/a.jpg'],
            comments=3,
        )

        suggestions = generate_zine_content_suggestions(_result(fields))

        assert suggestions[:10] == [
            'Event Recap: "Zine Fest" - 2025-11-20',
            'Deep Dive: A festival of zines....',
            'Venue Spotlight: Town Hall',
            'Local Insights: What made Brooklyn special?',
            'Organizer Appreciation: Shoutout to Paper Collective',
            'Topic Discussion: zines - What did you learn?',
            'Topic Discussion: art - What did you learn?',
            'Community Moments: Share your favorite interaction with 25 participants',
            'Photo Gallery: Share your best shots from the event',
            'Discussion Highlights: Top insights from 3 comments',
        ]
        assert suggestions[10:] == list(GENERIC_SUGGESTIONS)

    def test_sparse_event(self):
        """Test an event with no details gets the recap and generic prompts only."""
        suggestions = generate_zine_content_suggestions(_result(ExtractedFields(title='Test Page')))

        assert suggestions == ['Event Recap: "Test Page" - Date TBD'] + list(GENERIC_SUGGESTIONS)

    def test_long_description_truncated(self):
        """Test the deep dive quotes the first 100 characters."""
        fields = ExtractedFields(title='T', description='x' * 150)

        suggestions = generate_zine_content_suggestions(_result(fields))

        assert suggestions[1] == 'Deep Dive: ' + 'x' * 100 + '...'
