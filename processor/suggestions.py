"""Post-event zine content suggestions."""
from typing import List

from processor.models import EventScrapeResult

UNAVAILABLE = 'Unable to generate suggestions - event data not available'

GENERIC_SUGGESTIONS = (
    'Memorable Moments: What made you laugh, think, or feel inspired?',
    'TIL (Today I Learned): Key takeaways and insights',
    'Connections Made: New friends, collaborators, or mentors',
    'Behind the Scenes: What the organizers did that made it special',
    'Anonymous Messages: Share thoughts without attribution',
    'Poetry Corner: Creative expressions inspired by the event',
    'Perks & Swag: What cool things did you get?',
    'Compliments Corner: Appreciate the people who made it happen',
    'Funny Moments: Memes, jokes, and lighthearted memories',
    'Future Ideas: What would you like to see next time?',
    'Gratitude Section: Thank you notes to organizers and participants',
    'Resource Sharing: Tools, links, and resources mentioned',
    'Action Items: What are you going to do differently because of this event?',
    'Community Building: How can we stay connected?',
    'Event Evolution: Suggestions for future improvements',
)


def generate_zine_content_suggestions(result: EventScrapeResult) -> List[str]:
    """
    Suggest zine sections for an event that has been scraped.

    Args:
        result: Scrape result for the event

    Returns:
        Event-specific suggestions followed by the generic zine prompts
    """
    if not result.success or result.data is None:
        return [UNAVAILABLE]

    event = result.data
    suggestions = [f'Event Recap: "{event.title}" - {event.date or "Date TBD"}']

    if event.description:
        suggestions.append(f"Deep Dive: {event.description[:100]}...")

    if event.location.name:
        suggestions.append(f"Venue Spotlight: {event.location.name}")
    if event.location.city:
        suggestions.append(f"Local Insights: What made {event.location.city} special?")

    if event.organization.name:
        suggestions.append(f"Organizer Appreciation: Shoutout to {event.organization.name}")

    for tag in event.tags:
        suggestions.append(f"Topic Discussion: {tag} - What did you learn?")

    if event.participant_count.count > 0:
        suggestions.append(
            "Community Moments: Share your favorite interaction with "
            f"{event.participant_count.count} participants"
        )

    if event.content.media:
        suggestions.append('Photo Gallery: Share your best shots from the event')
    if event.content.comments > 0:
        suggestions.append(
            f"Discussion Highlights: Top insights from {event.content.comments} comments"
        )

    suggestions.extend(GENERIC_SUGGESTIONS)
    return suggestions
