"""Shared test fixtures: sample event pages."""
import json

import pytest

SOCIAL_LAYER_URL = 'https://app.sola.day/event/detail/16716'
LUMA_URL = 'https://lu.ma/builders-breakfast'
GENERIC_URL = 'https://example.com/events/zine-fest'


@pytest.fixture
def social_layer_html() -> str:
    """SocialLayer event page, content tab."""
    return r"""
    <html>
      <head>
        <title>Reading Circle | Social Layer</title>
        <meta property="og:title" content="Network State Reading Circle">
        <meta property="og:description" content="Weekly reading circle.\nBring a friend.">
        <meta property="og:image" content="https://cdn.sola.day/cover.png">
      </head>
      <body>
        <div class="flex-row-item-center gap-1.5 text-lg mt-1" style="color: #333">Edge City Residency</div>
        <div class="flex gap-2">
          <i class="uil-calendar-alt"></i>
          <div>
            <div class="font-semibold text-base">Tue, Nov 11, 2025</div>
            <div class="text-gray-400 text-base">16:00 - 17:00 GMT-3</div>
          </div>
        </div>
        <div class="flex gap-2">
          <i class="uil-location-point text-xl"></i>
          <div>
            <div class="font-semibold text-base">Casa Patagonia &amp; Friends</div>
            <div class="text-gray-400 text-base">Av. San Martín 123, San Martín de los Andes, Neuquén, Argentina</div>
          </div>
        </div>
        <a class="inline-flex items-center" href="/profile/alice">
          <div class="font-semibold text-sm text-nowrap">Alice</div>
          <div class="text-xs text-gray-400">Host</div>
        </a>
        <a class="inline-flex items-center" href="/profile/bob">
          <div class="font-semibold text-sm text-nowrap">Bob</div>
          <div class="text-xs text-gray-400">Co-Host</div>
        </a>
        <div class="flex gap-1"><div>Decentralized Technologies</div><div>Governance</div></div>
        <a class="flex-row-item-center" href="/profile/carol">
          <img src="https://cdn.sola.day/carol.png">
          <div class="text-xs"><div>Carol</div></div>
        </a>
        <a class="flex-row-item-center" href="https://app.sola.day/profile/dave">
          <div class="text-xs"><div>Dave</div></div>
        </a>
        <script>self.__next_f.push({"markdownStr":"# Welcome\nWe read **The Network State**.\n\"Bring notes\""})</script>
      </body>
    </html>
    """


@pytest.fixture
def luma_payload() -> dict:
    """Luma __NEXT_DATA__ payload."""
    return {
        'props': {'pageProps': {'initialData': {'data': {
            'api_id': 'evt-abc123',
            'event': {
                'api_id': 'evt-abc123',
                'name': 'Builders Breakfast',
                'start_at': '2025-11-12T02:00:00.000Z',
                'end_at': '2025-11-12T04:00:00.000Z',
                'timezone': 'America/Vancouver',
                'geo_address_info': {
                    'mode': 'shown',
                    'address': 'Hive Vancouver',
                    'full_address': '128 W Hastings St, Vancouver, BC V6B 1G8, Canada',
                    'city': 'Vancouver',
                    'region': 'British Columbia',
                    'country': 'Canada',
                },
                'coordinate': {'latitude': 49.28, 'longitude': -123.1},
                'cover_url': 'https://images.lumacdn.com/cover.jpg',
                'max_capacity': 80,
            },
            'calendar': {'name': 'Vancouver Builders Club', 'is_personal': False},
            'hosts': [
                {'name': 'Erin', 'username': 'erin'},
                {'name': 'Frank', 'username': None},
            ],
            'featured_guests': [
                {
                    'name': 'Gina',
                    'username': 'gina',
                    'avatar_url': 'https://images.lumacdn.com/gina.png',
                },
            ],
            'guest_count': 42,
            'description_mirror': {
                'type': 'doc',
                'content': [
                    {'type': 'paragraph', 'content': [
                        {'type': 'text', 'text': 'Coffee and '},
                        {'type': 'text', 'text': 'demos.'},
                    ]},
                    {'type': 'paragraph'},
                    {'type': 'paragraph', 'content': [
                        {'type': 'text', 'text': 'Bring a laptop.'},
                    ]},
                ],
            },
        }}}},
    }


def render_luma_page(payload: dict) -> str:
    return (
        '<html><head>'
        '<title>Builders Breakfast · Luma</title>'
        '<script id="__NEXT_DATA__" type="application/json">'
        f'{json.dumps(payload)}'
        '</script></head><body><div id="__next"></div></body></html>'
    )


@pytest.fixture
def luma_html(luma_payload) -> str:
    return render_luma_page(luma_payload)


@pytest.fixture
def json_ld_html() -> str:
    """Generic event page described with schema.org JSON-LD."""
    data = {
        '@context': 'https://schema.org',
        '@type': 'Event',
        'name': 'Zine Fest',
        'description': 'A festival of zines.',
        'startDate': '2025-11-20T10:00:00-05:00',
        'endDate': '2025-11-22T18:00:00-05:00',
        'identifier': 'zf-2025',
        'keywords': 'zines, art, Zines',
        'image': ['https://example.com/a.jpg', {'url': 'https://example.com/b.jpg'}],
        'location': {
            '@type': 'Place',
            'name': 'Town Hall',
            'address': {
                '@type': 'PostalAddress',
                'streetAddress': '1 Main St',
                'addressLocality': 'Brooklyn',
                'addressRegion': 'NY',
                'addressCountry': 'US',
            },
            'geo': {'latitude': 40.6, 'longitude': -73.9},
        },
        'organizer': {'@type': 'Organization', 'name': 'Paper Collective'},
        'performer': [{'@type': 'Person', 'name': 'Hana', 'url': '/people/hana'}],
    }
    return (
        '<html><head>'
        '<meta property="og:image" content="/static/og.jpg">'
        f'<script type="application/ld+json">{json.dumps(data)}</script>'
        '</head><body><h1>Zine Fest 2025</h1></body></html>'
    )


@pytest.fixture
def title_only_html() -> str:
    return '<html><head><title>Test Page</title></head><body></body></html>'
