"""Default values and keyword tables used when assembling event records."""

DEFAULT_ID = ''
DEFAULT_TITLE = ''
DEFAULT_DESCRIPTION = ''
DEFAULT_DATE = ''
DEFAULT_TIME = ''
DEFAULT_TIMEZONE = ''
DEFAULT_ORGANIZATION_NAME = ''
DEFAULT_ORGANIZATION_TYPE = 'unknown'
DEFAULT_CATEGORY = 'General'
DEFAULT_EVENT_TYPE = 'event'
DEFAULT_STATUS = 'upcoming'
DEFAULT_COMMENTS = 0

EVENT_STATUSES = ('upcoming', 'ongoing', 'completed')
ORGANIZATION_TYPES = ('company', 'team', 'residency', 'unknown')
HOST_ROLES = ('host', 'co-host')

# Checked in order; keywords match whole words, the first hit wins.
ORGANIZATION_TYPE_KEYWORDS = (
    ('residency', ('residency',)),
    ('team', ('team', 'collective', 'club', 'meetup')),
    ('company', ('company', 'inc', 'ltd', 'llc', 'labs', 'foundation', 'corp')),
)

EVENT_TYPE_KEYWORDS = (
    ('hackathon', ('hackathon', 'buildathon', 'hack day')),
    ('workshop', ('workshop', 'hands-on', 'masterclass', 'bootcamp')),
    ('conference', ('conference', 'summit', 'symposium', 'forum', 'expo')),
    ('festival', ('festival', 'fest')),
    ('webinar', ('webinar', 'livestream', 'online talk')),
    ('meetup', ('meetup', 'meet-up', 'gathering', 'happy hour', 'mixer', 'social')),
    ('reading-circle', ('reading circle', 'reading group', 'book club')),
    ('talk', ('talk', 'lecture', 'panel', 'fireside')),
    ('party', ('party', 'celebration', 'launch party')),
    ('retreat', ('retreat', 'residency', 'camp')),
)

CATEGORY_KEYWORDS = (
    ('Technology', (
        'decentralized', 'blockchain', 'crypto', 'web3', 'ethereum', 'ai',
        'artificial intelligence', 'machine learning', 'software', 'developer',
        'd/acc', 'zk', 'protocol',
    )),
    ('Governance', ('governance', 'dao', 'policy', 'voting', 'democracy', 'public goods')),
    ('Arts & Culture', ('art', 'music', 'poetry', 'film', 'design', 'zine', 'culture')),
    ('Science', ('science', 'research', 'biotech', 'longevity', 'climate')),
    ('Business', ('startup', 'founder', 'investor', 'business', 'entrepreneur')),
    ('Community', ('community', 'networking', 'social', 'wellness', 'meditation')),
    ('Education', ('education', 'learning', 'course', 'study', 'reading')),
)

# Tag labels recognised verbatim in SocialLayer tag chips.
KNOWN_TAGS = (
    'Decentralized Technologies',
    'Governance',
    'D/ACC',
    'AI',
    'Public Goods',
    'Art',
    'Music',
    'Health',
    'Science',
    'Education',
    'Community',
    'Workshop',
    'Social',
)

MONTHS = {
    'january': 1, 'jan': 1,
    'february': 2, 'feb': 2,
    'march': 3, 'mar': 3,
    'april': 4, 'apr': 4,
    'may': 5,
    'june': 6, 'jun': 6,
    'july': 7, 'jul': 7,
    'august': 8, 'aug': 8,
    'september': 9, 'sep': 9, 'sept': 9,
    'october': 10, 'oct': 10,
    'november': 11, 'nov': 11,
    'december': 12, 'dec': 12,
}

CITY_ALIASES = (
    ('Bangkok', ('bangkok',)),
    ('New York', ('new york', 'nyc', 'ny')),
    ('London', ('london',)),
    ('Paris', ('paris',)),
    ('Tokyo', ('tokyo',)),
    ('Singapore', ('singapore',)),
    ('Berlin', ('berlin',)),
    ('Madrid', ('madrid',)),
    ('Rome', ('rome',)),
    ('Amsterdam', ('amsterdam',)),
    ('Vienna', ('vienna',)),
    ('Prague', ('prague',)),
    ('Budapest', ('budapest',)),
    ('Warsaw', ('warsaw',)),
    ('Istanbul', ('istanbul',)),
    ('Dubai', ('dubai',)),
    ('Mumbai', ('mumbai', 'bombay')),
    ('Delhi', ('new delhi', 'delhi')),
    ('Bangalore', ('bangalore', 'bengaluru')),
    ('Shanghai', ('shanghai',)),
    ('Beijing', ('beijing', 'peking')),
    ('Hong Kong', ('hong kong',)),
    ('Seoul', ('seoul',)),
    ('Sydney', ('sydney',)),
    ('Melbourne', ('melbourne',)),
    ('Toronto', ('toronto',)),
    ('Vancouver', ('vancouver',)),
    ('Montreal', ('montreal', 'montréal')),
    ('Mexico City', ('mexico city',)),
    ('São Paulo', ('são paulo', 'sao paulo')),
    ('Rio de Janeiro', ('rio de janeiro',)),
    ('Buenos Aires', ('buenos aires',)),
    ('San Martín de los Andes', ('san martín de los andes', 'san martin de los andes')),
    ('Bariloche', ('san carlos de bariloche', 'bariloche')),
    ('Cairo', ('cairo',)),
    ('Johannesburg', ('johannesburg',)),
    ('Cape Town', ('cape town',)),
    ('Lagos', ('lagos',)),
    ('Nairobi', ('nairobi',)),
)

# Words that never name a city when guessing from a free-form address.
NON_CITY_WORDS = frozenset((
    'street', 'avenue', 'road', 'boulevard', 'drive', 'lane', 'way', 'place',
    'court', 'circle', 'square', 'plaza', 'center', 'centre', 'mall',
    'building', 'tower', 'hotel', 'restaurant', 'cafe', 'bar', 'pub', 'club',
    'house', 'hall', 'theater', 'theatre', 'museum', 'gallery', 'library',
    'school', 'university', 'college', 'hospital', 'clinic', 'office', 'park',
    'garden', 'the',
))

OBFUSCATED_ADDRESS = 'Register to See Address'

# Separators accepted between the two ends of a date or time range.
RANGE_DASH = r'[-–—]'
