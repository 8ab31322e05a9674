"""Read-only resolvers over an injected ContentContext.

These are plain functions so they can be exercised without a GraphQL
executor; mdposts.query.schema binds them to the schema fields.
"""

from datetime import datetime, timezone

from mdposts.config import Settings
from mdposts.core.models import ContentContext, Post, PostMetadata


HUMAN = 'human'
RAW = 'raw'
RECENT_DAYS = 7

# `&` goes first so the entities introduced afterwards are not escaped again.
HTML_ENTITIES = (('&', '&amp;'), ('<', '&lt;'), ('>', '&gt;'), ('"', '&quot;'))


def posts(context: ContentContext, published: bool | None = None) -> list[Post]:
    return context.posts.filter(published)


def post(context: ContentContext, slug: str) -> Post | None:
    return context.posts.find(slug)


def escape_entities(html: str) -> str:
    for char, entity in HTML_ENTITIES:
        html = html.replace(char, entity)
    return html


def post_html(post: Post, html_entities: bool = False) -> str:
    return escape_entities(post.html) if html_entities else post.html


def ordinal(n: int) -> str:
    if 11 <= n % 100 <= 13:
        return f'{n}th'
    suffix = {1: 'st', 2: 'nd', 3: 'rd'}.get(n % 10, 'th')
    return f'{n}{suffix}'


def distance_in_words(value: datetime, now: datetime) -> str:
    """Approximate distance between two datetimes, e.g. 'about 3 hours' or '2 days'."""
    minutes = round(abs((now - value).total_seconds()) / 60)
    if minutes < 1:
        return 'less than a minute'
    if minutes < 45:
        return '1 minute' if minutes == 1 else f'{minutes} minutes'
    if minutes < 90:
        return 'about 1 hour'
    if minutes < 1440:
        return f'about {round(minutes / 60)} hours'
    if minutes < 2520:
        return '1 day'
    return f'{round(minutes / 1440)} days'


def format_human_date(value: datetime, now: datetime = None) -> str:
    """'3 days ago' within a week of now, otherwise 'January 1st 2022'."""
    now = now or datetime.now(timezone.utc)
    if abs((now - value).days) <= RECENT_DAYS:
        distance = distance_in_words(value, now)
        return f'in {distance}' if value > now else f'{distance} ago'
    return f"{value.strftime('%B')} {ordinal(value.day)} {value.year}"


def metadata_date(metadata: PostMetadata, display_as: str | None = None, now: datetime = None) -> str:
    """ISO 8601 by default; 'human' for a friendly rendering, 'raw' for the frontmatter text."""
    if display_as == HUMAN:
        return format_human_date(metadata.date, now)
    if display_as == RAW:
        return metadata.date_raw
    return metadata.date.isoformat()


def post_url(slug: str, settings: Settings) -> str:
    return f"{settings.site_origin.rstrip('/')}/{settings.posts_route.strip('/')}/{slug}"


def canonical_url(metadata: PostMetadata, settings: Settings) -> str:
    """The frontmatter override, or `<site_origin>/<posts_route>/<slug>`."""
    return metadata.canonical_url or post_url(metadata.slug, settings)
