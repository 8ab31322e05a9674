"""Post collection building: frontmatter, rendering, metadata normalization, and ordering"""

from __future__ import annotations

import logging
import posixpath
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from mdposts.config import Settings
from mdposts.core.frontmatter import MalformedFrontmatter, parse_frontmatter
from mdposts.core.models import ContentContext, Post, PostCollection, PostMetadata, RenderContext, SourceFile
from mdposts.core.parse import read_dir
from mdposts.core.render import render_to_html
from mdposts.core.rules import is_absolute_url
from mdposts.errors import DuplicateSlugError, InvalidFieldError, MissingFieldError, PostBuildError


logger = logging.getLogger(__name__)

# Fields normalization cannot do without; `tags` may be present but empty.
REQUIRED_FIELDS = ('slug', 'date', 'banner')


def parse_tags(raw: str) -> tuple[str, ...]:
    """Split a comma separated tag list, trimming each entry and dropping empty ones."""
    return tuple(t.strip() for t in raw.split(',') if t.strip())


def parse_published(raw: str | None) -> bool:
    """Only the exact string 'true' publishes a post."""
    return raw == 'true'


def parse_date(raw: str, path: Path | str | None = None) -> datetime:
    """Parse an ISO 8601 date or datetime; naive values are taken as UTC."""
    try:
        value = datetime.fromisoformat(raw.strip().strip('\'"'))
    except ValueError as e:
        raise InvalidFieldError('date', raw, path) from e
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def banner_url(origin: str, asset_path: str, banner: str) -> str:
    """Absolute banner URL: origin + asset directory + banner path, forward slashes only."""
    banner = banner.replace('\\', '/')
    if is_absolute_url(banner):
        return banner
    path = posixpath.normpath(posixpath.join('/', asset_path.replace('\\', '/'), banner.lstrip('/')))
    return f"{origin.rstrip('/')}/{path.lstrip('/')}"


def normalize_metadata(metadata: dict[str, str], source: SourceFile, settings: Settings) -> PostMetadata:
    """Turn raw frontmatter strings into PostMetadata; unknown keys pass through."""
    for name in REQUIRED_FIELDS:
        if not metadata.get(name):
            raise MissingFieldError(name, source.path)
    if 'tags' not in metadata:
        raise MissingFieldError('tags', source.path)

    data: dict[str, Any] = dict(metadata)
    data.update(
        date=parse_date(metadata['date'], source.path),
        date_raw=metadata['date'],
        tags=parse_tags(metadata['tags']),
        published=parse_published(metadata.get('published')),
        banner=banner_url(settings.site_origin, source.asset_path, metadata['banner']),
        folder=source.path.parent.name,
    )
    return PostMetadata.model_validate(data)


def build_post(source: SourceFile, settings: Settings) -> Post:
    """Parse, normalize, and render a single source file."""
    result = parse_frontmatter(source.text)
    if isinstance(result, MalformedFrontmatter):
        raise result.error(source.path)

    metadata = normalize_metadata(result.metadata, source, settings)
    context = RenderContext(asset_path=source.asset_path, slug=metadata.slug, posts_route=settings.posts_route)
    html = render_to_html(result.content, context, settings.parser_config)
    return Post(html=html, metadata=metadata)


def sort_by_date(posts: list[Post]) -> list[Post]:
    """Newest first; posts sharing a date keep their input order."""
    return sorted(posts, key=lambda p: p.metadata.date, reverse=True)


def build_collection(root_dir: Path | str, settings: Settings = None) -> PostCollection:
    """Build the frozen collection from every .md file under root_dir.

    Any structural problem (malformed frontmatter, missing or invalid
    required field, duplicate slug) aborts the whole build.
    """
    settings = settings or Settings()
    root = Path(root_dir)
    if not root.exists():
        raise PostBuildError("content directory does not exist", root)

    posts: list[Post] = []
    seen: dict[str, Path] = {}
    for source in read_dir(root):
        post = build_post(source, settings)
        slug = post.metadata.slug
        if slug in seen:
            raise DuplicateSlugError(slug, source.path, seen[slug])
        seen[slug] = source.path
        posts.append(post)
        logger.debug("Built post %r from %s", slug, source.path)

    logger.info("Built %d post(s) from %s", len(posts), root)
    return PostCollection(posts=tuple(sort_by_date(posts)))


def build_context(settings: Settings) -> ContentContext:
    """Build the collection from settings.content_dir and pair it with its settings."""
    return ContentContext(posts=build_collection(settings.content_dir, settings), settings=settings)
