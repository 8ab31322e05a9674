"""Export pipeline: JSON index of post metadata, an RSS feed, and one JSON file per post"""

from __future__ import annotations

import json
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path

from mdposts.config import Settings
from mdposts.core.models import Post, PostCollection
from mdposts.query.resolvers import escape_entities, post_url


CONTENT_NS = "http://purl.org/rss/1.0/modules/content/"


def top_tags(posts: PostCollection | list[Post], limit: int = 15) -> list[str]:
    """Most used tags, by count descending then name descending."""
    counts = Counter(tag for p in posts for tag in p.metadata.tags)
    ranked = sorted(counts.items(), key=lambda kv: (kv[1], kv[0]), reverse=True)
    return [tag for tag, _ in ranked[:limit]]


def build_metadata(post: Post) -> dict:
    """JSON-ready metadata dict, keyed by the names the query surface uses."""
    return post.metadata.model_dump(mode='json', by_alias=True)


def build_index(posts: PostCollection) -> dict:
    """Listing payload: metadata of every post (collection order) and the top tags."""
    return {
        "posts": [build_metadata(p) for p in posts],
        "tags": top_tags(posts),
    }


def rfc822_date(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime("%a, %d %b %Y %H:%M:%S +0000")


def build_rss(posts: PostCollection, settings: Settings) -> str:
    """RSS 2.0 feed of the published posts, newest first, with the entity-escaped HTML as content."""
    published = [p for p in posts if p.metadata.published]
    items = []
    for post in published:
        meta = post.metadata
        link = post_url(meta.slug, settings)
        items.append("\n".join([
            "<item>",
            f"<title>{escape_entities(meta.title or meta.slug)}</title>",
            f"<description>{escape_entities(meta.description or '')}</description>",
            f"<link>{link}</link>",
            f'<guid isPermaLink="false">{link}</guid>',
            f"<pubDate>{rfc822_date(meta.date)}</pubDate>",
            f"<content:encoded>{escape_entities(post.html)}</content:encoded>",
            "</item>",
        ]))

    channel_link = f"{settings.site_origin.rstrip('/')}/{settings.posts_route.strip('/')}"
    last_build = rfc822_date(published[0].metadata.date if published else datetime.now(timezone.utc))
    return "\n".join([
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<rss version="2.0" xmlns:content="{CONTENT_NS}">',
        "<channel>",
        f"<title>{escape_entities(settings.app_name)}</title>",
        f"<link>{channel_link}</link>",
        f"<description>Posts from {escape_entities(settings.site_origin)}</description>",
        f"<lastBuildDate>{last_build}</lastBuildDate>",
        *items,
        "</channel>",
        "</rss>",
        "",
    ])


def write_post(post: Post, output_dir: Path) -> Path:
    """Write `<output_dir>/posts/<slug>.json` holding html + metadata."""
    dest_dir = output_dir / "posts"
    dest_dir.mkdir(parents=True, exist_ok=True)
    json_path = dest_dir / f"{post.metadata.slug}.json"
    json_path.write_text(
        json.dumps({"html": post.html, "metadata": build_metadata(post)}, indent=2, ensure_ascii=False),
        encoding='utf-8',
    )
    return json_path


def write_collection(posts: PostCollection, output_dir: Path, settings: Settings = None) -> list[tuple[str, Path]]:
    """Write index.json, rss.xml and one file per post. Returns (slug, json_path) pairs."""
    output_dir.mkdir(parents=True, exist_ok=True)
    (output_dir / "rss.xml").write_text(build_rss(posts, settings or Settings()), encoding='utf-8')
    (output_dir / "index.json").write_text(
        json.dumps(build_index(posts), indent=2, ensure_ascii=False),
        encoding='utf-8',
    )
    return [(p.metadata.slug, write_post(p, output_dir)) for p in posts]
