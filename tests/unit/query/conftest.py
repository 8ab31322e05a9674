"""In-memory fixtures for query tests; no files are read"""

from datetime import datetime, timezone

import pytest

from mdposts.config import Settings
from mdposts.core.models import ContentContext, Post, PostCollection, PostMetadata


@pytest.fixture(name="make_post")
def make_post_fixture():
    def _make(slug: str, year: int, published: bool = True, html: str = "<p>Hi</p>", **extra) -> Post:
        meta = PostMetadata(
            slug=slug,
            title=slug.title(),
            date=datetime(year, 1, 1, tzinfo=timezone.utc),
            date_raw=f"{year}-01-01",
            banner=f"https://example.com/{slug}/banner.jpg",
            tags=("python",),
            published=published,
            **extra,
        )
        return Post(html=html, metadata=meta)
    return _make


@pytest.fixture(name="context")
def context_fixture(make_post):
    posts = PostCollection(posts=(
        make_post("newest", 2023),
        make_post("draft", 2022, published=False, html="<p>A & B</p>"),
        make_post("oldest", 2021, bannerCredit="Photo by X", canonical_url="https://dev.to/oldest"),
    ))
    return ContentContext(posts=posts, settings=Settings(site_origin="https://blog.dev"))
