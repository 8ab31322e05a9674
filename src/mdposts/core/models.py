"""Data models for source documents, rendered posts, and the frozen collection"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field

from mdposts.config import Settings


@dataclass(frozen=True)
class SourceFile:
    """Raw text of one markdown file; only lives during ingestion."""
    path:       Path
    asset_path: str            # site path of the file's directory, e.g. "/my-post"
    text:       str


class RenderContext(BaseModel):
    """Per-document values the markdown rules need to resolve paths and anchors."""
    model_config = ConfigDict(frozen=True)

    asset_path:  str = "/"
    slug:        str = ""
    posts_route: str = "posts"


class PostMetadata(BaseModel):
    """Normalized frontmatter. Keys not declared here pass through as extra fields."""
    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    slug:          str
    date:          datetime
    date_raw:      str
    banner:        str
    title:         Optional[str] = None
    description:   Optional[str] = None
    author:        Optional[str] = None
    tags:          tuple[str, ...] = ()
    published:     bool = False
    banner_credit: Optional[str] = Field(default=None, alias="bannerCredit")
    publisher:     Optional[str] = None
    publish_url:   Optional[str] = None
    canonical_url: Optional[str] = None    # explicit override only; see query.resolvers.canonical_url
    folder:        Optional[str] = None


class Post(BaseModel):
    model_config = ConfigDict(frozen=True)

    html:     str
    metadata: PostMetadata


@dataclass(frozen=True)
class PostCollection:
    """Posts sorted newest first. Built once, never mutated."""
    posts: tuple[Post, ...] = ()

    def __iter__(self) -> Iterator[Post]:
        return iter(self.posts)

    def __len__(self) -> int:
        return len(self.posts)

    def __getitem__(self, index: int) -> Post:
        return self.posts[index]

    def find(self, slug: str) -> Post | None:
        """Return the first post with the given slug, or None."""
        return next((p for p in self.posts if p.metadata.slug == slug), None)

    def filter(self, published: bool | None = None) -> list[Post]:
        """Return all posts, or only those whose published flag equals `published`."""
        if published is None:
            return list(self.posts)
        return [p for p in self.posts if p.metadata.published == published]


@dataclass(frozen=True)
class ContentContext:
    """Everything the query layer reads: the built collection and its settings."""
    posts:    PostCollection
    settings: Settings
