"""Root test configuration: environment isolation and shared post-writing fixtures"""

import logging
import os
from pathlib import Path

import pytest


POST_TEMPLATE = """\
---
title: {title}
slug: {slug}
description: About {title}
author: Jane Doe
date: {date}
tags: {tags}
banner: ./images/banner.jpg
published: {published}
---
{body}"""


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch):
    """Drop MDPOSTS_* env vars so settings come from defaults unless a test sets them."""
    for name in list(os.environ):
        if name.startswith("MDPOSTS_"):
            monkeypatch.delenv(name)
    yield
    logger = logging.getLogger("mdposts")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture(name="write_post")
def write_post_fixture():
    """Factory writing `<root>/<folder>/index.md` from POST_TEMPLATE; returns the file path."""
    def _write(
        root: Path,
        slug: str,
        date: str = "2021-01-01",
        title: str = None,
        tags: str = "python, testing",
        published: str = "true",
        body: str = "\n# Hello\n\nSome text.\n",
        folder: str = None,
        ) -> Path:
        path = root / (folder or slug) / "index.md"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            POST_TEMPLATE.format(
                title=title or slug.replace("-", " ").title(),
                slug=slug, date=date, tags=tags, published=published, body=body,
            ),
            encoding="utf-8",
        )
        return path
    return _write


@pytest.fixture(name="content_dir")
def content_dir_fixture(tmp_path, write_post):
    """A content root with two published posts and one draft."""
    root = tmp_path / "content"
    write_post(root, "older-post", date="2021-01-01")
    write_post(root, "newer-post", date="2022-01-01", body="\n## Setup {#install}\n\n```ts{2}:app.ts\nconst a = 1;\nconst b = 2;\n```\n")
    write_post(root, "draft-post", date="2021-06-01", published="false")
    return root
