"""New post scaffolding: `<root>/<slug>/index.md` with an images directory"""

from __future__ import annotations

from datetime import date
from pathlib import Path

from mdposts.core.utils.slug import slugify


TEMPLATE = """\
---
title: {title}
slug: {slug}
description:
author: {author}
date: {date}
tags:
banner: ./images/banner.jpg
bannerCredit:
published: false
---
"""


def scaffold_post(root: Path, title: str, author: str = "", today: date = None) -> Path:
    """Create the post directory and its index.md; refuse to overwrite an existing post."""
    slug = slugify(title)
    if not slug:
        raise ValueError(f"Cannot derive a slug from title {title!r}")
    post_dir = root / slug
    if post_dir.exists():
        raise FileExistsError(f"{post_dir} already exists")

    (post_dir / "images").mkdir(parents=True)
    index = post_dir / "index.md"
    index.write_text(
        TEMPLATE.format(title=title, slug=slug, author=author, date=(today or date.today()).isoformat()),
        encoding="utf-8",
    )
    return index
