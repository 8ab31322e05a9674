"""Unit tests for core/scaffold.py"""

from datetime import date

import pytest

from mdposts.core.collection import build_collection
from mdposts.core.frontmatter import extract_frontmatter
from mdposts.core.scaffold import scaffold_post


def test_scaffold_post_creates_index_and_images(tmp_path):
    index = scaffold_post(tmp_path, "Hello & Welcome", "Jane Doe", today=date(2024, 5, 1))
    assert index == tmp_path / "hello-and-welcome" / "index.md"
    assert (tmp_path / "hello-and-welcome" / "images").is_dir()

    meta = extract_frontmatter(index.read_text(encoding="utf-8")).metadata
    assert meta["title"] == "Hello & Welcome"
    assert meta["slug"] == "hello-and-welcome"
    assert meta["date"] == "2024-05-01"
    assert meta["author"] == "Jane Doe"
    assert meta["published"] == "false"


def test_scaffolded_post_builds(tmp_path):
    scaffold_post(tmp_path, "Draft Idea", today=date(2024, 5, 1))
    [post] = build_collection(tmp_path)
    assert post.metadata.slug == "draft-idea"
    assert post.metadata.published is False


def test_scaffold_post_refuses_existing(tmp_path):
    scaffold_post(tmp_path, "Twice")
    with pytest.raises(FileExistsError):
        scaffold_post(tmp_path, "Twice")


def test_scaffold_post_needs_sluggable_title(tmp_path):
    with pytest.raises(ValueError):
        scaffold_post(tmp_path, "???")
