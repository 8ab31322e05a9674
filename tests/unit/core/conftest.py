"""Shared fixtures for core unit tests"""

import pytest

from mdposts.core.models import RenderContext


@pytest.fixture(name="ctx")
def ctx_fixture():
    return RenderContext(asset_path="/my-post", slug="my-post")
