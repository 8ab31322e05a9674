"""Integration tests for the read -> render -> collect -> query pipeline.

Each test runs the pipeline against the canonical post below and asserts
stable expected values. Read this file top-to-bottom as a reference for
what each stage produces with default settings.

Canonical post (content/hello/index.md)
---------------------------------------
    ---
    title: Hello & Welcome
    slug: hello
    date: 2022-03-22
    tags: python, , graphql
    banner: ./images/banner.jpg
    bannerCredit: Photo by Someone
    published: true
    ---
    ## Getting Started {#start}

    See [the docs](/docs) and [GitHub](https://github.com).

    ![A chart](./images/chart.png "Monthly")

    ```js{1}:index.js
    const x = 1;
    ```

Normalized metadata:
    tags      ("python", "graphql")          empty entries dropped
    banner    https://example.com/hello/images/banner.jpg
    folder    hello
    published True                           only the literal "true"
"""

import pytest

from mdposts.config import Settings
from mdposts.core.collection import build_collection
from mdposts.core.models import ContentContext
from mdposts.query.schema import execute_query


CANONICAL_MD = """\
---
title: Hello & Welcome
slug: hello
date: 2022-03-22
tags: python, , graphql
banner: ./images/banner.jpg
bannerCredit: Photo by Someone
published: true
---
## Getting Started {#start}

See [the docs](/docs) and [GitHub](https://github.com).

![A chart](./images/chart.png "Monthly")

```js{1}:index.js
const x = 1;
```
"""


# --- fixtures ---

@pytest.fixture(name="collection")
def collection_fixture(tmp_path):
    root = tmp_path / "content"
    (root / "hello").mkdir(parents=True)
    (root / "hello" / "index.md").write_text(CANONICAL_MD, encoding="utf-8")
    return build_collection(root)


@pytest.fixture(name="html")
def html_fixture(collection):
    return collection[0].html


# --- metadata ---

def test_metadata_normalized(collection):
    meta = collection.find("hello").metadata
    assert meta.title == "Hello & Welcome"
    assert meta.tags == ("python", "graphql")
    assert meta.banner == "https://example.com/hello/images/banner.jpg"
    assert meta.banner_credit == "Photo by Someone"
    assert meta.folder == "hello"
    assert meta.published is True
    assert meta.date.isoformat() == "2022-03-22T00:00:00+00:00"


# --- rendered html ---

def test_heading_uses_override_fragment(html):
    assert '<h2 id="start"><a href="posts/hello#start"' in html
    assert "Getting Started</a></h2>" in html
    assert "{#start}" not in html


def test_links_prefetch_internal_only(html):
    assert '<a href="/docs" prefetch="true">the docs</a>' in html
    assert '<a href="https://github.com">GitHub</a>' in html


def test_image_wrapped_in_figure(html):
    assert "<figure>" in html
    assert 'src="/hello/images/chart.png"' in html
    assert 'title="Monthly"' in html
    assert "<figcaption>A chart</figcaption>" in html
    assert "<p><figure>" not in html


def test_code_block_highlighted_with_caption(html):
    assert '<pre class="language-javascript" tabindex="-1">' in html
    assert 'class="line-highlight"' in html
    assert '<span class="file">index.js</span></div></pre>' in html


# --- query over the built collection ---

def test_query_over_built_collection(collection):
    context = ContentContext(posts=collection, settings=Settings(site_origin="https://blog.dev"))
    result = execute_query(context, """{
      posts(published: true) { metadata { slug bannerCredit canonical_url } }
    }""")
    assert result.errors is None
    assert result.data == {"posts": [{"metadata": {
        "slug": "hello",
        "bannerCredit": "Photo by Someone",
        "canonical_url": "https://blog.dev/posts/hello",
    }}]}
