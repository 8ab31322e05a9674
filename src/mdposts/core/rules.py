"""Per-node HTML rendering rules.

Each function takes the node's content plus a RenderContext and returns
markup; none of them touch parser or renderer state.
"""

import logging
import posixpath
import re

from markdown_it.common.utils import escapeHtml

from mdposts.core.highlight import highlight_code, parse_fence_info, resolve_grammar
from mdposts.core.models import RenderContext
from mdposts.core.utils.slug import slugify


logger = logging.getLogger(__name__)

ABSOLUTE_URL_RE = re.compile(r'^(?:[a-z][a-z0-9+.-]*:|//)', re.IGNORECASE)
ANCHOR_OVERRIDE_RE = re.compile(r'\s*\{#?([^}]+)\}\s*$')


def render_code_block(source: str, info: str | None, ctx: RenderContext) -> str:
    """Highlight a fenced block; unknown languages fall back to a plain escaped block."""
    fence = parse_fence_info(info, source.count('\n') + 1)
    grammar = resolve_grammar(fence.language)
    highlighted = highlight_code(source, grammar, fence.lines) if grammar else None
    if highlighted is None:
        logger.warning("No syntax grammar for code fence language %r (post %r)", fence.language, ctx.slug)
        return f'<pre class="language-text"><code>{escapeHtml(source)}</code></pre>\n'

    caption = ''
    if fence.filename:
        caption = f'<div class="code-heading"><span class="file">{escapeHtml(fence.filename)}</span></div>'
    return (
        f'<pre class="language-{grammar}" tabindex="-1">'
        f'<code tabindex="0">{highlighted}</code>{caption}</pre>\n'
    )


def render_code_span(source: str) -> str:
    return f'<code class="language-text">{escapeHtml(source)}</code>'


def is_absolute_url(url: str) -> bool:
    return bool(ABSOLUTE_URL_RE.match(url))


def resolve_asset(src: str, ctx: RenderContext) -> str:
    """Resolve an image path against the post's asset directory; URLs with a scheme pass through."""
    if is_absolute_url(src):
        return src
    return posixpath.normpath(posixpath.join(ctx.asset_path, src.lstrip('/')))


def render_image(src: str, alt: str, title: str | None, ctx: RenderContext) -> str:
    title_attr = f' title="{escapeHtml(title)}"' if title else ''
    return (
        f'<figure><img src="{escapeHtml(resolve_asset(src, ctx))}" alt="" loading="lazy"{title_attr}/>'
        f'<figcaption>{escapeHtml(alt)}</figcaption></figure>'
    )


def render_link_open(href: str, title: str | None = None) -> str:
    """Open an anchor; site-relative targets get a prefetch hint."""
    attrs = [f'href="{escapeHtml(href)}"']
    if title:
        attrs.append(f'title="{escapeHtml(title)}"')
    if href.startswith('/') and not href.startswith('//'):
        attrs.append('prefetch="true"')
    return f'<a {" ".join(attrs)}>'


def split_anchor_override(text: str) -> tuple[str, str | None]:
    """Return (visible text, override) for headings like `Title {#custom-id}`."""
    m = ANCHOR_OVERRIDE_RE.search(text)
    # an odd backtick count before the braces means they sit inside a code span
    if not m or text[:m.start()].count('`') % 2:
        return text, None
    visible = text[:m.start()].strip()
    return visible, m.group(1).strip() or None


def heading_fragment(text: str) -> tuple[str, str]:
    """Return (visible text, fragment) for a heading's raw text."""
    visible, override = split_anchor_override(text)
    return visible, override if override else slugify(visible)


def render_heading_open(level: int, fragment: str, ctx: RenderContext) -> str:
    if not fragment:
        return f'<h{level}>'
    href = f'{ctx.posts_route}/{ctx.slug}#{fragment}'
    return (
        f'<h{level} id="{escapeHtml(fragment)}">'
        f'<a href="{escapeHtml(href)}" class="anchor" aria-hidden="true" tabindex="-1">'
    )


def render_heading_close(level: int, fragment: str) -> str:
    if not fragment:
        return f'</h{level}>\n'
    return f'</a></h{level}>\n'
