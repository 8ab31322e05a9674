"""Markdown to HTML: markdown-it walks the token stream, mdposts.core.rules renders nodes"""

import re
from functools import lru_cache

from markdown_it import MarkdownIt
from markdown_it.common.utils import unescapeAll
from markdown_it.rules_core import StateCore

from mdposts.core import rules
from mdposts.core.models import RenderContext


LEADING_TABS_RE = re.compile(r'^\t+', re.MULTILINE)


def normalize_tabs(content: str) -> str:
    """Rewrite leading tabs as two spaces each so nested lists indent consistently."""
    return LEADING_TABS_RE.sub(lambda m: '  ' * len(m.group()), content)


def _context(env) -> RenderContext:
    return env.get('context') or RenderContext()


def _heading_anchors(state: StateCore) -> None:
    """Strip `{#override}` from heading text and record each heading's fragment."""
    tokens = state.tokens
    for i, tok in enumerate(tokens):
        if tok.type != 'heading_open' or i + 2 >= len(tokens):
            continue
        inline, close = tokens[i + 1], tokens[i + 2]
        visible, fragment = rules.heading_fragment(inline.content)
        inline.content = visible
        tok.meta['fragment'] = fragment
        close.meta['fragment'] = fragment


def _unwrap_figures(state: StateCore) -> None:
    """Hide the <p> around paragraphs whose only content is an image."""
    tokens = state.tokens
    for i, tok in enumerate(tokens):
        if tok.type != 'paragraph_open' or i + 2 >= len(tokens):
            continue
        inline = tokens[i + 1]
        children = [c for c in (inline.children or []) if c.type not in ('softbreak', 'hardbreak')]
        if len(children) == 1 and children[0].type == 'image':
            tok.hidden = True
            tokens[i + 2].hidden = True


def _fence(self, tokens, idx, options, env):
    token = tokens[idx]
    return rules.render_code_block(token.content.removesuffix('\n'), unescapeAll(token.info), _context(env))


def _code_block(self, tokens, idx, options, env):
    return rules.render_code_block(tokens[idx].content.removesuffix('\n'), None, _context(env))


def _code_inline(self, tokens, idx, options, env):
    return rules.render_code_span(tokens[idx].content)


def _image(self, tokens, idx, options, env):
    token = tokens[idx]
    alt = self.renderInlineAsText(token.children or [], options, env)
    return rules.render_image(token.attrGet('src') or '', alt, token.attrGet('title'), _context(env))


def _link_open(self, tokens, idx, options, env):
    token = tokens[idx]
    return rules.render_link_open(token.attrGet('href') or '', token.attrGet('title'))


def _heading_open(self, tokens, idx, options, env):
    token = tokens[idx]
    return rules.render_heading_open(int(token.tag[1]), token.meta.get('fragment', ''), _context(env))


def _heading_close(self, tokens, idx, options, env):
    token = tokens[idx]
    return rules.render_heading_close(int(token.tag[1]), token.meta.get('fragment', ''))


@lru_cache(maxsize=None)
def make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset with the post rendering rules installed."""
    md = MarkdownIt(preset, options_update={"linkify": False})
    md.core.ruler.before('inline', 'heading_anchors', _heading_anchors)
    md.core.ruler.after('inline', 'unwrap_figures', _unwrap_figures)
    md.add_render_rule('fence', _fence)
    md.add_render_rule('code_block', _code_block)
    md.add_render_rule('code_inline', _code_inline)
    md.add_render_rule('image', _image)
    md.add_render_rule('link_open', _link_open)
    md.add_render_rule('heading_open', _heading_open)
    md.add_render_rule('heading_close', _heading_close)
    return md


def render_to_html(content: str, context: RenderContext, parser_config: str = 'gfm-like') -> str:
    """Render a markdown body to HTML for the post described by `context`."""
    return make_parser(parser_config).render(normalize_tabs(content), {'context': context})
