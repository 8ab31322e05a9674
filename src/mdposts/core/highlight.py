"""Code fence annotations and Pygments syntax highlighting.

A fence info string looks like ``ts{2-3,5}:example.ts``: a base language,
optional ``{...}`` line ranges to highlight, and an optional ``:filename``
caption.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound


logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = 'txt'
LINE_HIGHLIGHT_CLASS = 'line-highlight'

# Fence language -> grammar name (used in the `language-<grammar>` class).
GRAMMARS: dict[str, str] = {
    'bash':    'bash',
    'sh':      'bash',
    'html':    'markup',
    'sv':      'markup',
    'svelte':  'markup',
    'js':      'javascript',
    'ts':      'typescript',
    'json':    'json',
    'css':     'css',
    'txt':     'textile',
    'graphql': 'graphql',
    'yml':     'yaml',
    'yaml':    'yaml',
    'diff':    'diff',
    'cs':      'csharp',
    'sql':     'sql',
}

# Grammar -> Pygments lexer alias.
LEXERS: dict[str, str] = {
    'bash':       'bash',
    'markup':     'html',
    'javascript': 'javascript',
    'typescript': 'typescript',
    'json':       'json',
    'css':        'css',
    'textile':    'text',
    'graphql':    'graphql',
    'yaml':       'yaml',
    'diff':       'diff',
    'csharp':     'csharp',
    'sql':        'sql',
}

RANGE_RE = re.compile(r'\{([^}]*)\}')


@dataclass(frozen=True)
class FenceInfo:
    language: str
    lines:    tuple[int, ...] = ()
    filename: str = ''


def expand_line_ranges(annotation: str, max_line: int = None) -> tuple[int, ...]:
    """Expand every `{n}` / `{n-m}` group (comma separated) into sorted 1-based line numbers.

    Parts that are not integers are skipped; the rest of the annotation still applies.
    Ranges are clipped to `max_line` when given.
    """
    lines: set[int] = set()
    for match in RANGE_RE.finditer(annotation):
        for part in match.group(1).split(','):
            part = part.strip()
            if not part:
                continue
            start, sep, end = part.partition('-')
            try:
                lo = int(start)
                hi = int(end) if sep and end.strip() else lo
            except ValueError:
                logger.debug("Ignoring malformed line range %r in %r", part, annotation)
                continue
            if lo < 1:
                logger.debug("Ignoring non-positive line range %r in %r", part, annotation)
                continue
            if max_line is not None:
                hi = min(hi, max_line)
            lines.update(range(lo, hi + 1))
    return tuple(sorted(lines))


def parse_fence_info(info: str | None, max_line: int = None) -> FenceInfo:
    """Split a fence info string into language, highlighted lines and filename."""
    info = (info or '').strip() or DEFAULT_LANGUAGE
    cuts = [i for i in (info.find('{'), info.find(':')) if i != -1]
    language = info[:min(cuts)].strip() if cuts else info
    annotation, sep, filename = info.partition(':')
    return FenceInfo(
        language=language or DEFAULT_LANGUAGE,
        lines=expand_line_ranges(annotation, max_line),
        filename=filename.strip() if sep else '',
    )


def resolve_grammar(language: str) -> str | None:
    """Map a fence language token to its grammar name, or None if unknown."""
    return GRAMMARS.get(language.strip())


def highlight_code(source: str, grammar: str, lines: tuple[int, ...] = ()) -> str | None:
    """Return highlighted HTML (without a wrapping <pre>), or None when no lexer exists."""
    try:
        lexer = get_lexer_by_name(LEXERS.get(grammar, grammar), stripnl=False)
    except ClassNotFound:
        return None
    formatter = HtmlFormatter(nowrap=True, hl_lines=list(lines))
    return highlight(source, lexer, formatter).replace('class="hll"', f'class="{LINE_HIGHLIGHT_CLASS}"')
