"""Flat `key: value` frontmatter extraction.

Documents start with a block delimited by two lines containing only `---`.
The block body is read line by line and split at the first colon; there is
no nesting and no multi-line values. Parsing yields a tagged result so that
callers decide whether a malformed header is fatal.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path

from mdposts.errors import MalformedFrontmatterError


FRONTMATTER_RE = re.compile(r'\A---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?=\r?\n|\Z)', re.DOTALL)


@dataclass(frozen=True)
class Frontmatter:
    """Successful parse: flat metadata plus the body following the closing delimiter."""
    metadata: dict[str, str] = field(default_factory=dict)
    content:  str = ""


@dataclass(frozen=True)
class MalformedFrontmatter:
    """Failed parse; no `---` delimited block at the start of the document."""
    reason: str

    def error(self, path: Path | str | None = None) -> MalformedFrontmatterError:
        return MalformedFrontmatterError(self.reason, path)


FrontmatterResult = Frontmatter | MalformedFrontmatter


def _parse_pairs(block: str) -> dict[str, str]:
    metadata: dict[str, str] = {}
    for line in block.splitlines():
        key, sep, value = line.partition(':')
        if not sep or not key.strip():
            continue
        metadata[key.strip()] = value.strip()
    return metadata


def parse_frontmatter(text: str) -> FrontmatterResult:
    """Split text into (metadata, content) or report why the header is malformed."""
    m = FRONTMATTER_RE.match(text)
    if not m:
        if not text.startswith('---'):
            return MalformedFrontmatter("document does not start with a '---' frontmatter block")
        return MalformedFrontmatter("frontmatter block is not closed by a '---' line")
    return Frontmatter(metadata=_parse_pairs(m.group(1) or ''), content=text[m.end():])


def extract_frontmatter(text: str, path: Path | str | None = None) -> Frontmatter:
    """Return the parsed Frontmatter, raising MalformedFrontmatterError when absent."""
    result = parse_frontmatter(text)
    if isinstance(result, MalformedFrontmatter):
        raise result.error(path)
    return result
