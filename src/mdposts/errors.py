"""Error taxonomy for the post ingestion pipeline"""

from pathlib import Path


class MdpostsError(Exception):
    """Root of all errors raised by mdposts."""


class PostBuildError(MdpostsError):
    """A source file could not be turned into a Post; fatal for the whole build."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.path}: {self.message}"


class MalformedFrontmatterError(PostBuildError, ValueError):
    """The document does not start with a `---` delimited frontmatter block."""


class MissingFieldError(PostBuildError):
    """A frontmatter key required for normalization is absent."""

    def __init__(self, field: str, path: Path | str | None = None) -> None:
        super().__init__(f"missing required frontmatter field '{field}'", path)
        self.field = field


class InvalidFieldError(PostBuildError):
    """A frontmatter value cannot be normalized (e.g. an unparseable date)."""

    def __init__(self, field: str, value: str, path: Path | str | None = None) -> None:
        super().__init__(f"invalid value for frontmatter field '{field}': {value!r}", path)
        self.field = field
        self.value = value


class DuplicateSlugError(PostBuildError):
    """Two source files declare the same slug."""

    def __init__(self, slug: str, path: Path | str, other: Path | str) -> None:
        super().__init__(f"slug '{slug}' is already used by {other}", path)
        self.slug = slug
        self.other = other
