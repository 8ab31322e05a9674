"""File discovery and source loading for the content directory"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from mdposts.core.models import SourceFile


MD_EXTENSIONS = {'.md'}


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in MD_EXTENSIONS)


def asset_path(path: Path, root: Path) -> str:
    """Site path of the directory holding `path`, with the content root stripped."""
    try:
        relative = path.parent.relative_to(root)
    except ValueError:
        relative = Path()
    return str(PurePosixPath('/', *relative.parts))


def read_source(path: Path, root: Path) -> SourceFile:
    return SourceFile(path=path, asset_path=asset_path(path, root), text=path.read_text(encoding='utf-8-sig'))


def read_dir(root: Path) -> list[SourceFile]:
    """Read every markdown file under root (file or directory)."""
    base = root if root.is_dir() else root.parent
    return [read_source(p, base) for p in discover_files(root)]
