"""CLI command implementations"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
import uvicorn

from mdposts.api.app import create_app
from mdposts.config import Settings, load_config
from mdposts.core.collection import build_context
from mdposts.core.export import write_collection
from mdposts.core.models import ContentContext
from mdposts.core.scaffold import scaffold_post
from mdposts.errors import PostBuildError
from mdposts.log import setup_logging
from mdposts.query import resolvers
from mdposts.query.schema import execute_query


RootArg = Annotated[Optional[str], typer.Argument(help="Content directory (defaults to content_dir setting)")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    setup_logging(settings.log_level)
    return settings


def _content(settings: Settings) -> ContentContext:
    """Build the post collection, turning build failures into exit 1."""
    try:
        return build_context(settings)
    except PostBuildError as e:
        _fail("Build failed", e)


def build_cmd(
    root: RootArg = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    origin: Annotated[Optional[str], typer.Option("--site-origin", help="Origin for absolute URLs")] = None,
    ):
    """Build the post collection and export it as JSON."""
    settings = _settings(overrides={"content_dir": root, "output_dir": out, "site_origin": origin})
    content = _content(settings)
    output_dir = Path(settings.output_dir)

    try:
        results = write_collection(content.posts, output_dir, settings)
    except OSError as e:
        _fail("Export failed", e)
    for slug, json_path in results:
        typer.echo(f"  {slug} -> {json_path}")
    typer.echo(f"Exported {len(results)} post(s) to {output_dir}/")


def list_cmd(
    root: RootArg = None,
    published: Annotated[Optional[bool], typer.Option("--published/--unpublished", help="Filter by published flag")] = None,
    ):
    """List posts newest first: date, slug, and title."""
    settings = _settings(overrides={"content_dir": root})
    content = _content(settings)
    posts = resolvers.posts(content, published)
    if not posts:
        typer.echo("No posts found.")
        raise typer.Exit(1)
    for p in posts:
        flag = "" if p.metadata.published else " (draft)"
        typer.echo(f"{p.metadata.date.date().isoformat()}  {p.metadata.slug}  {p.metadata.title or ''}{flag}")


def show_cmd(
    slug: Annotated[str, typer.Argument(help="Slug of the post")],
    root: RootArg = None,
    entities: Annotated[bool, typer.Option("--entities", help="Escape the HTML as entities")] = False,
    ):
    """Print the rendered HTML of one post."""
    settings = _settings(overrides={"content_dir": root})
    content = _content(settings)
    post = resolvers.post(content, slug)
    if post is None:
        _fail(f"No post with slug '{slug}'")
    typer.echo(resolvers.post_html(post, entities))


def query_cmd(
    query: Annotated[str, typer.Argument(help="GraphQL query text")],
    root: RootArg = None,
    variables: Annotated[Optional[str], typer.Option("--variables", help="JSON object of query variables")] = None,
    ):
    """Run a GraphQL query against the collection and print the JSON result."""
    settings = _settings(overrides={"content_dir": root})
    try:
        parsed_vars = json.loads(variables) if variables else None
    except json.JSONDecodeError as e:
        _fail("Invalid --variables JSON", e)
    content = _content(settings)

    result = execute_query(content, query, parsed_vars)
    typer.echo(json.dumps(result.formatted, indent=2, ensure_ascii=False))
    if result.errors:
        raise typer.Exit(1)


def new_cmd(
    title: Annotated[str, typer.Argument(help="Title of the new post")],
    root: RootArg = None,
    author: Annotated[str, typer.Option("--author", help="Author name")] = "",
    ):
    """Scaffold <root>/<slug>/index.md with frontmatter and an images directory."""
    settings = _settings(overrides={"content_dir": root})
    try:
        index = scaffold_post(Path(settings.content_dir), title, author)
    except (ValueError, FileExistsError) as e:
        _fail(str(e))
    typer.echo(f"Created {index}")


def serve_cmd(
    root: RootArg = None,
    host: Annotated[Optional[str], typer.Option("--host", help="Bind address")] = None,
    port: Annotated[Optional[int], typer.Option("--port", help="Bind port")] = None,
    ):
    """Serve the GraphQL API with uvicorn."""
    settings = _settings(overrides={"content_dir": root, "host": host, "port": port})
    content = _content(settings)
    uvicorn.run(create_app(settings, content), host=settings.host, port=settings.port)
