"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdposts.cli.commands import build_cmd, list_cmd, new_cmd, query_cmd, serve_cmd, show_cmd


app = typer.Typer(name="mdposts", no_args_is_help=True, help="Markdown blog posts to HTML, served over GraphQL")

app.command(name="build")(build_cmd)
app.command(name="list")(list_cmd)
app.command(name="show")(show_cmd)
app.command(name="query")(query_cmd)
app.command(name="new")(new_cmd)
app.command(name="serve")(serve_cmd)
