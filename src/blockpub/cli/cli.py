"""CLI entrypoint: Typer app definition and command registration"""

import typer

from blockpub.cli.commands import build_cmd, parse_cmd


app = typer.Typer(name="blockpub", no_args_is_help=True, help="Block document static site builder")

app.command(name="build")(build_cmd)
app.command(name="parse")(parse_cmd)
