"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdgen.cli.commands import build_cmd, generate_cmd, init_cmd, list_cmd


app = typer.Typer(name="mdgen", no_args_is_help=True, help="Markdown to C# component source generator")

app.command(name="build")(build_cmd)
app.command(name="generate")(generate_cmd)
app.command(name="list")(list_cmd)
app.command(name="init")(init_cmd)
