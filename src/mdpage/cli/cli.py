"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdpage.cli.commands import init_cmd, list_cmd, publish_cmd, styles_cmd, unpublish_cmd


app = typer.Typer(name="mdpage", no_args_is_help=True, help="Publish markdown files as styled pages")

app.command(name="publish")(publish_cmd)
app.command(name="list")(list_cmd)
app.command(name="unpublish")(unpublish_cmd)
app.command(name="styles")(styles_cmd)
app.command(name="init")(init_cmd)
