import typer

from entrykit.cli import run, materialize, wait, version
from entrykit.const import APP_NAME

app = typer.Typer(
    name=APP_NAME,
    no_args_is_help=True,
    rich_markup_mode="markdown",
    help="A container entrypoint that prepares configuration and waits for services before starting the main process",
)

# Full startup
# Option parsing stops at the command name, so everything after it belongs to the handed-off command
app.command(
    name="run",
    help="Substitute placeholders, wait for services and start a command",
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
    rich_help_panel="Startup",
)(run.run)

app.command(
    name="materialize",
    help="Substitute configuration placeholders from the environment (aliases: m)",
    rich_help_panel="Startup Steps",
)(materialize.materialize)
app.command(name="m", hidden=True)(materialize.materialize)

app.command(
    name="wait",
    help="Wait for services to accept connections (aliases: w)",
    rich_help_panel="Startup Steps",
)(wait.wait)
app.command(name="w", hidden=True)(wait.wait)

app.command(name="version", help="Show the entrykit version")(version.version)
