"""CLI entrypoint that wires the clone command into a Typer app."""

import typer

from .commands.clone import clone

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

app = typer.Typer(
    add_completion=False,
    help="Clone all repositories of a GitHub user, ordered by mine/fork/contributing.",
    context_settings=CONTEXT_SETTINGS,
)

app.command(context_settings=CONTEXT_SETTINGS)(clone)
