"""gh-aw command line interface.

Example:
    $ gh-aw gates .github/workflows/triage.md
    $ gh-aw gates .github/workflows/triage.md --format json
    $ gh-aw --version
"""

import typer

from gh_aw import __version__
from gh_aw.cli_utils import console
from gh_aw.commands.gates import gates_command

app = typer.Typer(
    name="gh-aw",
    help="Compile gating conditions of agentic workflows",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"gh-aw {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Compile gating conditions of agentic workflows."""


app.command(name="gates")(gates_command)


if __name__ == "__main__":
    app()
