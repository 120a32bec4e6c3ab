# Copyright (c) Syntropy Systems
"""Main CLI entry point for potionlab."""

import logging

import typer
from rich.logging import RichHandler

from potionlab.cli.backup import export, import_backup
from potionlab.cli.init_cmd import init
from potionlab.cli.matrix import matrix
from potionlab.cli.recommend import recommend
from potionlab.cli.record import failure, hint, pending, resolve, success
from potionlab.cli.remaining import remaining
from potionlab.cli.seasons import seasons
from potionlab.cli.server_cmd import serve
from potionlab.cli.trials import remove, trials
from potionlab.cli.untested import untested

app = typer.Typer(
    name="potionlab",
    help=(
        "Recipe discovery helper. Record trials, watch the candidate space "
        "shrink, try what is left."
    ),
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Recipe discovery helper."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(show_path=False)],
        )


# Register commands
_ = app.command()(init)
_ = app.command()(success)
_ = app.command()(hint)
_ = app.command()(failure)
_ = app.command()(pending)
_ = app.command()(resolve)
_ = app.command()(remove)
_ = app.command()(trials)
_ = app.command()(remaining)
_ = app.command()(recommend)
_ = app.command()(matrix)
_ = app.command()(untested)
_ = app.command(name="export")(export)
_ = app.command(name="import")(import_backup)
_ = app.command()(seasons)
_ = app.command()(serve)


if __name__ == "__main__":
    app()
