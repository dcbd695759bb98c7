"""Placement CLI - replica division for multi-cluster scheduling."""

import logging

import typer

from placement_core.cli.schedule import schedule_app
from placement_core.config import settings

app = typer.Typer(
    name="placement",
    help="Replica division for multi-cluster scheduling",
    no_args_is_help=True,
)

# Add command groups
app.add_typer(schedule_app, name="schedule")


@app.callback()
def configure() -> None:
    """Configure logging before any command runs."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
