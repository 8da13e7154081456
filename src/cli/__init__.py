"""Main CLI application module."""

import typer

from .dev_commands import db_app, serve

app = typer.Typer(
    help="Product catalog service CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="serve")(serve)
app.add_typer(db_app, name="db")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
