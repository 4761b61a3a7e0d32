"""Main CLI application module."""

import typer

from .book_commands import book_app
from .dev_commands import dev_app

app = typer.Typer(
    help="📚 Book API CLI - Development server and payload validation",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(book_app, name="book")
app.add_typer(dev_app, name="dev")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
