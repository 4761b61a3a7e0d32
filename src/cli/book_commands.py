"""Book payload CLI commands."""

import json

import typer
from rich.markup import escape
from rich.table import Table

from src.book_api.core.errors import ClientInputError, ValidationError
from src.book_api.core.validation import BookValidator, parse_book_id
from src.book_api.runtime.context import get_config

from .utils import console

book_app = typer.Typer(help="📚 Book payload commands")


@book_app.command(name="validate")
def validate(
    payload: str = typer.Argument(..., help='JSON body, e.g. \'{"id": 1, "name": "Dune"}\''),
) -> None:
    """
    ✅ Validate a book body the same way POST /book/add does.
    """
    try:
        data = json.loads(payload)
    except (ValueError, RecursionError) as e:
        console.print(f"[red]❌ Malformed JSON: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    validator = BookValidator(get_config().validation)
    try:
        book = validator.validate(data)
    except ValidationError as e:
        table = Table(title=e.message)
        table.add_column("Field", style="cyan")
        table.add_column("Constraint", style="magenta")
        table.add_column("Message", style="red")
        for violation in e.violations:
            table.add_row(violation.field, violation.constraint, violation.message)
        console.print(table)
        raise typer.Exit(1) from e

    console.print(f"[green]✅ Valid book:[/green] id={book.id} name={escape(repr(book.name))}")


@book_app.command(name="parse-id")
def parse_id(
    raw: str = typer.Argument(..., help="Path parameter value"),
) -> None:
    """
    🔢 Parse a book identifier the same way GET /book/{id} does.
    """
    try:
        book_id = parse_book_id(raw)
    except ClientInputError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(1) from e

    console.print(f"[green]✅ Book id:[/green] {book_id}")
