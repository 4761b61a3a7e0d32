"""Book API router."""

from fastapi import APIRouter, Depends
from loguru import logger

from src.book_api.api.http.deps import get_book_id, get_valid_book
from src.book_api.entities.service.book import BookRecord

router = APIRouter()


@router.get("/{id}")
def get_book_by_id(book_id: int = Depends(get_book_id)) -> str:
    """Acknowledge a lookup by numeric identifier."""
    logger.debug("Fetching book {} ({})", book_id, type(book_id).__name__)
    return f"Book with id {book_id}"


@router.post("/add")
def add_book(book: BookRecord = Depends(get_valid_book)) -> str:
    """Accept a book whose body passed schema validation."""
    logger.info("Book accepted", book_id=book.id, book_name=book.name)
    return "Book added"
