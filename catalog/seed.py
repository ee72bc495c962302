"""
Seed dataset for the book catalog.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional, Union

import structlog

from catalog.models import Book

logger = structlog.get_logger(__name__)


# ISBN -> record, in the order the catalog lists them
SEED_BOOKS: Dict[str, Dict] = {
    "1": {"author": "Chinua Achebe", "title": "Things Fall Apart"},
    "2": {"author": "Hans Christian Andersen", "title": "Fairy tales"},
    "3": {"author": "Dante Alighieri", "title": "The Divine Comedy"},
    "4": {"author": "Unknown", "title": "The Epic Of Gilgamesh"},
    "5": {"author": "Unknown", "title": "The Book Of Job"},
    "6": {"author": "Unknown", "title": "One Thousand and One Nights"},
    "7": {"author": "Unknown", "title": "Njál's Saga"},
    "8": {"author": "Jane Austen", "title": "Pride and Prejudice"},
    "9": {"author": "Honoré de Balzac", "title": "Le Père Goriot"},
    "10": {"author": "Samuel Beckett", "title": "Molloy, Malone Dies, The Unnamable, the trilogy"},
}


def _build_books(records: Dict[str, Dict]) -> List[Book]:
    books = []
    for isbn, record in records.items():
        books.append(Book(isbn=isbn, **{k: v for k, v in record.items() if k != "isbn"}))
    return books


def load_seed_books(path: Optional[Union[str, Path]] = None) -> List[Book]:
    """
    Load the books the catalog starts with.

    Args:
        path: Optional JSON file mapping ISBN to ``{title, author, reviews?}``.
            The built-in dataset is used when omitted.

    Returns:
        List of Book models in file order
    """
    if path is None:
        return _build_books(SEED_BOOKS)

    seed_path = Path(path)
    with seed_path.open("r", encoding="utf-8") as handle:
        records = json.load(handle)

    if not isinstance(records, dict):
        raise ValueError(f"Seed file {seed_path} must contain a JSON object keyed by ISBN")

    books = _build_books(records)
    logger.info("Loaded seed catalog", path=str(seed_path), books=len(books))
    return books
