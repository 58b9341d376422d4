"""ORM models. Importing this package registers every table on Base.metadata."""

from noteful.models.folder import Folder
from noteful.models.note import Note

# Largest value an Integer primary key column holds (PostgreSQL INTEGER)
MAX_ID = 2_147_483_647


def is_storable_id(value: int) -> bool:
    """True when `value` fits the id columns; anything else cannot match a row."""
    return 1 <= value <= MAX_ID


__all__ = ["Folder", "Note", "MAX_ID", "is_storable_id"]
