"""Base repository interfaces and the shared SQLite plumbing.

Every journal table is keyed by (user_id, date), so the repository
interface is expressed in those terms rather than a single entity ID.
"""

import logging
import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generic, List, Optional, Type, TypeVar, Union

from pydantic import ValidationError as PydanticValidationError

from ...config import get_settings
from ...exceptions import DatabaseError, InvalidDateError, ValidationError
from ...utils.dates import normalize_date
from ..schema import SCHEMA


logger = logging.getLogger(__name__)

# Type variable for the entity type stored in the repository
T = TypeVar("T")


def to_validation_error(
    error: PydanticValidationError,
    error_cls: Type[ValidationError] = ValidationError,
) -> ValidationError:
    """Convert the first pydantic error into one of our ValidationErrors."""
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or None
    return error_cls(first.get("msg", str(error)), field=field)


class UserDayRepository(ABC, Generic[T]):
    """
    Abstract base class for per-user, per-day storage.

    Type Parameters:
        T: The type of entity stored in this repository
    """

    @abstractmethod
    def get(self, user_id: str, date: str) -> Optional[T]:
        """
        Retrieve the entity for one user and day.

        Returns:
            The entity if found, None otherwise
        """
        pass

    @abstractmethod
    def get_range(self, user_id: str, start: str, end: str) -> List[T]:
        """
        Retrieve entities with ``start <= date <= end``.

        Returns:
            Entities sorted by date ascending
        """
        pass

    @abstractmethod
    def delete(self, user_id: str, date: str) -> bool:
        """
        Delete the entity for one user and day.

        Returns:
            True if a row was deleted, False if not found
        """
        pass


class SQLiteRepository:
    """Connection handling and schema bootstrap for SQLite repositories."""

    def __init__(self, db_path: Optional[Union[str, Path]] = None):
        """
        Args:
            db_path: Path to the SQLite database file. If None, uses the
                    configured ``db_path`` setting.
        """
        self.db_path = Path(db_path) if db_path else Path(get_settings().db_path)
        self._ensure_table_exists()

    @contextmanager
    def _get_connection(self):
        """Get database connection with context manager."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise DatabaseError(
                f"SQLite error on {self.db_path.name}: {e}",
                operation=type(self).__name__,
            ) from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _ensure_table_exists(self):
        """Create the journal tables if they do not exist yet."""
        with self._get_connection() as conn:
            conn.executescript(SCHEMA)

    @staticmethod
    def _require_date(value: Any) -> str:
        """Normalize ``value`` to YYYY-MM-DD or raise InvalidDateError."""
        normalized = normalize_date(value)
        if normalized is None:
            raise InvalidDateError(value)
        return normalized
