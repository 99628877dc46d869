"""
Durable favorites store for saved drinks.

This module persists FavoriteEntry records (id, name, thumbnail, instructions)
in a SQL database through SQLAlchemy. The store is constructed once per process
(build_favorites_store) and injected into every screen that needs favorites, so
all readers share one source of truth.

Semantics:
- list(): every saved entry; order is whatever the database returns. Read
  failures (unreachable or corrupt store) are logged and yield an empty list.
- add(): upsert by drink id, committed before returning.
- remove(): deletes every row with the id; unknown ids are a no-op.
- Write failures roll back and raise UnrecoverableStoreError; callers must not
  continue as if the write happened.
- A database that cannot be initialized (corrupt file) still yields a store:
  it reads as empty and every write raises UnrecoverableStoreError.

Ingredient slots are not persisted. A favorite rebuilt into a Drink has an empty
ingredient list until it is re-fetched from the catalog by id.
"""

import logging
import threading
from typing import List, Optional, Set

from pydantic import ValidationError
from sqlalchemy import Column, String, Text, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from compass.config import FavoritesConfig
from compass.models import FavoriteEntry

logger = logging.getLogger(__name__)

Base = declarative_base()


class FavoriteDrinkRow(Base):
    """Favorite drinks table - one row per saved drink id."""
    __tablename__ = "favorite_drinks"

    id = Column(String(64), primary_key=True)
    name = Column(String(500), nullable=False)
    thumbnail_url = Column(String(1000), nullable=True)
    instructions = Column(Text, nullable=True)


class UnrecoverableStoreError(RuntimeError):
    """A favorites write (or store initialization) could not be persisted."""


def create_store_engine(database_url: str) -> Engine:
    """
    Create an engine suitable for the given URL.

    SQLite connections are shared across threads (the API serves requests from
    a threadpool); an in-memory SQLite database is pinned to one connection so
    every session sees the same data.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=False, **kwargs)
    return create_engine(database_url, pool_pre_ping=True, echo=False)


class FavoritesStore:
    """
    SQLAlchemy-backed favorites store.

    All operations are serialized with a lock, so one instance can be shared
    by a multi-threaded host.
    """

    def __init__(self, database_url: Optional[str] = None, engine: Optional[Engine] = None) -> None:
        """
        Initialize the store and create its table if needed.

        A store whose table cannot be created (e.g., a corrupt database file)
        is still constructed: list() reads as empty and writes raise
        UnrecoverableStoreError.

        Args:
            database_url: SQLAlchemy URL (optional, reads FAVORITES_DATABASE_URL)
            engine: Pre-built engine (optional, overrides database_url)
        """
        self.database_url = database_url or FavoritesConfig.get_database_url()
        self.engine = engine if engine is not None else create_store_engine(self.database_url)
        self.SessionLocal = sessionmaker(autoflush=False, bind=self.engine)
        self._lock = threading.Lock()
        self._schema_ready = False
        try:
            self.init_db()
        except UnrecoverableStoreError as e:
            # Reads degrade to empty; writes retry init_db and raise
            logger.warning("Favorites store at %s is unavailable, reading as empty: %s", self.engine.url, e)

    def init_db(self) -> None:
        """Create the favorites table if it doesn't exist. Safe to call multiple times."""
        try:
            Base.metadata.create_all(bind=self.engine)
            self._schema_ready = True
        except SQLAlchemyError as e:
            logger.error("Failed to initialize favorites store at %s: %s", self.engine.url, e)
            raise UnrecoverableStoreError(f"Cannot initialize favorites store: {e}") from e

    def _ensure_schema(self) -> None:
        if not self._schema_ready:
            self.init_db()

    def list(self) -> List[FavoriteEntry]:
        """
        Return every saved favorite.

        Returns:
            List of FavoriteEntry, or an empty list if the store cannot be read
        """
        with self._lock:
            db = self.SessionLocal()
            try:
                rows = db.query(FavoriteDrinkRow).all()
                return [FavoriteEntry.model_validate(row) for row in rows]
            except (SQLAlchemyError, ValidationError) as e:
                logger.error("Error reading favorites, treating as empty: %s", e)
                return []
            finally:
                db.close()

    def favorite_ids(self) -> Set[str]:
        """Ids of every saved favorite (empty on read failure)."""
        return {entry.id for entry in self.list()}

    def add(self, entry: FavoriteEntry) -> None:
        """
        Save a favorite, replacing any existing entry with the same id.

        Args:
            entry: Favorite to persist

        Raises:
            UnrecoverableStoreError: If the write cannot be committed
        """
        self._ensure_schema()
        with self._lock:
            db = self.SessionLocal()
            try:
                db.merge(
                    FavoriteDrinkRow(
                        id=entry.id,
                        name=entry.name,
                        thumbnail_url=entry.thumbnail_url,
                        instructions=entry.instructions,
                    )
                )
                db.commit()
                logger.info("Saved favorite %s (%s)", entry.id, entry.name)
            except SQLAlchemyError as e:
                db.rollback()
                logger.error("Error saving favorite %s: %s", entry.id, e)
                raise UnrecoverableStoreError(f"Cannot save favorite {entry.id!r}: {e}") from e
            finally:
                db.close()

    def remove(self, drink_id: str) -> None:
        """
        Delete every favorite with the given id. Unknown ids are a no-op.

        Raises:
            UnrecoverableStoreError: If the delete cannot be committed
        """
        self._ensure_schema()
        with self._lock:
            db = self.SessionLocal()
            try:
                deleted = db.query(FavoriteDrinkRow).filter(FavoriteDrinkRow.id == drink_id).delete()
                db.commit()
                logger.info("Removed %d favorite row(s) for %s", deleted, drink_id)
            except SQLAlchemyError as e:
                db.rollback()
                logger.error("Error removing favorite %s: %s", drink_id, e)
                raise UnrecoverableStoreError(f"Cannot remove favorite {drink_id!r}: {e}") from e
            finally:
                db.close()

    def close(self) -> None:
        """Release pooled database connections."""
        self.engine.dispose()


def build_favorites_store() -> FavoritesStore:
    """Build the process-wide favorites store from configuration."""
    store = FavoritesStore(FavoritesConfig.get_database_url())
    logger.info("Favorites store ready at %s", store.engine.url)
    return store
