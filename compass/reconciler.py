"""
Favorites reconciliation and per-screen state for the cocktail catalog.

This module bridges catalog query results and the favorites store into the
state a UI renders. It owns no rendering: screens hold plain state, notify
subscribed callbacks after every change, and the host decides how to redraw.

Screens:
- CatalogSearchScreen: search by name or ingredient, results annotated with favorite status
- FavoritesScreen: the saved favorites list with removal
- DrinkDetailScreen: one drink, re-fetched by id when its ingredients are missing

Search state machine:
    idle -> loading -> loaded | failed
A new submission re-enters loading from any state. An empty query never leaves
the current state and issues no network call. There is no automatic retry.

Concurrency: catalog calls run on an executor (by default one shared pool per
process, see get_catalog_executor); their completion is handed to
ui_dispatch so state is only mutated on the host's UI context. The default
dispatcher applies the result inline. In-flight queries are never cancelled or
deduplicated; the last one to complete wins.
"""

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, List, Optional, Set

from compass.catalog.base import BaseCatalogClient, CatalogError
from compass.favorites import FavoritesStore
from compass.models import Drink, DrinkListing, FavoriteEntry

logger = logging.getLogger(__name__)

STATUS_IDLE = "idle"
STATUS_LOADING = "loading"
STATUS_LOADED = "loaded"
STATUS_FAILED = "failed"

SEARCH_MODE_NAME = "name"
SEARCH_MODE_INGREDIENT = "ingredient"

ALLOWED_SEARCH_MODES = [SEARCH_MODE_NAME, SEARCH_MODE_INGREDIENT]

# Error kind recorded when a catalog call fails with something other than a CatalogError
UNEXPECTED_ERROR_KIND = "unexpected_error"

UiDispatch = Callable[[Callable[[], None]], None]


def run_inline(callback: Callable[[], None]) -> None:
    """Default UI dispatcher: apply the update on the calling thread."""
    callback()


class ObservableScreen:
    """
    Callback registry shared by every screen.

    Callbacks receive the screen instance after each state change.
    """

    def __init__(self) -> None:
        self._observers: List[Callable[["ObservableScreen"], None]] = []

    def subscribe(self, callback: Callable[["ObservableScreen"], None]) -> None:
        if callback not in self._observers:
            self._observers.append(callback)

    def unsubscribe(self, callback: Callable[["ObservableScreen"], None]) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self) -> None:
        for callback in list(self._observers):
            callback(self)


_catalog_executor: Optional[ThreadPoolExecutor] = None
_catalog_executor_lock = threading.Lock()


def get_catalog_executor() -> ThreadPoolExecutor:
    """
    The process-wide executor for catalog calls, created on first use.

    Every screen built without an explicit executor shares this pool. Hosts
    release it with shutdown_catalog_executor() when they exit.
    """
    global _catalog_executor
    with _catalog_executor_lock:
        if _catalog_executor is None:
            _catalog_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="catalog")
        return _catalog_executor


def shutdown_catalog_executor(wait: bool = True) -> None:
    """Shut down the shared executor. The next get_catalog_executor() call builds a new one."""
    global _catalog_executor
    with _catalog_executor_lock:
        executor, _catalog_executor = _catalog_executor, None
    if executor is not None:
        executor.shutdown(wait=wait)


class _CatalogCallsMixin:
    """Executor and UI dispatch plumbing for screens that call the catalog."""

    def _init_dispatch(self, executor: Optional[Executor], ui_dispatch: Optional[UiDispatch]) -> None:
        # Injected executors belong to the caller, like the store
        self.executor = executor or get_catalog_executor()
        self.ui_dispatch = ui_dispatch or run_inline


class FavoritesReconciler(ObservableScreen):
    """
    In-memory favorite membership kept consistent with the favorites store.

    The store is the source of truth; call refresh_favorited_ids() whenever a
    screen showing favorite status becomes active, since other screens may have
    changed the store.
    """

    def __init__(self, store: FavoritesStore) -> None:
        super().__init__()
        self.store = store
        self.favorited_ids: Set[str] = set()
        self.refresh_favorited_ids()

    def refresh_favorited_ids(self) -> None:
        """Reload the favorited id set from the store."""
        self.favorited_ids = self.store.favorite_ids()
        self._notify()

    def is_favorited(self, drink_id: str) -> bool:
        return drink_id in self.favorited_ids

    def toggle_favorite(self, drink: Drink) -> bool:
        """
        Flip the favorite status of a drink.

        The store is written first; the in-memory set only changes once the
        write succeeded.

        Args:
            drink: Drink to toggle

        Returns:
            True if the drink is now a favorite, False otherwise

        Raises:
            UnrecoverableStoreError: If the store write fails
        """
        if drink.id in self.favorited_ids:
            self.store.remove(drink.id)
            self.favorited_ids.discard(drink.id)
            favorited = False
        else:
            self.store.add(drink.to_favorite())
            self.favorited_ids.add(drink.id)
            favorited = True
        logger.info("Toggled favorite %s -> %s", drink.id, favorited)
        self._notify()
        return favorited


class CatalogSearchScreen(_CatalogCallsMixin, FavoritesReconciler):
    """
    A searchable drinks screen (by name or by ingredient).

    Attributes:
        status: One of "idle", "loading", "loaded", "failed"
        query: Last submitted query
        drinks: Current result list (transient, replaced on each completion)
        error_kind: CatalogError kind of the last failure, None otherwise
    """

    def __init__(
        self,
        store: FavoritesStore,
        client: BaseCatalogClient,
        mode: str = SEARCH_MODE_NAME,
        executor: Optional[Executor] = None,
        ui_dispatch: Optional[UiDispatch] = None,
    ) -> None:
        if mode not in ALLOWED_SEARCH_MODES:
            raise ValueError(f"Invalid search mode {mode!r}. Valid modes: {', '.join(ALLOWED_SEARCH_MODES)}")
        self.client = client
        self.mode = mode
        self.status = STATUS_IDLE
        self.query = ""
        self.drinks: List[Drink] = []
        self.error_kind: Optional[str] = None
        self._init_dispatch(executor, ui_dispatch)
        super().__init__(store)

    @property
    def is_loading(self) -> bool:
        return self.status == STATUS_LOADING

    def _search(self, query: str) -> List[Drink]:
        if self.mode == SEARCH_MODE_INGREDIENT:
            return self.client.search_by_ingredient(query)
        return self.client.search_by_name(query)

    def submit(self, query: str) -> Optional[Future]:
        """
        Submit a query.

        Args:
            query: Drink name or ingredient. Empty strings are ignored.

        Returns:
            Future resolving once the result has been handed to ui_dispatch,
            or None when the query was empty and nothing was issued
        """
        if not query:
            logger.debug("Ignoring empty %s query", self.mode)
            return None

        self.query = query
        self.status = STATUS_LOADING
        self.error_kind = None
        self._notify()
        logger.info("Search request: mode=%s query=%r", self.mode, query)
        return self.executor.submit(self._run, query)

    def _run(self, query: str) -> None:
        try:
            drinks = self._search(query)
        except CatalogError as e:
            logger.warning("%s search for %r failed (%s): %s", self.mode, query, e.kind, e)
            kind = e.kind
            self.ui_dispatch(lambda: self._apply_failure(kind))
            return
        except Exception as e:
            logger.error("Unexpected error during %s search for %r: %s", self.mode, query, e, exc_info=True)
            self.ui_dispatch(lambda: self._apply_failure(UNEXPECTED_ERROR_KIND))
            return
        self.ui_dispatch(lambda: self._apply_results(drinks))

    def _apply_results(self, drinks: List[Drink]) -> None:
        self.drinks = drinks
        self.status = STATUS_LOADED
        self.error_kind = None
        logger.info("%s search loaded %d drinks", self.mode, len(drinks))
        self._notify()

    def _apply_failure(self, kind: str) -> None:
        self.drinks = []
        self.status = STATUS_FAILED
        self.error_kind = kind
        self._notify()

    def listings(self) -> List[DrinkListing]:
        """Current results annotated with favorite status."""
        return [DrinkListing(drink=drink, is_favorite=drink.id in self.favorited_ids) for drink in self.drinks]


class FavoritesScreen(FavoritesReconciler):
    """
    The saved favorites list.

    Unlike the search screens this one displays full favorite entries, so
    removals reload the whole list rather than only the id set.
    """

    def __init__(self, store: FavoritesStore) -> None:
        self.favorites: List[FavoriteEntry] = []
        super().__init__(store)

    def load_favorites(self) -> None:
        """Reload the full favorites list and the id set from the store."""
        self.favorites = self.store.list()
        self.favorited_ids = {entry.id for entry in self.favorites}
        self._notify()

    def remove_favorite(self, drink: Drink) -> None:
        """
        Remove a favorite and reload the list.

        Raises:
            UnrecoverableStoreError: If the store write fails
        """
        self.store.remove(drink.id)
        self.load_favorites()

    def toggle_favorite(self, drink: Drink) -> bool:
        favorited = super().toggle_favorite(drink)
        self.load_favorites()
        return favorited

    def drinks(self) -> List[Drink]:
        """Favorites as Drink records; their ingredient lists are empty until re-fetched."""
        return [Drink.from_favorite(entry) for entry in self.favorites]


class DrinkDetailScreen(_CatalogCallsMixin, ObservableScreen):
    """
    One drink's detail state.

    Drinks that arrive without ingredients (filter results, favorites) are
    re-fetched by id. A failed re-fetch keeps the drink as it was.
    """

    def __init__(
        self,
        client: BaseCatalogClient,
        drink: Drink,
        executor: Optional[Executor] = None,
        ui_dispatch: Optional[UiDispatch] = None,
    ) -> None:
        super().__init__()
        self.client = client
        self.drink = drink
        self.status = STATUS_LOADED if drink.ingredients else STATUS_IDLE
        self.error_kind: Optional[str] = None
        self._init_dispatch(executor, ui_dispatch)

    def load(self) -> Optional[Future]:
        """
        Fetch full details if the drink has no ingredients yet.

        Returns:
            Future for the lookup, or None if the drink is already complete
        """
        if self.drink.ingredients:
            return None
        self.status = STATUS_LOADING
        self.error_kind = None
        self._notify()
        return self.executor.submit(self._run, self.drink.id)

    def _run(self, drink_id: str) -> None:
        try:
            detailed = self.client.fetch_by_id(drink_id)
        except CatalogError as e:
            logger.warning("Error fetching drink details for %s (%s): %s", drink_id, e.kind, e)
            kind = e.kind
            self.ui_dispatch(lambda: self._apply_failure(kind))
            return
        except Exception as e:
            logger.error("Unexpected error fetching drink details for %s: %s", drink_id, e, exc_info=True)
            self.ui_dispatch(lambda: self._apply_failure(UNEXPECTED_ERROR_KIND))
            return
        self.ui_dispatch(lambda: self._apply_drink(detailed))

    def _apply_drink(self, drink: Drink) -> None:
        self.drink = drink
        self.status = STATUS_LOADED
        self._notify()

    def _apply_failure(self, kind: str) -> None:
        self.status = STATUS_FAILED
        self.error_kind = kind
        self._notify()
