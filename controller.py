# controller.py
"""Search and instructions-panel logic, independent of any widget.

`BrowserController` owns the result set and the single open panel. The UI
calls into it and redraws from `controller.state` whenever `on_change` fires.
"""
import logging
import random
from typing import Callable, Dict, List, Optional

from config import Config
from models import AppState, ClickEvent, DetailPanel, Record
from render import detail_for

logger = logging.getLogger(__name__)

Scheduler = Callable[[float, Callable[[], None]], object]
ClickListener = Callable[[ClickEvent], None]


class QueryError(ValueError):
    """The search term was empty once trimmed."""


class ClickListeners:
    """Global click listeners, registered and released explicitly."""
    def __init__(self):
        self._listeners: Dict[int, ClickListener] = {}
        self._next_handle = 0

    def add(self, listener: ClickListener) -> int:
        self._next_handle += 1
        self._listeners[self._next_handle] = listener
        return self._next_handle

    def remove(self, handle: Optional[int]) -> None:
        if handle is not None:
            self._listeners.pop(handle, None)

    def dispatch(self, event: ClickEvent) -> None:
        # Listeners may release themselves while we iterate.
        for listener in list(self._listeners.values()):
            listener(event)

    def __len__(self) -> int:
        return len(self._listeners)


class BrowserController:
    def __init__(
        self,
        config: Config,
        schedule: Scheduler,
        on_change: Optional[Callable[[AppState], None]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.schedule = schedule
        self.on_change = on_change
        self.rng = rng or random.Random()
        self.state = AppState()
        self.listeners = ClickListeners()
        self._latest_token = 0
        self._listener_handle: Optional[int] = None

    def _changed(self) -> None:
        if self.on_change:
            self.on_change(self.state)

    # --- Error surface ---
    def show_error(self, message: str) -> None:
        self.state.error = message
        self._changed()

    def clear_error(self) -> None:
        if self.state.error is not None:
            self.state.error = None
            self._changed()

    # --- Search ---
    def validate_query(self, raw: str) -> str:
        query = (raw or "").strip()
        if not query:
            raise QueryError(self.config.MESSAGES["empty_query"])
        return query

    def _next_token(self) -> int:
        self._latest_token += 1
        return self._latest_token

    def is_current(self, token: int) -> bool:
        return token == self._latest_token

    def _accepts(self, token: int) -> bool:
        if self.config.DISCARD_STALE_RESPONSES and not self.is_current(token):
            logger.info("Ignoring stale response for request %d", token)
            return False
        return True

    def start_search(self, query: str) -> int:
        """Prepares the UI for a lookup and returns its request token."""
        self._drop_panel()
        self.state.results = []
        self.state.error = None
        self.state.notice = None
        self.state.loading = True
        token = self._next_token()
        logger.info("Search %d for %r started", token, query)
        self._changed()
        return token

    def finish_search(self, token: int, records: List[Record]) -> bool:
        """Applies a successful lookup. Returns False when the response was discarded."""
        if not self._accepts(token):
            return False
        self._drop_panel()
        self.state.loading = False
        self.state.error = None
        self.state.results = list(records)
        self.state.notice = None if records else self.config.MESSAGES["no_results"]
        self._changed()
        return True

    def fail_search(self, token: int, error: Exception) -> bool:
        if not self._accepts(token):
            return False
        logger.error("Search %d failed: %s", token, error)
        self.state.loading = False
        self.state.error = self.config.MESSAGES["search_failed"]
        self._changed()
        return True

    # --- Default content ---
    def pick_default_term(self) -> str:
        return self.rng.choice(list(self.config.POPULAR_COCKTAILS))

    def start_default(self) -> int:
        return self._next_token()

    def finish_default(self, token: int, records: List[Record]) -> bool:
        """Shows the default drinks. Returns True when they were rendered."""
        if not records or not self._accepts(token):
            return False
        self._drop_panel()
        self.state.results = list(records)
        self.state.notice = None
        self._changed()
        return True

    def fail_default(self, token: int, error: Exception) -> None:
        logger.warning("Default cocktails could not be loaded: %s", error)

    # --- Instructions panel ---
    def find_record(self, drink_id: str) -> Optional[Record]:
        return next((r for r in self.state.results if str(r.get("idDrink")) == drink_id), None)

    def open_details(self, drink_id: str) -> Optional[DetailPanel]:
        record = self.find_record(drink_id)
        if record is None:
            return None
        self._drop_panel()
        panel = DetailPanel(drink_id=drink_id, view=detail_for(record, self.config))
        self.state.panel = panel
        self._listener_handle = self.listeners.add(self._on_outside_click)
        self._changed()
        self.schedule(self.config.SHOW_DELAY, lambda: self._reveal(panel))
        return panel

    def _reveal(self, panel: DetailPanel) -> None:
        if self.state.panel is panel and not panel.visible and not panel.closing:
            panel.visible = True
            self._changed()

    def close_details(self) -> None:
        panel = self.state.panel
        if panel is None or panel.closing:
            return
        panel.closing = True
        panel.visible = False
        self._release_listener()
        self._changed()
        self.schedule(self.config.REMOVE_DELAY, lambda: self._remove(panel))

    def _remove(self, panel: DetailPanel) -> None:
        if self.state.panel is panel:
            self.state.panel = None
            self._changed()

    def _drop_panel(self) -> None:
        """Removes the open panel at once, without the fade delay."""
        self._release_listener()
        self.state.panel = None

    def _release_listener(self) -> None:
        self.listeners.remove(self._listener_handle)
        self._listener_handle = None

    def handle_click(self, event: ClickEvent) -> None:
        self.listeners.dispatch(event)

    def _on_outside_click(self, event: ClickEvent) -> None:
        if not event.inside_panel and not event.on_details_control:
            self.close_details()
