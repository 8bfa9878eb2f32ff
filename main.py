# main.py
import argparse
import asyncio
import logging
try:
    import pyperclip
except ImportError:
    pyperclip = None

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.reactive import reactive
from textual.widgets import Button, Footer, Header, Input, LoadingIndicator

from config import Config
from controller import BrowserController, QueryError
from models import AppState, ClickEvent
from render import cards_for, recipe_text
from services import CocktailSearchService, SearchError
from ui import CocktailCard, DetailPanelView, LogPane, ResultsGrid, SearchControls

logger = logging.getLogger(__name__)

class CocktailFinderApp(App):
    BINDINGS = [
        ("d", "toggle_dark", "Toggle dark mode"),
        ("q", "quit", "Quit"),
        ("c", "copy_recipe", "Copy Recipe"),
        Binding("escape", "close_details", "Close Instructions", priority=True),
    ]
    CSS_PATH = "cocktail_finder.tcss"

    app_state = reactive(AppState, always_update=True, init=False)

    def __init__(self, search_service: CocktailSearchService, config: Config, controller: BrowserController = None):
        super().__init__()
        self.search_service = search_service
        self.config = config
        self.controller = controller or BrowserController(config, self.schedule_callback)
        self.controller.on_change = self.state_changed
        self._rendered_results = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="main-container"):
            yield SearchControls(id="search-controls")
            yield LoadingIndicator(id="loading")
            yield ResultsGrid(id="results")
            yield LogPane(id="log", wrap=True, highlight=True, markup=True)
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#loading").display = False
        self.query_one(Input).focus()
        log = self.query_one(LogPane)
        if pyperclip:
            log.add_message("[green]✅ Clipboard found.[/green]")
        else:
            log.add_message("[yellow]⚠️ 'pyperclip' not installed.[/yellow]")
        self.run_worker(self.load_default(), group="search_worker")

    def schedule_callback(self, delay: float, callback) -> None:
        self.set_timer(delay, callback)

    def state_changed(self, state: AppState) -> None:
        self.app_state = state

    def watch_app_state(self, state: AppState) -> None:
        """Pushes the controller's state to the widgets."""
        self.query_one(SearchControls).set_error(state.error)
        self.query_one("#loading").display = state.loading
        grid = self.query_one(ResultsGrid)
        if state.results is not self._rendered_results:
            self._rendered_results = state.results
            grid.update_results(cards_for(state.results, self.config), state.notice)
        grid.sync_panel(state.panel)

    # --- Actions ---
    def action_close_details(self) -> None:
        self.controller.close_details()

    def action_copy_recipe(self) -> None:
        log = self.query_one(LogPane)
        if not pyperclip:
            log.add_message("[red]❌ 'pyperclip' not installed.[/red]")
            return
        panel = self.controller.state.panel
        if panel:
            pyperclip.copy(recipe_text(panel.view))
            log.add_message(f"📋 Copied recipe for '[b]{panel.view.title}[/b]'.")
        else:
            log.add_message("[yellow]⚠️ No cocktail open.[/yellow]")

    # --- Message Handlers ---
    def on_search_controls_search_requested(self, message: SearchControls.SearchRequested) -> None:
        try:
            query = self.controller.validate_query(message.query)
        except QueryError as e:
            self.controller.show_error(str(e))
            return
        self.query_one(LogPane).add_message(f"🔎 Searching for '{query}'...")
        token = self.controller.start_search(query)
        if self.config.DISCARD_STALE_RESPONSES:
            self.workers.cancel_group(self, "search_worker")
            self.run_worker(self.perform_search(query, token), group="search_worker", exclusive=True)
        else:
            self.run_worker(self.perform_search(query, token), group="search_worker")

    def on_input_changed(self, event: Input.Changed) -> None:
        self.controller.clear_error()

    def on_cocktail_card_details_requested(self, message: CocktailCard.DetailsRequested) -> None:
        self.controller.open_details(message.drink_id)

    def on_detail_panel_view_close_requested(self, message: DetailPanelView.CloseRequested) -> None:
        self.controller.close_details()

    def on_mouse_down(self, event: events.MouseDown) -> None:
        inside_panel = on_details_control = False
        node = event.widget
        while node is not None:
            if isinstance(node, DetailPanelView):
                inside_panel = True
            elif isinstance(node, Button) and node.has_class("details-button"):
                on_details_control = True
            node = node.parent
        self.controller.handle_click(ClickEvent(inside_panel, on_details_control))

    # --- Worker Methods ---
    async def perform_search(self, query: str, token: int) -> None:
        log = self.query_one(LogPane)
        try:
            records = await asyncio.to_thread(self.search_service.search, query)
        except SearchError as e:
            if self.controller.fail_search(token, e):
                log.add_message(f"[red]❌ An error occurred during search.[/red]")
                log.add_message(f"[dim]{e}[/dim]")
            return
        except Exception as e:
            logger.exception("Unexpected error while searching for %r", query)
            if self.controller.fail_search(token, e):
                log.add_message(f"[red]❌ An unexpected error occurred during search.[/red]")
            return
        if not self.controller.finish_search(token, records):
            return
        if not records:
            log.add_message(f"🤷 No cocktails found for '{query}'.")
        else:
            log.add_message(f"🍸 Found {len(records)} cocktails for '{query}'.")

    async def load_default(self) -> None:
        log = self.query_one(LogPane)
        term = self.controller.pick_default_term()
        token = self.controller.start_default()
        try:
            records = await asyncio.to_thread(self.search_service.search, term)
        except SearchError as e:
            self.controller.fail_default(token, e)
            log.add_message(f"[yellow]⚠️ Could not load popular cocktails.[/yellow]")
            return
        except Exception as e:
            logger.exception("Unexpected error while loading %r", term)
            self.controller.fail_default(token, e)
            return
        if self.controller.finish_default(token, records):
            search_input = self.query_one(Input)
            with search_input.prevent(Input.Changed):
                search_input.value = term
            log.add_message(f"💿 Showing {len(records)} cocktails for '{term}'.")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Search TheCocktailDB from the terminal.")
    parser.add_argument("--lang", default=Config.PREFERRED_LANGUAGE,
                        help="Preferred instructions language, e.g. ES, DE, FR, IT (default: %(default)s).")
    parser.add_argument("--allow-stale", action="store_true",
                        help="Let a slow earlier search overwrite a newer one.")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, filename="cocktail_finder.log")
    app_config = Config(PREFERRED_LANGUAGE=args.lang or None,
                        DISCARD_STALE_RESPONSES=not args.allow_stale)
    search_service = CocktailSearchService(app_config)

    app = CocktailFinderApp(search_service, app_config)

    try:
        app.run()
    finally:
        search_service.close()


if __name__ == "__main__":
    main()
