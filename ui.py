# ui.py
from typing import List, Optional

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Button, Input, Label, RichLog, Static

from models import CardView, DetailPanel, DetailView

class ErrorSlot(Static):
    """Holds at most one error message under the search input."""
    def on_mount(self) -> None:
        self.set_error(None)

    def set_error(self, message: Optional[str]) -> None:
        self.error_text = message
        self.update(message or "")
        self.display = message is not None


class SearchControls(Static):
    """Widget for the search input, button and error slot."""
    class SearchRequested(Message):
        def __init__(self, query: str) -> None:
            self.query = query
            super().__init__()

    def compose(self) -> ComposeResult:
        yield Label("Search cocktails by name:")
        with Horizontal(id="search-row"):
            yield Input(placeholder="e.g. margarita", id="search-input")
            yield Button("Search", id="search-button", variant="primary")
        yield ErrorSlot(id="error-slot", classes="error-message", markup=False)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "search-button":
            event.stop()
            self.post_search_message()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.post_search_message()

    def post_search_message(self) -> None:
        # Validation happens in the controller so an empty query can be reported.
        self.post_message(self.SearchRequested(self.query_one(Input).value))

    def set_error(self, message: Optional[str]) -> None:
        self.query_one(ErrorSlot).set_error(message)


class CocktailCard(Vertical):
    """One drink in the results list."""
    class DetailsRequested(Message):
        def __init__(self, drink_id: str) -> None:
            self.drink_id = drink_id
            super().__init__()

    def __init__(self, view: CardView) -> None:
        super().__init__(classes="cocktail-card")
        self.card_view = view

    def compose(self) -> ComposeResult:
        yield Label(self.card_view.title, classes="cocktail-name", markup=False)
        yield Label(self.card_view.category_line, classes="cocktail-category", markup=False)
        yield Label(self.card_view.image_url, classes="cocktail-image", markup=False)
        yield Button(self.card_view.button_label, classes="details-button")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.post_message(self.DetailsRequested(self.card_view.drink_id))


class DetailPanelView(Vertical):
    """The instructions panel shown below a card."""
    class CloseRequested(Message):
        pass

    def __init__(self, view: DetailView) -> None:
        super().__init__(classes="instructions-card")
        self.detail_view = view

    def compose(self) -> ComposeResult:
        yield Button(self.detail_view.close_label, classes="close-button")
        yield Label(f"{self.detail_view.title} - Preparation", classes="instructions-title", markup=False)
        yield Static(self.detail_view.instructions, classes="instructions-text", markup=False)
        yield Label("Ingredients:", classes="ingredients-heading")
        yield Static("\n".join(f"• {line}" for line in self.detail_view.ingredients),
                     classes="ingredients-list", markup=False)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.post_message(self.CloseRequested())


class ResultsGrid(VerticalScroll):
    """The results region: one card per drink, plus the open panel if any."""
    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.panel_model: Optional[DetailPanel] = None
        self.panel_widget: Optional[DetailPanelView] = None

    @property
    def cards(self) -> List[CocktailCard]:
        return list(self.query(CocktailCard))

    def update_results(self, cards: List[CardView], notice: Optional[str]) -> None:
        self.remove_children()
        self.panel_model = None
        self.panel_widget = None
        if notice:
            self.mount(Static(notice, classes="no-results"))
        self.mount_all([CocktailCard(view) for view in cards])
        self.scroll_home(animate=False)

    def sync_panel(self, panel: Optional[DetailPanel]) -> None:
        if panel is not self.panel_model and self.panel_widget is not None:
            self.panel_widget.remove()
            self.panel_widget = None
        self.panel_model = panel
        if panel is None:
            return
        if self.panel_widget is None:
            card = next((c for c in self.cards if c.card_view.drink_id == panel.drink_id), None)
            if card is None:
                return
            self.panel_widget = DetailPanelView(panel.view)
            self.mount(self.panel_widget, after=card)
        self.panel_widget.display = panel.visible


class LogPane(RichLog):
    """A dedicated widget for logging application events."""
    def add_message(self, message: str) -> None:
        self.write(message)
