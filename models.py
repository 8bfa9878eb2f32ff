# models.py
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

# A drink exactly as TheCocktailDB returns it.
Record = Mapping[str, Optional[str]]

@dataclass(frozen=True)
class CardView:
    """Everything a results card shows for one drink."""
    drink_id: str
    title: str
    category_line: str
    image_url: str
    button_label: str

@dataclass(frozen=True)
class DetailView:
    """Everything the instructions panel shows for one drink."""
    drink_id: str
    title: str
    instructions: str
    ingredients: List[str]
    close_label: str

@dataclass
class DetailPanel:
    """The single instructions panel that may be open."""
    drink_id: str
    view: DetailView
    visible: bool = False
    closing: bool = False

@dataclass(frozen=True)
class ClickEvent:
    """Where a click landed, relative to the open panel and the details buttons."""
    inside_panel: bool = False
    on_details_control: bool = False

@dataclass
class AppState:
    """A single object to hold the entire application state."""
    results: List[Record] = field(default_factory=list)
    panel: Optional[DetailPanel] = None
    error: Optional[str] = None
    notice: Optional[str] = None
    loading: bool = False
