# render.py
"""Pure mappings from raw drink records to the views the UI draws.

Nothing in here touches a widget, so every function can be checked with a
plain dictionary.
"""
from typing import Iterable, List, Optional

from config import Config
from models import CardView, DetailView, Record

MAX_INGREDIENTS = 15


def _clean(value: Optional[str]) -> str:
    return value.strip() if isinstance(value, str) else ""


def category_line(record: Record) -> str:
    """Category followed by the alcoholic annotation, e.g. 'Cocktail (Alcoholic)'."""
    category = record.get("strCategory") or ""
    if record.get("strAlcoholic") == "Alcoholic":
        return f"{category} (Alcoholic)"
    return f"{category} (Non-alcoholic)"


def card_for(record: Record, config: Config) -> CardView:
    """Builds the card view for one drink.

    Images are never fetched, so the placeholder stands in for a thumbnail
    that would fail to load: one that is missing or blank.
    """
    return CardView(
        drink_id=str(record.get("idDrink", "")),
        title=record.get("strDrink") or "",
        category_line=category_line(record),
        image_url=_clean(record.get("strDrinkThumb")) or config.FALLBACK_IMAGE_URL,
        button_label=config.MESSAGES["details_button"],
    )


def cards_for(records: Iterable[Record], config: Config) -> List[CardView]:
    return [card_for(record, config) for record in records]


def ingredient_lines(record: Record) -> List[str]:
    """Lists '<measure> <ingredient>' for every populated ingredient slot, in slot order."""
    lines = []
    for i in range(1, MAX_INGREDIENTS + 1):
        ingredient = _clean(record.get(f"strIngredient{i}"))
        if not ingredient:
            continue
        measure = _clean(record.get(f"strMeasure{i}"))
        lines.append(f"{measure} {ingredient}" if measure else ingredient)
    return lines


def instructions_for(record: Record, language: Optional[str], placeholder: str) -> str:
    """Localized instructions if present, else the default text, else the placeholder."""
    if language:
        localized = _clean(record.get(f"strInstructions{language.upper()}"))
        if localized:
            return localized
    return _clean(record.get("strInstructions")) or placeholder


def detail_for(record: Record, config: Config) -> DetailView:
    """Builds the instructions panel view for one drink."""
    return DetailView(
        drink_id=str(record.get("idDrink", "")),
        title=record.get("strDrink") or "",
        instructions=instructions_for(
            record, config.PREFERRED_LANGUAGE, config.MESSAGES["no_instructions"]),
        ingredients=ingredient_lines(record),
        close_label=config.MESSAGES["close_button"],
    )


def recipe_text(view: DetailView) -> str:
    """Plain-text recipe used for the clipboard."""
    lines = [view.title, "", view.instructions, ""]
    lines.extend(f"- {line}" for line in view.ingredients)
    return "\n".join(lines)
