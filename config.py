# config.py
from dataclasses import dataclass, field
from typing import Optional, Tuple

@dataclass
class Config:
    """Holds all application configuration."""
    API_BASE_URL: str = "https://www.thecocktaildb.com/api/json/v1/1"
    REQUEST_TIMEOUT: float = 10.0
    POPULAR_COCKTAILS: Tuple[str, ...] = ("margarita", "mojito", "cosmopolitan", "martini", "daiquiri")
    FALLBACK_IMAGE_URL: str = "https://via.placeholder.com/300x250/cccccc/969696?text=Image+not+available"
    PREFERRED_LANGUAGE: Optional[str] = "ES"
    DISCARD_STALE_RESPONSES: bool = True
    SHOW_DELAY: float = 0.01
    REMOVE_DELAY: float = 0.3
    MESSAGES: dict = field(default_factory=lambda: {
        "empty_query": "Please enter a search term.",
        "search_failed": "Could not load cocktails. Please try again.",
        "no_results": "No cocktails matched your search.",
        "no_instructions": "No instructions available.",
        "details_button": "Show instructions",
        "close_button": "Close",
    })
