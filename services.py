# services.py
import logging
from typing import List, Optional

import requests

from config import Config
from models import Record

logger = logging.getLogger(__name__)


class SearchError(Exception):
    """The cocktail lookup failed: network, HTTP status or payload."""


class CocktailSearchService:
    """A service to handle interactions with TheCocktailDB."""
    def __init__(self, config: Config, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

    def search(self, query: str) -> List[Record]:
        """Searches drinks by name. An explicit empty result comes back as []."""
        url = f"{self.config.API_BASE_URL}/search.php"
        try:
            response = self.session.get(url, params={"s": query}, timeout=self.config.REQUEST_TIMEOUT)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.warning("Lookup for %r failed: %s", query, e)
            raise SearchError(f"Lookup for '{query}' failed: {e}") from e
        except ValueError as e:
            logger.warning("Lookup for %r returned malformed JSON", query)
            raise SearchError(f"Malformed response for '{query}'") from e

        return self._parse_drinks(query, data)

    def _parse_drinks(self, query: str, data) -> List[Record]:
        """Validates the payload shape and returns the records untouched."""
        if not isinstance(data, dict) or "drinks" not in data:
            raise SearchError(f"Unexpected response for '{query}'")
        drinks = data["drinks"]
        if drinks is None:
            return []
        if not isinstance(drinks, list) or not all(isinstance(d, dict) for d in drinks):
            raise SearchError(f"Unexpected response for '{query}'")
        logger.info("Lookup for %r returned %d drinks", query, len(drinks))
        return drinks

    def close(self):
        self.session.close()
