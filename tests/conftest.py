# tests/conftest.py
import threading

import pytest

from config import Config
from services import SearchError


def make_drink(drink_id, name, **fields):
    drink = {
        "idDrink": drink_id,
        "strDrink": name,
        "strCategory": "Cocktail",
        "strAlcoholic": "Alcoholic",
        "strDrinkThumb": f"https://www.thecocktaildb.com/images/media/drink/{drink_id}.jpg",
        "strInstructions": f"Mix the {name}.",
        "strInstructionsES": None,
    }
    for i in range(1, 16):
        drink[f"strIngredient{i}"] = None
        drink[f"strMeasure{i}"] = None
    drink.update(fields)
    return drink


MARGARITA = make_drink(
    "11007", "Margarita",
    strIngredient1="Tequila", strMeasure1="1 1/2 oz ",
    strIngredient2="Triple sec", strMeasure2="1/2 oz ",
    strIngredient3="Lime juice", strMeasure3="1 oz ",
    strIngredient4="Salt",
)
MOJITO = make_drink(
    "11000", "Mojito",
    strInstructionsES="Mezclar el mojito.",
    strIngredient1="Light rum", strMeasure1="2-3 oz ",
    strIngredient2="Lime", strMeasure2="Juice of 1 ",
)
VIRGIN = make_drink(
    "12000", "Virgin Mary",
    strCategory="Ordinary Drink", strAlcoholic="Non alcoholic",
)


class ManualClock:
    """Collects scheduled callbacks so tests decide when time passes."""
    def __init__(self):
        self.now = 0.0
        self.pending = []

    def __call__(self, delay, callback):
        self.pending.append((self.now + delay, callback))

    def advance(self, seconds):
        self.now += seconds
        due = [item for item in self.pending if item[0] <= self.now]
        self.pending = [item for item in self.pending if item[0] > self.now]
        for _, callback in sorted(due, key=lambda item: item[0]):
            callback()


class StubSearchService:
    """Answers searches from a dictionary and remembers every query."""
    def __init__(self, responses=None, default=None, fail=False):
        self.responses = responses or {}
        self.default = default if default is not None else []
        self.fail = fail
        self.queries = []

    def search(self, query):
        self.queries.append(query)
        if self.fail:
            raise SearchError(f"Lookup for '{query}' failed: connection refused")
        return self.responses.get(query, self.default)


@pytest.fixture
def config():
    return Config(SHOW_DELAY=0.01, REMOVE_DELAY=0.05)


@pytest.fixture
def clock():
    return ManualClock()


class GatedSearchService(StubSearchService):
    """Holds back the answer to gated queries until released."""
    def __init__(self, responses, gated):
        super().__init__(responses)
        self.gates = {query: threading.Event() for query in gated}

    def search(self, query):
        records = super().search(query)
        gate = self.gates.get(query)
        if gate is not None:
            gate.wait(timeout=5)
        return records

    def release_all(self):
        for gate in self.gates.values():
            gate.set()
