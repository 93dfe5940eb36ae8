"""
Cocktail API — Drink Catalog Service
======================================

What:  Search over a fixed catalog of drinks.
Why:   Backs GET /drinks?search=... and GET /drinks/random.
How:   Holds an immutable tuple of Drink records handed in at construction.
       search() is a case-insensitive substring match on the drink name,
       preserving catalog order.

The default catalog is seed data in the CocktailDB record format. Nothing in
the service inserts, updates or deletes drinks; the mutation endpoints work on
ephemeral records only (see drink_service.py).
"""

import logging
from typing import Iterable, List, Optional

from cocktail_api.exceptions import InvalidArgumentError
from cocktail_api.schemas.drink import Drink, Ingredient

logger = logging.getLogger(__name__)

FEATURED_SEARCH = "margarita"


SEED_DRINKS: List[Drink] = [
    Drink(
        id="11007",
        name="Margarita",
        tags="IBA,ContemporaryClassic",
        category="Ordinary Drink",
        iba="Contemporary Classics",
        alcoholic="Alcoholic",
        glass="Cocktail glass",
        instructions=(
            "Rub the rim of the glass with lime slice to make the salt stick to it. "
            "Take a lime slice and dip it in salt and run the salted edge around the rim "
            "of the glass. Shake the other ingredients with ice, then pour into the glass."
        ),
        image="https://www.thecocktaildb.com/images/media/drink/5noda61589575158.jpg",
        ingredients=[
            Ingredient(name="Tequila", measure="1 1/2 oz"),
            Ingredient(name="Triple sec", measure="1/2 oz"),
            Ingredient(name="Lime juice", measure="1 oz"),
            Ingredient(name="Salt"),
        ],
    ),
    Drink(
        id="11001",
        name="Old Fashioned",
        tags="IBA,Classic",
        category="Whiskey",
        iba="Unforgettables",
        alcoholic="Alcoholic",
        glass="Old-fashioned glass",
        instructions=(
            "Place sugar cube in old fashioned glass and saturate with bitters, add a dash "
            "of plain water. Muddle until dissolved. Fill the glass with ice cubes and add "
            "whiskey. Garnish with orange slice and a cocktail cherry."
        ),
        image="https://www.thecocktaildb.com/images/media/drink/vrwquq1478252802.jpg",
        ingredients=[
            Ingredient(name="Bourbon", measure="4.5 cl"),
            Ingredient(name="Angostura bitters", measure="2 dashes"),
            Ingredient(name="Sugar", measure="1 cube"),
            Ingredient(name="Water", measure="dash"),
        ],
    ),
]


class CatalogService:
    """
    Read-only drink catalog.

    Args:
        drinks: Catalog contents, in the order search results are returned.
                Defaults to SEED_DRINKS.
    """

    def __init__(self, drinks: Optional[Iterable[Drink]] = None):
        self._drinks = tuple(SEED_DRINKS if drinks is None else drinks)

    def __len__(self) -> int:
        return len(self._drinks)

    @property
    def drinks(self) -> List[Drink]:
        return list(self._drinks)

    def search(self, term: str) -> List[Drink]:
        """
        Drinks whose name contains `term`, ignoring case.

        Raises:
            InvalidArgumentError: `term` is empty or whitespace only.
        """
        if term is None or not term.strip():
            raise InvalidArgumentError("Search term is required", argument="search")

        needle = term.lower()
        results = [drink for drink in self._drinks if needle in drink.name.lower()]
        logger.debug("Catalog search %r matched %d of %d drinks", term, len(results), len(self._drinks))
        return results

    def random_drink(self) -> Optional[Drink]:
        """
        The featured drink: first match for "margarita", else the first drink.
        """
        featured = [drink for drink in self._drinks if FEATURED_SEARCH in drink.name.lower()]
        if featured:
            return featured[0]
        return self._drinks[0] if self._drinks else None
