"""
Cocktail API — Catalog Service Unit Tests
===========================================

What:  Tests for CatalogService search and the CocktailDB record layout.

What we test:
    ✅ Case-insensitive substring search, catalog order preserved
    ✅ No match returns an empty list
    ✅ Empty / whitespace terms raise InvalidArgumentError
    ✅ Featured drink selection
    ✅ Drinks serialize to idDrink / strDrink / strIngredientN ...
"""

import pytest

from cocktail_api.exceptions import InvalidArgumentError
from cocktail_api.schemas.drink import Drink, Ingredient
from cocktail_api.services.catalog_service import CatalogService


def _drink(drink_id: str, name: str) -> Drink:
    return Drink(
        id=drink_id,
        name=name,
        category="Cocktail",
        alcoholic="Alcoholic",
        glass="Highball glass",
        instructions="Stir.",
        ingredients=[Ingredient(name="Gin", measure="2 oz")],
    )


class TestCatalogSearch:
    """Tests for search()."""

    def setup_method(self):
        self.catalog = CatalogService()

    @pytest.mark.parametrize("term", ["margarita", "MARGARITA", "Marg", "rita"])
    def test_case_insensitive_substring(self, term):
        results = self.catalog.search(term)
        assert [drink.name for drink in results] == ["Margarita"]

    def test_multiple_matches_in_catalog_order(self):
        results = self.catalog.search("a")
        assert [drink.id for drink in results] == ["11007", "11001"]

    def test_no_match(self):
        assert self.catalog.search("vodka") == []

    @pytest.mark.parametrize("term", ["", "   ", "\t"])
    def test_blank_term_rejected(self, term):
        with pytest.raises(InvalidArgumentError) as exc_info:
            self.catalog.search(term)
        assert exc_info.value.status_code == 400
        assert exc_info.value.argument == "search"

    def test_custom_catalog(self):
        catalog = CatalogService([_drink("1", "Gin Fizz"), _drink("2", "Gin Tonic")])
        assert len(catalog) == 2
        assert [d.id for d in catalog.search("gin")] == ["1", "2"]


class TestFeaturedDrink:
    """Tests for random_drink()."""

    def test_prefers_margarita(self):
        assert CatalogService().random_drink().name == "Margarita"

    def test_falls_back_to_first_drink(self):
        catalog = CatalogService([_drink("1", "Gin Fizz"), _drink("2", "Mojito")])
        assert catalog.random_drink().id == "1"

    def test_empty_catalog(self):
        assert CatalogService([]).random_drink() is None


class TestCocktailDBLayout:
    """Tests for the wire format of a Drink."""

    def test_margarita_record(self):
        record = CatalogService().search("margarita")[0].model_dump()

        assert record["idDrink"] == "11007"
        assert record["strDrink"] == "Margarita"
        assert record["strCategory"] == "Ordinary Drink"
        assert record["strAlcoholic"] == "Alcoholic"
        assert record["strGlass"] == "Cocktail glass"
        assert record["strIngredient1"] == "Tequila"
        assert record["strMeasure1"] == "1 1/2 oz"
        assert record["strIngredient4"] == "Salt"
        assert record["strMeasure4"] is None
        assert record["strIngredient5"] is None

    def test_all_fifteen_slots_present(self):
        record = _drink("1", "Gin Fizz").model_dump()
        for slot in range(1, 16):
            assert f"strIngredient{slot}" in record
            assert f"strMeasure{slot}" in record
        assert "strIngredient16" not in record
