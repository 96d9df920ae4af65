"""Unit tests for item configuration validation."""
import pytest

from pizzeria.services.ordering.selection import SelectionBundle, toggle_ingredient
from pizzeria.services.ordering.validator import MissingRequirement


FOUR_INGREDIENTS = ["Salami", "Schinken", "Champignons", "Paprika"]


class TestRequirements:
    """Test which requirements each kind of item has."""

    def test_sized_pizza(self, validator, menu_item):
        assert validator.requirements(menu_item(1)) == [MissingRequirement.SIZE]

    def test_plain_item(self, validator, menu_item):
        assert validator.requirements(menu_item(701)) == []

    def test_fixed_sauce_specialty(self, validator, menu_item):
        assert validator.requirements(menu_item(81)) == []

    def test_salad(self, validator, menu_item):
        assert validator.requirements(menu_item(568)) == [MissingRequirement.DRESSING]

    def test_needs_configuration(self, validator, menu_item):
        assert validator.needs_configuration(menu_item(1)) is True
        assert validator.needs_configuration(menu_item(2)) is True  # pizza offers extras
        assert validator.needs_configuration(menu_item(30)) is True
        assert validator.needs_configuration(menu_item(700)) is True
        assert validator.needs_configuration(menu_item(701)) is False
        assert validator.needs_configuration(menu_item(81)) is False


class TestMissingRequirement:
    """Test the first missing requirement for partial selections."""

    def test_size_required(self, validator, menu_item):
        assert validator.missing_requirement(menu_item(1)) is MissingRequirement.SIZE
        assert validator.is_complete(menu_item(1), SelectionBundle(size="Groß"))

    def test_unknown_size_is_missing(self, validator, menu_item):
        bundle = SelectionBundle(size="Riesig")
        assert validator.missing_requirement(menu_item(1), bundle) is MissingRequirement.SIZE

    def test_pasta_type_required(self, validator, menu_item):
        pasta = menu_item(40)
        assert validator.missing_requirement(pasta) is MissingRequirement.PASTA_TYPE
        assert validator.is_complete(pasta, SelectionBundle(pasta_type="Penne"))

    def test_sauce_required(self, validator, menu_item):
        gyros = menu_item(80)
        assert validator.missing_requirement(gyros) is MissingRequirement.SAUCE
        assert validator.is_complete(gyros, SelectionBundle(sauce="Tzatziki"))

    def test_sauce_from_wrong_list_rejected(self, validator, menu_item):
        bundle = SelectionBundle(sauce="Joghurt-Dressing")
        assert validator.missing_requirement(menu_item(80), bundle) is MissingRequirement.SAUCE

    def test_dressing_required(self, validator, menu_item):
        salad = menu_item(568)
        assert validator.missing_requirement(salad) is MissingRequirement.DRESSING
        assert validator.missing_requirement(
            salad, SelectionBundle(sauce="Tzatziki")
        ) is MissingRequirement.DRESSING
        assert validator.is_complete(salad, SelectionBundle(sauce="Essig-Öl"))

    def test_fixed_sauce_needs_nothing(self, validator, menu_item):
        assert validator.is_complete(menu_item(81))

    def test_beer_required(self, validator, menu_item):
        beer = menu_item(720)
        assert validator.missing_requirement(beer) is MissingRequirement.BEER
        assert validator.is_complete(beer, SelectionBundle(sauce="Pils"))

    def test_plain_item_complete(self, validator, menu_item):
        assert validator.missing_requirement(menu_item(701)) is None
        assert validator.missing_requirement(menu_item(701), None) is None

    def test_extras_never_block(self, validator, menu_item):
        bundle = SelectionBundle(size="Klein", extras=["Käse", "Peperoni", "Salami"])
        assert validator.is_complete(menu_item(1), bundle)
        assert validator.is_complete(menu_item(701), SelectionBundle(extras=["Käse"]))

    def test_reports_only_first_failing_rule(self, validator, menu_item):
        """A pizza that is sized and build-your-own reports size before ingredients."""
        item = menu_item(30).model_copy(update={"sizes": menu_item(1).sizes, "is_pasta": True})
        assert validator.missing_requirement(item) is MissingRequirement.SIZE
        assert validator.missing_requirement(
            item, SelectionBundle(size="Klein")
        ) is MissingRequirement.PASTA_TYPE
        assert validator.missing_requirement(
            item, SelectionBundle(size="Klein", pasta_type="Penne")
        ) is MissingRequirement.INGREDIENTS

    def test_does_not_mutate_bundle(self, validator, menu_item):
        bundle = SelectionBundle(ingredients=["ohne Zutat", "Salami"], extras=["Käse"])
        before = bundle.model_dump()
        validator.missing_requirement(menu_item(30), bundle)
        assert bundle.model_dump() == before


class TestBuildYourOwn:
    """Test the build-your-own ingredient rule."""

    @pytest.fixture
    def wunsch(self, menu_item):
        return menu_item(30)

    def test_three_ingredients_incomplete(self, validator, wunsch):
        bundle = SelectionBundle(ingredients=FOUR_INGREDIENTS[:3])
        assert validator.missing_requirement(wunsch, bundle) is MissingRequirement.INGREDIENTS

    def test_four_ingredients_complete(self, validator, wunsch):
        assert validator.is_complete(wunsch, SelectionBundle(ingredients=FOUR_INGREDIENTS))

    def test_five_ingredients_incomplete(self, validator, wunsch):
        bundle = SelectionBundle(ingredients=FOUR_INGREDIENTS + ["Zwiebeln"])
        assert not validator.is_complete(wunsch, bundle)

    def test_sentinel_alone_complete(self, validator, wunsch):
        assert validator.is_complete(wunsch, SelectionBundle(ingredients=["ohne Zutat"]))

    def test_sentinel_with_ingredient_invalid(self, validator, wunsch):
        bundle = SelectionBundle(ingredients=["ohne Zutat", "Salami"])
        assert validator.missing_requirement(wunsch, bundle) is MissingRequirement.INGREDIENTS

    def test_sentinel_with_three_ingredients_invalid(self, validator, wunsch):
        bundle = SelectionBundle(ingredients=["ohne Zutat"] + FOUR_INGREDIENTS[:3])
        assert not validator.is_complete(wunsch, bundle)

    def test_duplicate_ingredients_invalid(self, validator, wunsch):
        bundle = SelectionBundle(ingredients=["Salami", "Salami", "Schinken", "Paprika"])
        assert not validator.is_complete(wunsch, bundle)

    def test_disabled_ingredient_invalid(self, validator, wunsch):
        bundle = SelectionBundle(ingredients=FOUR_INGREDIENTS[:3] + ["Sardellen"])
        assert not validator.is_complete(wunsch, bundle)

    def test_unknown_ingredient_invalid(self, validator, wunsch):
        bundle = SelectionBundle(ingredients=FOUR_INGREDIENTS[:3] + ["Kaviar"])
        assert not validator.is_complete(wunsch, bundle)

    def test_toggle_keeps_selection_valid(self, validator, wunsch):
        """Selecting the sentinel after real ingredients yields a valid bundle."""
        selected = []
        for name in FOUR_INGREDIENTS[:2] + ["ohne Zutat"]:
            selected = toggle_ingredient(selected, name)
        assert validator.is_complete(wunsch, SelectionBundle(ingredients=selected))


class TestUnknownOptions:
    """Test detection of optional selections missing from the catalog."""

    def test_known_options(self, validator, menu_item):
        bundle = SelectionBundle(size="Groß", extras=["Käse"], pizza_style="Calzone")
        assert validator.unknown_options(menu_item(1), bundle) == []

    def test_unknown_extra_style_and_size(self, validator, menu_item):
        bundle = SelectionBundle(size="Riesig", extras=["Käse", "Gold"], pizza_style="Quadrat")
        assert validator.unknown_options(menu_item(1), bundle) == ["Gold", "Quadrat", "Riesig"]

    def test_unknown_fries_option(self, validator, menu_item):
        bundle = SelectionBundle(sauce="Tzatziki", fries_option="Kroketten")
        assert validator.unknown_options(menu_item(80), bundle) == ["Kroketten"]

    def test_style_on_item_without_styles(self, validator, menu_item):
        bundle = SelectionBundle(pizza_style="Calzone")
        assert validator.unknown_options(menu_item(701), bundle) == ["Calzone"]
        assert validator.unknown_options(menu_item(2), bundle) == ["Calzone"]

    def test_fries_on_item_without_fries(self, validator, menu_item):
        bundle = SelectionBundle(sauce="Tzatziki", fries_option="mit Pommes")
        assert validator.unknown_options(menu_item(80), bundle) == []
        assert validator.unknown_options(menu_item(568), bundle) == ["mit Pommes"]
