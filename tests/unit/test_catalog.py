"""Unit tests for the catalog provider and repository."""
from decimal import Decimal

import pytest
from pydantic import ValidationError

from pizzeria.services.catalog.base import SauceKind
from pizzeria.services.catalog.repository import CatalogRepository
from pizzeria.services.catalog.yaml_catalog import YamlCatalogProvider


class TestCatalogLoading:
    """Test loading catalogs from YAML."""

    def test_load_catalog_from_yaml(self, catalog):
        """Test that items and option lists are parsed."""
        assert len(catalog.items) == 10
        assert catalog.items[0].name == "Pizza Margherita"
        assert catalog.extra_price == Decimal("1.50")
        assert catalog.no_ingredient == "ohne Zutat"
        assert [s.name for s in catalog.sauces] == ["Tzatziki", "Knoblauchsoße"]

    def test_prices_are_decimals(self, menu_item):
        """Test that prices keep exact decimal values."""
        margherita = menu_item(1)
        assert isinstance(margherita.price, Decimal)
        assert margherita.sizes[1].price == Decimal("12.50")

    def test_categories_from_items_when_not_listed(self, tmp_path):
        """Test categories fall back to item categories in first-seen order."""
        menu_file = tmp_path / "menu.yaml"
        menu_file.write_text(
            "items:\n"
            "  - {id: 1, number: '1', name: A, category: Pizza, price: '5.00'}\n"
            "  - {id: 2, number: '2', name: B, category: Getränke, price: '2.00'}\n"
            "  - {id: 3, number: '3', name: C, category: Pizza, price: '6.00'}\n",
            encoding="utf-8",
        )
        catalog = YamlCatalogProvider(str(menu_file)).get_catalog()
        assert catalog.categories == ["Pizza", "Getränke"]

    def test_catalog_is_cached(self, test_menu_path):
        """Test that the provider loads the file once."""
        provider = YamlCatalogProvider(str(test_menu_path))
        assert provider.get_catalog() is provider.get_catalog()

    def test_negative_price_rejected(self, tmp_path):
        """Test malformed catalog data fails at load time."""
        menu_file = tmp_path / "menu.yaml"
        menu_file.write_text(
            "items:\n  - {id: 1, number: '1', name: A, price: '-1.00'}\n",
            encoding="utf-8",
        )
        with pytest.raises(ValidationError):
            YamlCatalogProvider(str(menu_file)).get_catalog()

    def test_catalog_items_are_immutable(self, menu_item):
        """Test menu items cannot be changed after load."""
        with pytest.raises(ValidationError):
            menu_item(1).price = Decimal("1.00")


class TestBundledCatalog:
    """Sanity checks on the catalog shipped with the service."""

    @pytest.fixture
    def bundled(self):
        return YamlCatalogProvider().get_catalog()

    def test_item_ids_unique(self, bundled):
        ids = [item.id for item in bundled.items]
        assert len(ids) == len(set(ids))

    def test_size_names_unique_per_item(self, bundled):
        for item in bundled.items:
            names = [size.name for size in item.sizes]
            assert len(names) == len(set(names)), item.name

    def test_sentinel_is_an_ingredient(self, bundled):
        assert bundled.no_ingredient in [ing.name for ing in bundled.ingredients]

    def test_every_item_category_listed(self, bundled):
        for item in bundled.items:
            assert item.category in bundled.categories

    def test_required_variant_lists_present(self, bundled):
        """Every item that needs a choice has options to choose from."""
        for item in bundled.items:
            if item.is_pasta:
                assert bundled.pasta_types
            if item.sauce_kind is not None:
                assert bundled.variants_for(item.sauce_kind), item.name


class TestMenuItemFlags:
    """Test derived item flags."""

    def test_specialty_requires_sauce(self, menu_item):
        gyros = menu_item(80)
        assert gyros.requires_sauce is True
        assert gyros.sauce_kind is SauceKind.SAUCE

    def test_fixed_sauce_specialty_needs_no_choice(self, menu_item):
        hollandaise = menu_item(81)
        assert hollandaise.requires_sauce is False
        assert hollandaise.sauce_kind is None

    def test_salad_uses_dressings(self, menu_item):
        assert menu_item(568).sauce_kind is SauceKind.DRESSING

    def test_beer_selection(self, menu_item):
        assert menu_item(720).sauce_kind is SauceKind.BEER

    def test_get_size(self, menu_item):
        margherita = menu_item(1)
        assert margherita.get_size("Groß").price == Decimal("12.50")
        assert margherita.get_size("Riesig") is None
        assert margherita.get_size(None) is None


class TestCatalogRepository:
    """Test catalog repository lookups."""

    def test_get_item(self, catalog_repository):
        item = catalog_repository.get_item(40)
        assert item is not None
        assert item.name == "Nudeln Bolognese"

    def test_get_item_not_found(self, catalog_repository):
        assert catalog_repository.get_item(9999) is None

    def test_get_items_by_category(self, catalog_repository):
        drinks = catalog_repository.get_items("Getränke")
        assert [item.id for item in drinks] == [700, 701, 720]

    def test_get_items_all(self, catalog_repository):
        assert len(catalog_repository.get_items()) == 10

    def test_options_for_pizza(self, catalog_repository, menu_item):
        options = catalog_repository.options_for(menu_item(1))
        assert [s.name for s in options.sizes] == ["Klein", "Groß"]
        assert len(options.extras) == 4
        assert options.ingredients == []
        assert [s.name for s in options.pizza_styles] == ["Normal", "Calzone"]
        assert options.sauce_kind is None

    def test_options_for_build_your_own(self, catalog_repository, menu_item):
        options = catalog_repository.options_for(menu_item(30))
        assert "ohne Zutat" in [ing.name for ing in options.ingredients]
        assert len(options.extras) == 4

    def test_options_for_salad(self, catalog_repository, menu_item):
        options = catalog_repository.options_for(menu_item(568))
        assert options.sauce_kind is SauceKind.DRESSING
        assert [s.name for s in options.sauces] == ["Joghurt-Dressing", "Essig-Öl"]
        assert options.extras == []

    def test_options_for_beer(self, catalog_repository, menu_item):
        options = catalog_repository.options_for(menu_item(720))
        assert [s.name for s in options.sauces] == ["Pils", "Weizen"]

    def test_options_for_plain_drink(self, catalog_repository, menu_item):
        options = catalog_repository.options_for(menu_item(701))
        assert options.model_dump(exclude_defaults=True) == {}

    def test_repository_uses_provider(self, test_menu_path):
        provider = YamlCatalogProvider(str(test_menu_path))
        repository = CatalogRepository(provider)
        assert repository.get_catalog() is provider.get_catalog()
