"""Tests for weighted catalog selection."""

import logging

import pytest

from nomina.core.errors import (
    CatalogEmptyError,
    CatalogNoMatchError,
    SelectionDistinctExhaustedError,
)
from nomina.core.models import CatalogItem, WhereClause
from nomina.selector import (
    filter_items,
    seeded_index,
    seeded_uniform,
    select_from_catalog,
    sub_seed,
    weighted_random_select,
)


def _item(text, index, **kwargs):
    return CatalogItem(text=text, index=index, **kwargs)


def _items():
    return [
        _item("Hamburg", 0, tags=["north", "port"], kinds=["city"]),
        _item("Bremen", 1, tags=["south"], kinds=["city"]),
        _item("Kiel", 2, tags=["north", "port"], kinds=["town"]),
        _item("Passau", 3, tags=["south", "river"], kinds=["town"]),
    ]


class TestSeeding:
    """Tests for seed derivation."""

    def test_sub_seed_appends_label(self):
        assert sub_seed("42", "b3") == "42:b3"
        assert sub_seed("42", 7) == "42:7"

    def test_sub_seed_unseeded_stays_unseeded(self):
        assert sub_seed(None, "b0") is None

    def test_seeded_uniform_is_reproducible(self):
        assert seeded_uniform("abc") == seeded_uniform("abc")
        assert 0.0 <= seeded_uniform("abc") < 1.0

    def test_seeded_index_in_range(self):
        for i in range(50):
            assert 0 <= seeded_index(f"s{i}", 3) < 3


class TestFilterItems:
    """Tests for where-clause filtering."""

    def test_tags_all_of(self):
        result = filter_items(_items(), WhereClause(tags=["north", "port"]))
        assert [i.text for i in result] == ["Hamburg", "Kiel"]

    def test_kinds_any_of(self):
        result = filter_items(_items(), WhereClause(kinds=["town", "village"]))
        assert [i.text for i in result] == ["Kiel", "Passau"]

    def test_any_of_tags(self):
        result = filter_items(_items(), WhereClause(any_of_tags=["river", "port"]))
        assert [i.text for i in result] == ["Hamburg", "Kiel", "Passau"]

    def test_none_of_tags(self):
        result = filter_items(_items(), WhereClause(none_of_tags=["north"]))
        assert [i.text for i in result] == ["Bremen", "Passau"]

    def test_empty_lists_are_inactive(self):
        clause = WhereClause(tags=[], kinds=[])
        assert clause.is_empty()
        assert len(filter_items(_items(), clause)) == 4


class TestSelectFromCatalog:
    """Tests for select_from_catalog."""

    def test_filter_is_respected(self):
        """Only items matching the filter are ever returned."""
        for i in range(200):
            item = select_from_catalog(_items(), where={"tags": ["north"]}, seed=str(i))
            assert item.index in {0, 2}

    def test_same_seed_same_item(self):
        first = select_from_catalog(_items(), seed="repeatable")
        for _ in range(10):
            assert select_from_catalog(_items(), seed="repeatable") == first

    def test_distinct_from_is_respected(self):
        items = _items()[:2]
        excluded = {items[0].identity}
        for i in range(100):
            item = select_from_catalog(items, distinct_from=excluded, seed=str(i))
            assert item.identity not in excluded

    def test_distinct_exhausted(self):
        items = _items()[:1]
        with pytest.raises(SelectionDistinctExhaustedError) as exc_info:
            select_from_catalog(
                items, distinct_from={items[0].identity}, seed="x", max_retries=5
            )
        assert exc_info.value.context["attempts"] == 5

    def test_empty_catalog(self):
        with pytest.raises(CatalogEmptyError) as exc_info:
            select_from_catalog([], catalog_key="cities")
        assert exc_info.value.kind == "catalog.empty"
        assert exc_info.value.context["catalog"] == "cities"

    def test_no_match_reports_filters(self):
        with pytest.raises(CatalogNoMatchError) as exc_info:
            select_from_catalog(_items(), where={"tags": ["mountain"]}, catalog_key="c")
        context = exc_info.value.context
        assert context["total_items"] == 4
        assert context["filters"] == {"tags": ["mountain"]}

    def test_unindexed_items_use_text_identity(self):
        a = CatalogItem(text={"de": "Ulm"})
        b = CatalogItem(text={"de": "Ulm"})
        assert a.identity == b.identity == 'text:{"de":"Ulm"}'


class TestWeightedRandomSelect:
    """Tests for weight-proportional draws."""

    def test_weights_are_proportional(self):
        """A 3:1 weight split yields roughly 75% for the heavy item."""
        items = [_item("heavy", 0, weight=3), _item("light", 1, weight=1)]
        trials = 10_000
        heavy = sum(
            1 for _ in range(trials) if weighted_random_select(items).text == "heavy"
        )
        assert 0.70 < heavy / trials < 0.80

    def test_invalid_weight_counts_as_one(self, caplog):
        items = [_item("zero", 0, weight=0), _item("nan", 1, weight=float("nan"))]
        with caplog.at_level(logging.WARNING):
            selected = weighted_random_select(items, seed="w")
        assert selected.text in {"zero", "nan"}
        assert "Invalid weight" in caplog.text

    def test_single_candidate(self):
        item = _item("only", 0, weight=0.001)
        assert weighted_random_select([item], seed="s") is item
