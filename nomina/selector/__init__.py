"""Catalog item selection.

Usage:
    from nomina.selector import select_from_catalog

    item = select_from_catalog(catalog.items, where={"tags": ["city"]}, seed="42")
"""

from .core import (
    DEFAULT_MAX_RETRIES,
    select_from_catalog,
    filter_items,
    select_distinct,
    weighted_random_select,
)
from .seeding import sub_seed, seeded_uniform, seeded_index

__all__ = [
    "DEFAULT_MAX_RETRIES",
    "select_from_catalog",
    "filter_items",
    "select_distinct",
    "weighted_random_select",
    "sub_seed",
    "seeded_uniform",
    "seeded_index",
]
