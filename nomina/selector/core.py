"""Weighted random selection from catalog items.

Filtering with where clauses, weight-proportional draws and a bounded retry
loop for distinctness. Pure over its inputs plus the random source.
"""

import logging
import math
from collections.abc import Collection, Sequence

from ..core.errors import (
    CatalogEmptyError,
    CatalogNoMatchError,
    SelectionDistinctExhaustedError,
)
from ..core.models import CatalogItem, WhereClause, coerce_where
from .seeding import seeded_uniform, sub_seed

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 20


def select_from_catalog(
    items: Sequence[CatalogItem],
    where: WhereClause | dict | None = None,
    distinct_from: Collection[str] = (),
    seed: str | None = None,
    max_retries: int = DEFAULT_MAX_RETRIES,
    catalog_key: str | None = None,
) -> CatalogItem:
    """Select one item from a catalog.

    Args:
        items: Catalog items
        where: Filter clause (optional)
        distinct_from: Item identities the result must differ from
        seed: Seed string for deterministic selection (optional)
        max_retries: Maximum draws when enforcing distinctness
        catalog_key: Catalog name, used only for error context

    Returns:
        The selected item

    Raises:
        CatalogEmptyError: If ``items`` is empty
        CatalogNoMatchError: If no item passes the filter
        SelectionDistinctExhaustedError: If every draw hit ``distinct_from``
    """
    if not items:
        raise CatalogEmptyError(catalog_key)

    clause = coerce_where(where)
    candidates = filter_items(items, clause) if clause else list(items)

    if not candidates:
        raise CatalogNoMatchError(
            catalog_key,
            total_items=len(items),
            filters=clause.describe() if clause else {},
        )

    if distinct_from:
        return select_distinct(
            candidates, distinct_from, seed, max_retries, catalog_key=catalog_key
        )

    return weighted_random_select(candidates, seed)


def filter_items(
    items: Sequence[CatalogItem], where: WhereClause
) -> list[CatalogItem]:
    """Keep items satisfying every active clause of ``where``."""
    filtered = [item for item in items if where.matches(item)]
    logger.debug(
        "Filter result: %s/%s items matched %s",
        len(filtered),
        len(items),
        where.describe(),
    )
    return filtered


def select_distinct(
    candidates: Sequence[CatalogItem],
    distinct_from: Collection[str],
    seed: str | None,
    max_retries: int = DEFAULT_MAX_RETRIES,
    catalog_key: str | None = None,
) -> CatalogItem:
    """Draw until the result's identity is not in ``distinct_from``.

    Retry ``n`` uses sub-seed ``<seed>:retry<n>`` when seeded.
    """
    excluded = set(distinct_from)
    for attempt in range(max_retries):
        selected = weighted_random_select(candidates, sub_seed(seed, f"retry{attempt}"))
        if selected.identity not in excluded:
            return selected

    raise SelectionDistinctExhaustedError(max_retries, catalog=catalog_key)


def _effective_weight(item: CatalogItem) -> float:
    weight = item.weight
    if weight <= 0 or not math.isfinite(weight):
        return 1.0
    return weight


def weighted_random_select(
    candidates: Sequence[CatalogItem], seed: str | None = None
) -> CatalogItem:
    """Pick one candidate with probability proportional to its weight.

    Non-positive or non-finite weights count as 1. The last candidate is
    returned if float rounding leaves the threshold positive.
    """
    total = 0.0
    for item in candidates:
        weight = _effective_weight(item)
        if weight != item.weight:
            logger.warning(
                "Invalid weight %s on item %s, using 1", item.weight, item.identity
            )
        total += weight

    threshold = seeded_uniform(seed) * total

    for item in candidates:
        threshold -= _effective_weight(item)
        if threshold <= 0:
            return item

    return candidates[-1]
