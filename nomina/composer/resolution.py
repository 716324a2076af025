"""Resolution of select/generate blocks to a concrete item.

Catalog selection:
    key (``"catalog"`` or ``"package:catalog"``) -> catalog
    static where + runtime filter for the key + agreement filter -> selector
    failure -> skip (optional block), or the agreement fallback policy

Recipe selection (generate blocks):
    from=recipe      -> run the named recipe
    from=catalog     -> catalog selection, narrowed by a collection's tags
    from=<package>   -> pick a recipe from a collection and run it

Recipe output is wrapped in a synthetic item so transforms and refs treat it
like any catalog item.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..core.errors import (
    CatalogNotFoundError,
    CollectionEmptyError,
    CollectionNotFoundError,
    InvalidReferenceError,
    MissingContextError,
    NominaError,
    PatternError,
    RecipeExecutionError,
    RecipeNotFoundError,
    RecursionLimitError,
    SelectionError,
    UnsupportedSelectSourceError,
)
from ..core.models import (
    BlockExt,
    Catalog,
    CatalogItem,
    Collection,
    GenerateBlock,
    InlineSelect,
    PPSpec,
    SelectBlock,
    SelectSpec,
    WhereClause,
    merge_filters,
)
from ..grammar import get_localized_text
from ..selector import DEFAULT_MAX_RETRIES, seeded_index, select_from_catalog
from .agreement import derive_filter
from .context import ExecutionContext
from .parts import Parts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scope:
    """Everything one block needs to resolve, fixed for that block."""

    catalogs: Mapping[str, Catalog]
    locale: str
    parts: Parts = field(default_factory=Parts)
    seed: str | None = None
    filters: Mapping[str, WhereClause | dict] = field(default_factory=dict)
    context: ExecutionContext = field(default_factory=ExecutionContext)
    max_retries: int = DEFAULT_MAX_RETRIES


@dataclass(frozen=True)
class Resolved:
    text: str
    item: CatalogItem


# =============================================================================
# Catalogs
# =============================================================================


def resolve_catalog(key: str, scope: Scope) -> tuple[str, Catalog]:
    """Look up a local or cross-package (``pkg:key``) catalog.

    Returns:
        Tuple of (catalog key used for runtime filters, catalog)
    """
    if ":" in key:
        package_code, catalog_key = key.split(":", 1)
        if not scope.context.can_resolve_packages:
            raise MissingContextError(
                "get_package_catalog", package=package_code, catalog=catalog_key
            )
        return catalog_key, scope.context.get_package_catalog(package_code, catalog_key)

    catalog = scope.catalogs.get(key)
    if catalog is None:
        raise CatalogNotFoundError(key, list(scope.catalogs))
    return key, catalog


def select_catalog_item(
    spec: SelectSpec,
    scope: Scope,
    distinct_from: list[str] | None = None,
    ext: BlockExt | None = None,
    where: WhereClause | None = None,
) -> Resolved | None:
    """Select an item from the catalog named by ``spec``.

    ``where`` overrides ``spec.where`` when given. Returns None when the
    block is skipped by its optional flag or agreement fallback.
    """
    ext = ext or BlockExt()
    catalog_key, catalog = resolve_catalog(spec.key, scope)

    base = where if where is not None else spec.where
    effective = merge_filters(base, scope.filters.get(catalog_key))

    agreement = ext.agree_with
    if agreement:
        effective = effective.merge(derive_filter(agreement, scope.parts))

    distinct_ids = scope.parts.identities(distinct_from or [])

    try:
        item = select_from_catalog(
            catalog.items,
            where=effective,
            distinct_from=distinct_ids,
            seed=scope.seed,
            max_retries=scope.max_retries,
            catalog_key=catalog_key,
        )
    except SelectionError as exc:
        exc.with_context(catalog=catalog_key, filters=effective.describe())

        if ext.optional:
            logger.warning("Optional component skipped: %s", exc.message)
            return None

        if agreement is None or agreement.fallback is None:
            raise

        if agreement.fallback == "skip":
            logger.info("Agreement fallback skipped block: %s", exc.message)
            return None
        if agreement.fallback == "error":
            raise

        fallback_where = effective.merge(agreement.fallback)
        logger.info(
            "Agreement fallback retrying '%s' with %s",
            catalog_key,
            fallback_where.describe(),
        )
        item = select_from_catalog(
            catalog.items,
            where=fallback_where,
            distinct_from=distinct_ids,
            seed=scope.seed,
            max_retries=scope.max_retries,
            catalog_key=catalog_key,
        )

    return Resolved(get_localized_text(item.text, scope.locale), item)


# =============================================================================
# Recipes
# =============================================================================


def _run_recipe(
    recipe_id: str,
    scope: Scope,
    params: dict[str, Any] | None = None,
    **context: Any,
) -> str:
    if not scope.context.can_execute_recipes:
        raise MissingContextError("execute_recipe", recipe=recipe_id, **context)

    try:
        return scope.context.execute_recipe(
            recipe_id, scope.locale, scope.seed, params or {}
        )
    except RecursionLimitError:
        raise
    except NominaError as exc:
        raise RecipeExecutionError(
            f"Recipe '{recipe_id}' failed ({scope.locale}): {exc.message}",
            recipe=recipe_id,
            locale=scope.locale,
            cause=exc.kind,
            **context,
        ) from exc


def run_named_recipe(
    recipe_id: str,
    scope: Scope,
    params: dict[str, Any] | None = None,
    **context: Any,
) -> Resolved:
    """Run a recipe listed in the context and wrap its output."""
    if scope.context.recipes is None:
        raise MissingContextError("recipes", recipe=recipe_id, **context)

    if scope.context.find_recipe(recipe_id) is None:
        raise RecipeNotFoundError(
            recipe_id, [r.id for r in scope.context.recipes], **context
        )

    text = _run_recipe(recipe_id, scope, params, **context)
    return Resolved(text, CatalogItem.synthesize(text, scope.locale))


def _require_collections(scope: Scope, query: dict[str, Any]) -> list[Collection]:
    if scope.context.collections is None:
        raise MissingContextError("collections", query=query)
    return scope.context.collections


def _find_collection(key: str, scope: Scope, query: dict[str, Any]) -> Collection:
    collections = _require_collections(scope, query)
    collection = scope.context.find_collection(key)
    if collection is None:
        raise CollectionNotFoundError(key, [c.key for c in collections], query=query)
    return collection


def _default_collection(scope: Scope, query: dict[str, Any]) -> Collection:
    """First collection that lists at least one recipe."""
    collections = _require_collections(scope, query)
    for collection in collections:
        if collection.recipe_ids:
            return collection
    raise CollectionNotFoundError(
        None,
        [f"{c.key} (recipes: {len(c.recipe_ids)})" for c in collections],
        query=query,
    )


def run_collection_recipe(
    collection: Collection, scope: Scope, query: dict[str, Any]
) -> Resolved:
    """Pick one of a collection's recipes from the seed and run it."""
    recipe_ids = collection.recipe_ids
    if not recipe_ids:
        raise CollectionEmptyError(collection.key, query=query)

    recipe_id = recipe_ids[seeded_index(scope.seed, len(recipe_ids))]
    text = _run_recipe(
        recipe_id,
        scope,
        query=query,
        collection=collection.key,
        available=recipe_ids,
    )

    logger.debug(
        "Generated from collection '%s' using recipe '%s'", collection.key, recipe_id
    )
    item = CatalogItem.synthesize(
        text, scope.locale, tags=["generated", collection.key]
    )
    return Resolved(text, item)


# =============================================================================
# Blocks
# =============================================================================


def resolve_select_block(
    block: SelectBlock | InlineSelect, scope: Scope
) -> Resolved | None:
    spec = block.select
    ext = getattr(block, "ext", None)
    distinct_from = getattr(block, "distinct_from", None)

    if spec.source == "generator":
        return run_named_recipe(
            spec.key, scope, spec.params, query={"from": "generator", "key": spec.key}
        )
    if spec.source == "catalog":
        return select_catalog_item(spec, scope, distinct_from=distinct_from, ext=ext)
    raise UnsupportedSelectSourceError(spec.source)


def resolve_generate_block(block: GenerateBlock, scope: Scope) -> Resolved | None:
    spec = block.generate
    query = spec.model_dump(by_alias=True, exclude_none=True, mode="json")

    if spec.source == "recipe":
        if not spec.key:
            raise PatternError("Generate from recipe requires a key", query=query)
        return run_named_recipe(spec.key, scope, query=query)

    if spec.source == "catalog":
        if not spec.key:
            raise PatternError("Generate from catalog requires a key", query=query)

        where = spec.where
        if spec.collection:
            collection = _find_collection(spec.collection, scope, query)
            if collection.query.tags:
                where = merge_filters(WhereClause(tags=collection.query.tags), where)

        try:
            return select_catalog_item(
                SelectSpec(source="catalog", key=spec.key),
                scope,
                distinct_from=block.distinct_from,
                ext=block.ext,
                where=where,
            )
        except NominaError as exc:
            exc.with_context(query=query)
            raise

    if spec.collection:
        collection = _find_collection(spec.collection, scope, query)
    else:
        collection = _default_collection(scope, query)
    return run_collection_recipe(collection, scope, query)


def resolve_pp_referent(pp: PPSpec, scope: Scope) -> CatalogItem | None:
    """Resolve a PP referent: a bound alias or an inline select.

    An unbound alias logs a warning and yields None.
    """
    if isinstance(pp.ref, str):
        item = scope.parts.get(pp.ref)
        if item is None:
            logger.warning("%s", InvalidReferenceError(pp.ref, list(scope.parts)))
        return item

    resolved = resolve_select_block(pp.ref, scope)
    return resolved.item if resolved else None
