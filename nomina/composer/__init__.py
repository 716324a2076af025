"""Pattern composer: block dispatch, resolution and agreement.

Usage:
    from nomina.composer import execute_pattern

    result = execute_pattern(recipe.pattern, package.catalogs, locale="de", seed="42")
    print(result.text, result.parts)
"""

from .agreement import derive_filter, get_nested_value
from .context import ExecutionContext
from .executor import execute_block, execute_pattern
from .parts import Parts
from .resolution import (
    Resolved,
    Scope,
    resolve_catalog,
    select_catalog_item,
    run_named_recipe,
    run_collection_recipe,
    resolve_select_block,
    resolve_generate_block,
    resolve_pp_referent,
)

__all__ = [
    "derive_filter",
    "get_nested_value",
    "ExecutionContext",
    "execute_block",
    "execute_pattern",
    "Parts",
    "Resolved",
    "Scope",
    "resolve_catalog",
    "select_catalog_item",
    "run_named_recipe",
    "run_collection_recipe",
    "resolve_select_block",
    "resolve_generate_block",
    "resolve_pp_referent",
]
