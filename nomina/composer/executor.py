"""Pattern interpreter.

Walks a recipe pattern block by block, resolving each to text and collecting
the alias table. Per block:

1. Component gate: optional blocks whose component toggle is False are skipped
2. Sub-seed: block ``i`` draws from ``<seed>:b<i>``
3. Dispatch on the block variant (select, generate, literal, pp, ref)

Any error from a block aborts the execution after the block index is attached
to its context. Optional blocks and agreement fallbacks turn selection
failures into skips inside resolution.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Any

from pydantic import ValidationError

from ..config import get_config
from ..core.errors import InvalidReferenceError, NominaError, UnknownBlockTypeError
from ..core.models import (
    Catalog,
    GenerateBlock,
    LiteralBlock,
    PatternResult,
    PPBlock,
    RefBlock,
    SelectBlock,
    WhereClause,
    block_kind,
    parse_block,
)
from ..grammar import apply_block_transform, build_pp_phrase, get_localized_text
from ..selector import sub_seed
from .context import ExecutionContext
from .parts import Parts
from .resolution import (
    Resolved,
    Scope,
    resolve_generate_block,
    resolve_pp_referent,
    resolve_select_block,
)

logger = logging.getLogger(__name__)

AnyBlock = SelectBlock | GenerateBlock | LiteralBlock | PPBlock | RefBlock


def _coerce_block(block: Any, index: int) -> AnyBlock | None:
    """Parse a wire block; unknown shapes are logged and dropped."""
    if isinstance(block, (SelectBlock, GenerateBlock, LiteralBlock, PPBlock, RefBlock)):
        return block

    if block_kind(block) is None:
        logger.warning("Unknown block type at index %s: %r", index, block)
        return None

    try:
        return parse_block(block)
    except ValidationError as exc:
        logger.warning(
            "Malformed %s block at index %s: %s", block_kind(block), index, exc
        )
        return None


def _emit_resolved(
    block: SelectBlock | GenerateBlock,
    resolved: Resolved | None,
    scope: Scope,
    lang_rules: dict[str, Any] | None,
) -> tuple[str | None, Parts]:
    if resolved is None:
        return None, scope.parts

    text = resolved.text
    if block.transform:
        text = apply_block_transform(
            block.transform, text, resolved.item, scope.parts, lang_rules, scope.locale
        )

    parts = scope.parts
    if block.as_name:
        parts = parts.bind(block.as_name, resolved.item)

    return (None if block.ext.hidden else text), parts


def execute_block(
    block: AnyBlock, scope: Scope, lang_rules: dict[str, Any] | None
) -> tuple[str | None, Parts]:
    """Run one block.

    Returns:
        Tuple of (token to emit or None, alias table after the block)
    """
    if isinstance(block, SelectBlock):
        return _emit_resolved(
            block, resolve_select_block(block, scope), scope, lang_rules
        )

    if isinstance(block, GenerateBlock):
        return _emit_resolved(
            block, resolve_generate_block(block, scope), scope, lang_rules
        )

    if isinstance(block, LiteralBlock):
        # Only print this literal if the part it depends on fired
        depends_on = block.ext.optional_with
        if depends_on and depends_on not in scope.parts:
            return None, scope.parts
        return get_localized_text(block.literal, scope.locale), scope.parts

    if isinstance(block, PPBlock):
        item = resolve_pp_referent(block.pp, scope)
        if item is None:
            return None, scope.parts
        phrase = build_pp_phrase(item, scope.locale, block.pp.prep, lang_rules)
        return phrase, scope.parts

    if isinstance(block, RefBlock):
        item = scope.parts.get(block.ref)
        if item is None:
            logger.warning("%s", InvalidReferenceError(block.ref, list(scope.parts)))
            return None, scope.parts
        return get_localized_text(item.text, scope.locale), scope.parts

    raise UnknownBlockTypeError(block)


def execute_pattern(
    pattern: Sequence[AnyBlock | dict],
    catalogs: Mapping[str, Catalog],
    lang_rules: dict[str, Any] | None = None,
    locale: str = "en",
    seed: str | None = None,
    filters: Mapping[str, WhereClause | dict] | None = None,
    components: Mapping[str, bool] | None = None,
    context: ExecutionContext | None = None,
    max_retries: int | None = None,
) -> PatternResult:
    """Execute a pattern and return the composed text plus its alias table.

    Args:
        pattern: Ordered blocks, typed or in wire (dict) form
        catalogs: Catalogs of the current package, by key
        lang_rules: Per-locale language rules for PP phrases and titles
        locale: Output locale
        seed: Seed string; same seed and inputs give the same output
        filters: Runtime where clauses keyed by catalog key
        components: Component toggles; ``False`` skips optional blocks
            carrying that ``componentKey``
        context: Host capabilities (recipes, collections, cross-package
            catalogs); a bare context supports local catalogs only
        max_retries: Distinctness retry bound (default from config)

    Returns:
        PatternResult with the joined text and the alias table

    Raises:
        NominaError: If a non-optional block fails; ``block_index`` is set
            in the error context
    """
    components = components or {}
    if max_retries is None:
        max_retries = get_config().selection.max_retries

    scope = Scope(
        catalogs=catalogs,
        locale=locale,
        filters=filters or {},
        context=context or ExecutionContext(),
        max_retries=max_retries,
    )
    parts = Parts()
    tokens: list[str] = []

    for index, raw in enumerate(pattern):
        block = _coerce_block(raw, index)
        if block is None:
            continue

        ext = block.ext
        if ext.optional and ext.component_key:
            if components.get(ext.component_key) is False:
                logger.debug(
                    "Component '%s' disabled, skipping block %s",
                    ext.component_key,
                    index,
                )
                continue

        block_scope = replace(scope, parts=parts, seed=sub_seed(seed, f"b{index}"))

        try:
            token, parts = execute_block(block, block_scope, lang_rules)
        except NominaError as exc:
            exc.with_context(block_index=index, block_kind=block.kind)
            logger.error("Error executing block %s: %s", index, exc.message)
            raise

        if token is not None:
            tokens.append(token)

    return PatternResult(text="".join(tokens), parts=parts.to_dict())
