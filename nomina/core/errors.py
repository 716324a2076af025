"""Error taxonomy for pattern execution.

Every error carries a dotted ``kind`` code and a ``context`` dict with enough
structured detail (block index, catalog/recipe key, filters, available
alternatives) to reconstruct a failure without re-running it.

Hierarchy:
- SelectionError: the selector could not produce an item
- ResolutionError: a named catalog/recipe/collection/package did not resolve
- PatternError: the pattern itself is malformed
- MissingContextError: the host did not provide a required capability
"""

from typing import Any


class NominaError(Exception):
    """Base class for all engine errors."""

    kind = "nomina.error"

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.context: dict[str, Any] = context
        super().__init__(message)

    def with_context(self, **context: Any) -> "NominaError":
        """Attach extra context without overwriting what is already known."""
        for key, value in context.items():
            self.context.setdefault(key, value)
        return self

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "message": self.message, "context": self.context}


# =============================================================================
# Selection
# =============================================================================


class SelectionError(NominaError):
    """Raised when a selection over catalog items fails."""

    kind = "selection.failed"


class CatalogEmptyError(SelectionError):
    kind = "catalog.empty"

    def __init__(self, catalog: str | None = None):
        super().__init__(
            f"Catalog '{catalog or 'unknown'}' is empty", catalog=catalog or "unknown"
        )


class CatalogNoMatchError(SelectionError):
    kind = "catalog.no-match"

    def __init__(
        self,
        catalog: str | None = None,
        total_items: int = 0,
        filters: dict[str, Any] | None = None,
    ):
        super().__init__(
            f"No items in catalog '{catalog or 'unknown'}' match filters "
            f"{filters or {}} ({total_items} items total)",
            catalog=catalog or "unknown",
            total_items=total_items,
            filters=filters or {},
        )


class SelectionDistinctExhaustedError(SelectionError):
    kind = "catalog.no-distinct"

    def __init__(self, attempts: int, catalog: str | None = None):
        super().__init__(
            f"Could not select a distinct item after {attempts} attempts",
            attempts=attempts,
            catalog=catalog or "unknown",
        )


# =============================================================================
# Resolution
# =============================================================================


def _available(names: list[str]) -> str:
    return ", ".join(names) if names else "(none)"


class ResolutionError(NominaError):
    """Raised when a named reference does not resolve."""

    kind = "resolution.failed"


class CatalogNotFoundError(ResolutionError):
    kind = "catalog.not-found"

    def __init__(self, key: str, available: list[str] | None = None, **context: Any):
        available = available or []
        super().__init__(
            f"Catalog not found: '{key}'. Available catalogs: {_available(available)}",
            key=key,
            available=available,
            **context,
        )


class RecipeNotFoundError(ResolutionError):
    kind = "recipe.not-found"

    def __init__(self, key: str, available: list[str] | None = None, **context: Any):
        available = available or []
        super().__init__(
            f"Recipe not found: '{key}'. Available recipes: {_available(available)}",
            key=key,
            available=available,
            **context,
        )


class CollectionNotFoundError(ResolutionError):
    kind = "collection.not-found"

    def __init__(
        self, key: str | None, available: list[str] | None = None, **context: Any
    ):
        available = available or []
        requested = f"'{key}'" if key else "(no collection with recipes)"
        super().__init__(
            f"Collection not found: {requested}. "
            f"Available collections: {_available(available)}",
            key=key,
            available=available,
            **context,
        )


class CollectionEmptyError(ResolutionError):
    """A collection resolved but lists no recipes to generate from."""

    kind = "collection.no-recipes"

    def __init__(self, key: str, **context: Any):
        super().__init__(
            f"Collection '{key}' has no recipes; collections must define "
            f"query.recipes to be used by generate blocks",
            key=key,
            **context,
        )


class PackageNotFoundError(ResolutionError):
    kind = "package.not-found"

    def __init__(self, code: str, available: list[str] | None = None):
        available = available or []
        super().__init__(
            f"Package not found: '{code}'. Loaded packages: {_available(available)}",
            code=code,
            available=available,
        )


# =============================================================================
# Context, pattern shape, references
# =============================================================================


class MissingContextError(NominaError):
    """Raised when a block needs a context capability the host did not supply."""

    kind = "context.missing"

    def __init__(self, capability: str, **context: Any):
        super().__init__(
            f"Execution context is missing required capability '{capability}'",
            capability=capability,
            **context,
        )


class PatternError(NominaError):
    """Raised for malformed pattern blocks."""

    kind = "pattern.invalid"


class UnsupportedSelectSourceError(PatternError):
    kind = "pattern.unsupported-source"

    def __init__(self, source: str):
        super().__init__(
            f"Unsupported select source: '{source}' "
            "(expected 'catalog' or 'generator')",
            source=source,
        )


class UnknownBlockTypeError(PatternError):
    kind = "pattern.unknown-block"

    def __init__(self, block: Any):
        super().__init__(f"Unknown block type: {block!r}", block=repr(block))


class MissingTextError(PatternError):
    """A locale text map has no entries at all."""

    kind = "text.missing"

    def __init__(self, locale: str):
        super().__init__("No text available in any locale", locale=locale)


class InvalidReferenceError(NominaError):
    """A Ref/PP alias was not found. Logged and skipped by the composer."""

    kind = "reference.invalid"

    def __init__(self, alias: str, available: list[str] | None = None):
        available = available or []
        super().__init__(
            f"Reference alias '{alias}' not found. "
            f"Known aliases: {_available(available)}",
            alias=alias,
            available=available,
        )


# =============================================================================
# Execution
# =============================================================================


class RecipeExecutionError(NominaError):
    """A nested recipe failed while generating text for a block."""

    kind = "recipe.execution-failed"


class RecursionLimitError(NominaError):
    kind = "recipe.recursion-limit"

    def __init__(self, recipe_id: str, depth: int, limit: int):
        super().__init__(
            f"Recipe '{recipe_id}' exceeded the recursion limit "
            f"({depth} > {limit}); check for cyclic recipe references",
            recipe_id=recipe_id,
            depth=depth,
            limit=limit,
        )


class GenerationError(NominaError):
    kind = "generation.failed"


class PackageFormatError(NominaError):
    kind = "package.invalid-format"
