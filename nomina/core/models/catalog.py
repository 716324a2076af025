"""Catalog models: items, catalogs and where-clause filters.

Wire keys follow the package JSON format (``t``, ``w``, ``_index``,
``anyOfTags`` ...); Python attribute names are snake_case.
"""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Items
# =============================================================================


class CatalogItem(BaseModel):
    """One candidate text fragment.

    ``text`` is either a locale map (``{"de": "Hamburg"}``) or a plain string.
    ``weight`` is not validated here; the selector clamps non-positive and
    non-finite weights to 1 at draw time.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    text: dict[str, str] | str = Field(alias="t")
    tags: list[str] = Field(default_factory=list)
    kinds: list[str] = Field(default_factory=list)
    weight: float = Field(default=1.0, alias="w")
    gram: dict[str, Any] = Field(default_factory=dict)
    attrs: dict[str, Any] = Field(default_factory=dict)
    index: int | None = Field(default=None, alias="_index")
    synthetic: bool = False

    @property
    def identity(self) -> str:
        """Stable identity used for distinctness checks.

        Explicit load-time index if assigned, otherwise derived from content.
        """
        if self.index is not None:
            return f"idx:{self.index}"
        if isinstance(self.text, dict):
            text = json.dumps(self.text, ensure_ascii=False, separators=(",", ":"))
        else:
            text = str(self.text)
        return f"text:{text}"

    @classmethod
    def synthesize(
        cls, text: str, locale: str, tags: list[str] | None = None
    ) -> "CatalogItem":
        """Wrap recipe-generated text so it behaves like a catalog item."""
        return cls(
            text={locale: text}, tags=tags or ["generated"], synthetic=True
        )


class Catalog(BaseModel):
    """Named, ordered pool of items. Treated as read-only during execution."""

    model_config = ConfigDict(populate_by_name=True)

    display_name: dict[str, str] | str | None = Field(
        default=None, alias="displayName"
    )
    items: list[CatalogItem] = Field(default_factory=list)

    def with_indices(self) -> "Catalog":
        """Return a copy whose items carry their position as identity index."""
        return self.model_copy(
            update={
                "items": [
                    item.model_copy(update={"index": i})
                    for i, item in enumerate(self.items)
                ]
            }
        )


# =============================================================================
# Filters
# =============================================================================


class WhereClause(BaseModel):
    """Filter over catalog items.

    - kinds: ANY-of
    - tags: ALL-of
    - any_of_tags: ANY-of
    - none_of_tags: NONE-of
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    kinds: list[str] | None = None
    tags: list[str] | None = None
    any_of_tags: list[str] | None = Field(default=None, alias="anyOfTags")
    none_of_tags: list[str] | None = Field(default=None, alias="noneOfTags")

    def is_empty(self) -> bool:
        return not (self.kinds or self.tags or self.any_of_tags or self.none_of_tags)

    def matches(self, item: CatalogItem) -> bool:
        if self.kinds:
            if not any(k in item.kinds for k in self.kinds):
                return False
        if self.tags:
            if not all(t in item.tags for t in self.tags):
                return False
        if self.any_of_tags:
            if not any(t in item.tags for t in self.any_of_tags):
                return False
        if self.none_of_tags:
            if any(t in item.tags for t in self.none_of_tags):
                return False
        return True

    def merge(self, other: "WhereClause | dict | None") -> "WhereClause":
        """Merge another clause into this one.

        Tags concatenate. Kinds intersect when both sides have kinds, otherwise
        whichever side has them wins. ``any_of_tags``/``none_of_tags`` from
        ``other`` replace ours when present.
        """
        other = coerce_where(other)
        if other is None:
            return self

        tags = self.tags
        if other.tags:
            tags = [*(self.tags or []), *other.tags]

        kinds = self.kinds
        if other.kinds:
            if self.kinds:
                wanted = set(other.kinds)
                kinds = [k for k in dict.fromkeys(self.kinds) if k in wanted]
            else:
                kinds = list(other.kinds)

        return WhereClause(
            kinds=kinds,
            tags=tags,
            any_of_tags=other.any_of_tags or self.any_of_tags,
            none_of_tags=other.none_of_tags or self.none_of_tags,
        )

    def describe(self) -> dict[str, list[str]]:
        """Compact dict of the active clauses, for error context and logs."""
        return self.model_dump(by_alias=True, exclude_none=True)


def coerce_where(value: "WhereClause | dict | None") -> WhereClause | None:
    if value is None or isinstance(value, WhereClause):
        return value
    return WhereClause.model_validate(value)


def merge_filters(
    base: WhereClause | dict | None, extra: WhereClause | dict | None
) -> WhereClause:
    """Merge two optional where clauses into a concrete one."""
    return (coerce_where(base) or WhereClause()).merge(extra)
