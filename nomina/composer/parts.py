"""Alias table for one pattern execution.

``Parts`` is an immutable snapshot: binding an alias returns a new table, so a
nested resolution (inline PP select, agreement lookup) only ever sees the
aliases bound before it and cannot alter its caller's table.
"""

from collections.abc import Iterator, Mapping

from ..core.models import CatalogItem


class Parts(Mapping[str, CatalogItem]):
    __slots__ = ("_items",)

    def __init__(self, items: Mapping[str, CatalogItem] | None = None):
        self._items: dict[str, CatalogItem] = dict(items or {})

    def __getitem__(self, alias: str) -> CatalogItem:
        return self._items[alias]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Parts({list(self._items)!r})"

    def bind(self, alias: str, item: CatalogItem) -> "Parts":
        """Return a new table with ``alias`` bound to ``item``."""
        items = dict(self._items)
        items[alias] = item
        return Parts(items)

    def identities(self, aliases: list[str]) -> list[str]:
        """Identities of the bound items among ``aliases``; unbound ones are skipped."""
        return [self._items[a].identity for a in aliases if a in self._items]

    def to_dict(self) -> dict[str, CatalogItem]:
        return dict(self._items)
