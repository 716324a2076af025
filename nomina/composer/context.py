"""Execution context: the host capabilities a pattern may call back into.

The composer never reaches into a package registry directly. Recursive
generation, cross-package catalog lookup and collection-based recipe choice
all go through an ``ExecutionContext``. Hosts subclass it; the base class
reports every capability as missing.
"""

from typing import Any

from ..core.errors import MissingContextError
from ..core.models import Catalog, Collection, Recipe


class ExecutionContext:
    """Capabilities supplied by the host.

    Attributes:
        recipes: Recipes available to ``generate``/``select from generator``
            blocks, or None when the host does not expose any
        collections: Named recipe groups, or None when unavailable
    """

    recipes: list[Recipe] | None = None
    collections: list[Collection] | None = None

    def execute_recipe(
        self,
        recipe_id: str,
        locale: str,
        seed: str | None,
        params: dict[str, Any] | None = None,
    ) -> str:
        """Run another recipe and return its text."""
        raise MissingContextError("execute_recipe", recipe=recipe_id)

    def get_package_catalog(self, package_code: str, catalog_key: str) -> Catalog:
        """Return a catalog from another loaded package."""
        raise MissingContextError(
            "get_package_catalog", package=package_code, catalog=catalog_key
        )

    @property
    def can_execute_recipes(self) -> bool:
        return type(self).execute_recipe is not ExecutionContext.execute_recipe

    @property
    def can_resolve_packages(self) -> bool:
        return (
            type(self).get_package_catalog
            is not ExecutionContext.get_package_catalog
        )

    def find_recipe(self, recipe_id: str) -> Recipe | None:
        for recipe in self.recipes or []:
            if recipe.id == recipe_id:
                return recipe
        return None

    def find_collection(self, key: str) -> Collection | None:
        for collection in self.collections or []:
            if collection.key == key:
                return collection
        return None
