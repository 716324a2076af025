"""Execution context backed by the engine's loaded packages."""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..composer import ExecutionContext
from ..core.errors import CatalogNotFoundError, PackageNotFoundError
from ..core.models import Catalog, Package, WhereClause

if TYPE_CHECKING:
    from .engine import NominaEngine


class PackageContext(ExecutionContext):
    """Context for one pattern run inside ``package``.

    Nested recipes re-enter the engine with the same filters and component
    toggles, one level deeper.
    """

    def __init__(
        self,
        engine: "NominaEngine",
        package: Package,
        filters: Mapping[str, WhereClause | dict] | None = None,
        components: Mapping[str, bool] | None = None,
        depth: int = 0,
    ):
        self.engine = engine
        self.package = package
        self.filters = filters or {}
        self.components = components or {}
        self.depth = depth
        self.recipes = package.recipes
        self.collections = package.collections

    def execute_recipe(
        self,
        recipe_id: str,
        locale: str,
        seed: str | None,
        params: dict[str, Any] | None = None,
    ) -> str:
        suggestion = self.engine.generate_one(
            self.package,
            recipe_id,
            locale,
            seed,
            filters=self.filters,
            components=self.components,
            depth=self.depth + 1,
        )
        return suggestion.text

    def get_package_catalog(self, package_code: str, catalog_key: str) -> Catalog:
        package = self.engine.get_package(package_code)
        if package is None:
            raise PackageNotFoundError(package_code, self.engine.get_loaded_packages())

        catalog = package.catalogs.get(catalog_key)
        if catalog is None:
            raise CatalogNotFoundError(
                f"{package_code}:{catalog_key}",
                list(package.catalogs),
                package=package_code,
            )
        return catalog
