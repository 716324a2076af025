"""Generation engine.

Holds loaded packages by code and turns recipe ids into suggestions:

    engine = NominaEngine()
    engine.load_package(Package.from_file("names.json"))
    response = engine.generate("names", n=5, locale="de", recipes=["full"], seed="42")

Each suggestion runs the recipe's pattern through the composer with a
package-backed context, then applies the package output transforms and the
recipe's own post transforms.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..composer import execute_pattern
from ..config import NominaConfig, get_config
from ..core.errors import (
    GenerationError,
    NominaError,
    PackageFormatError,
    PackageNotFoundError,
    PatternError,
    RecipeNotFoundError,
    RecursionLimitError,
)
from ..core.models import (
    PACKAGE_FORMAT,
    GenerationIssue,
    GenerationResponse,
    Package,
    Suggestion,
    WhereClause,
)
from ..grammar import apply_transforms, get_localized_text, validate_lang_rules
from ..selector import seeded_index, sub_seed
from .context import PackageContext

logger = logging.getLogger(__name__)


class NominaEngine:
    """Registry of loaded packages plus the generate API."""

    def __init__(self, config: NominaConfig | None = None):
        self.config = config or get_config()
        self.packages: dict[str, Package] = {}

    # =========================================================================
    # Packages
    # =========================================================================

    def load_package(self, data: Package | dict[str, Any]) -> Package:
        """Validate and register a package.

        Every catalog item gets its position as ``_index`` so distinctness
        checks compare stable identities.

        Raises:
            PackageFormatError: Wrong format version, missing package code,
                no catalogs, or a shape that fails validation
        """
        if isinstance(data, dict):
            if data.get("format") != PACKAGE_FORMAT:
                raise PackageFormatError(
                    f"Invalid format version: {data.get('format')}. "
                    f"Expected {PACKAGE_FORMAT}",
                    format=data.get("format"),
                )
            try:
                package = Package.model_validate(data)
            except ValidationError as exc:
                raise PackageFormatError(f"Invalid package: {exc}") from exc
        else:
            package = data
            if package.format != PACKAGE_FORMAT:
                raise PackageFormatError(
                    f"Invalid format version: {package.format}. "
                    f"Expected {PACKAGE_FORMAT}",
                    format=package.format,
                )

        if not package.package.code:
            raise PackageFormatError("Package must have package.code")
        if not package.catalogs:
            raise PackageFormatError(
                "Package must have at least one catalog", package=package.code
            )

        package = package.model_copy(
            update={
                "catalogs": {
                    key: catalog.with_indices()
                    for key, catalog in package.catalogs.items()
                }
            }
        )

        for locale in package.lang_rules:
            is_valid, missing = validate_lang_rules(package.lang_rules, locale)
            if not is_valid:
                logger.debug(
                    "Language rules for %s in %s lack %s",
                    locale,
                    package.code,
                    ", ".join(missing),
                )

        self.packages[package.code] = package
        logger.info("Loaded package: %s", package.code)
        return package

    def load_package_file(self, path: Path | str) -> Package:
        """Read a JSON/YAML package file and register it."""
        path = Path(path)
        try:
            package = Package.from_file(path)
        except ValidationError as exc:
            raise PackageFormatError(
                f"Invalid package file {path}: {exc}", path=str(path)
            ) from exc
        return self.load_package(package)

    def get_package(self, code: str) -> Package | None:
        return self.packages.get(code)

    def get_loaded_packages(self) -> list[str]:
        return list(self.packages)

    def _require_package(self, code: str) -> Package:
        package = self.get_package(code)
        if package is None:
            raise PackageNotFoundError(code, self.get_loaded_packages())
        return package

    # =========================================================================
    # Generation
    # =========================================================================

    def generate(
        self,
        package_code: str,
        *,
        n: int = 1,
        locale: str = "en",
        recipes: list[str],
        seed: str | None = None,
        allow_duplicates: bool = False,
        filters: Mapping[str, WhereClause | dict] | None = None,
        components: Mapping[str, bool] | None = None,
    ) -> GenerationResponse:
        """Generate up to ``n`` suggestions, cycling through ``recipes``.

        Attempt ``i`` is seeded with ``<seed>:<i>``. Duplicate texts are
        rejected unless ``allow_duplicates``. Per-attempt failures are logged
        and collected in ``errors``.

        Raises:
            ValueError: If ``recipes`` is empty or ``n`` is out of range
            PackageNotFoundError: If the package is not loaded
            RecipeNotFoundError: If a requested recipe does not exist
            GenerationError: If no suggestion could be generated
        """
        max_n = self.config.generation.max_suggestions
        if not recipes:
            raise ValueError("At least one recipe must be specified")
        if n <= 0 or n > max_n:
            raise ValueError(f"n must be between 1 and {max_n}")

        package = self._require_package(package_code)

        for recipe_id in recipes:
            if package.find_recipe(recipe_id) is None:
                raise RecipeNotFoundError(
                    recipe_id, [r.id for r in package.recipes], package=package.code
                )

        if locale not in package.package.languages:
            logger.warning(
                "Locale %s not in package languages %s, using fallback",
                locale,
                package.package.languages,
            )

        suggestions: list[Suggestion] = []
        errors: list[GenerationIssue] = []
        seen: set[str] = set()

        max_attempts = n * self.config.generation.attempts_per_suggestion
        attempt = 0

        while len(suggestions) < n and attempt < max_attempts:
            recipe_id = recipes[len(suggestions) % len(recipes)]
            try:
                suggestion = self.generate_one(
                    package,
                    recipe_id,
                    locale,
                    sub_seed(seed, attempt),
                    filters=filters,
                    components=components,
                )
            except NominaError as exc:
                logger.error("Generation error (attempt %s): %s", attempt, exc.message)
                errors.append(
                    GenerationIssue(
                        message=exc.message,
                        attempt=attempt,
                        kind=exc.kind,
                        context={k: str(v) for k, v in exc.context.items()},
                    )
                )
            else:
                if allow_duplicates or suggestion.text not in seen:
                    seen.add(suggestion.text)
                    suggestions.append(suggestion)
            attempt += 1

        if not suggestions:
            raise GenerationError(
                "No suggestions could be generated",
                package=package.code,
                recipes=recipes,
                attempts=attempt,
                errors=[e.message for e in errors],
            )

        if len(suggestions) < n:
            logger.warning("Only generated %s/%s suggestions", len(suggestions), n)

        logger.debug(
            "Generated %s suggestion(s) in %s attempt(s)", len(suggestions), attempt
        )
        return GenerationResponse(suggestions=suggestions, errors=errors or None)

    def generate_one(
        self,
        package: Package,
        recipe_id: str,
        locale: str,
        seed: str | None = None,
        filters: Mapping[str, WhereClause | dict] | None = None,
        components: Mapping[str, bool] | None = None,
        depth: int = 0,
    ) -> Suggestion:
        """Run one recipe of ``package`` and build a suggestion.

        ``oneOf`` recipes pick an alternative from the seed; a ``ref``
        alternative runs the referenced recipe instead.
        """
        limit = self.config.generation.max_recursion_depth
        if limit is not None and depth > limit:
            raise RecursionLimitError(recipe_id, depth, limit)

        recipe = package.find_recipe(recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(
                recipe_id, [r.id for r in package.recipes], package=package.code
            )

        if recipe.pattern is not None:
            pattern = recipe.pattern
        elif recipe.one_of:
            option = recipe.one_of[
                seeded_index(sub_seed(seed, "oneOf"), len(recipe.one_of))
            ]
            if option.pattern is not None:
                pattern = option.pattern
            elif option.ref:
                return self.generate_one(
                    package,
                    option.ref,
                    locale,
                    seed,
                    filters=filters,
                    components=components,
                    depth=depth + 1,
                )
            else:
                raise PatternError(
                    "Invalid oneOf entry: must have pattern or ref", recipe=recipe_id
                )
        else:
            raise PatternError("Recipe must have pattern or oneOf", recipe=recipe_id)

        context = PackageContext(
            self, package, filters=filters, components=components, depth=depth
        )

        result = execute_pattern(
            pattern,
            package.catalogs,
            package.lang_rules,
            locale,
            seed,
            filters=filters,
            components=components,
            context=context,
            max_retries=self.config.selection.max_retries,
        )

        text = apply_transforms(
            result.text, [*package.output.transforms, *recipe.post]
        )

        tags = list(
            dict.fromkeys(tag for item in result.parts.values() for tag in item.tags)
        )

        return Suggestion(
            text=text,
            recipe=recipe_id,
            seed=seed,
            parts=result.parts,
            tags=tags or None,
        )

    # =========================================================================
    # Introspection
    # =========================================================================

    def _display_name(
        self, package: Package, value: Any, fallback: str, locale: str
    ) -> str:
        if not value:
            return fallback
        languages = package.package.languages
        return get_localized_text(value, locale, languages[0] if languages else None)

    def get_available_recipes(
        self, package_code: str, locale: str = "en"
    ) -> list[dict[str, str]]:
        """List ``{"id", "displayName"}`` for every recipe of a package."""
        package = self.get_package(package_code)
        if package is None:
            return []
        return [
            {
                "id": recipe.id,
                "displayName": self._display_name(
                    package, recipe.display_name, recipe.id, locale
                ),
            }
            for recipe in package.recipes
        ]

    def get_available_catalogs(
        self, package_code: str, locale: str = "en"
    ) -> list[dict[str, str]]:
        """List ``{"key", "displayName"}`` for every catalog of a package."""
        package = self.get_package(package_code)
        if package is None:
            return []
        return [
            {
                "key": key,
                "displayName": self._display_name(
                    package, catalog.display_name, key, locale
                ),
            }
            for key, catalog in package.catalogs.items()
        ]

    def get_available_collections(
        self, package_code: str, locale: str = "en"
    ) -> list[dict[str, Any]]:
        """List ``{"key", "displayName", "recipes"}`` for every collection."""
        package = self.get_package(package_code)
        if package is None:
            return []
        return [
            {
                "key": collection.key,
                "displayName": self._display_name(
                    package, collection.display_name, collection.key, locale
                ),
                "recipes": collection.recipe_ids,
            }
            for collection in package.collections
        ]
