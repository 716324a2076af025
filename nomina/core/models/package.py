"""Package model and file I/O.

A package bundles catalogs, recipes, collections and language rules for one
content domain. Packages are loaded from JSON or YAML before any pattern runs.
"""

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .catalog import Catalog
from .recipe import Collection, Recipe

PACKAGE_FORMAT = "4.0.0"


class PackageMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    code: str
    display_name: dict[str, str] | str | None = Field(
        default=None, alias="displayName"
    )
    languages: list[str] = Field(default_factory=lambda: ["en"])


class OutputConfig(BaseModel):
    transforms: list[str] = Field(default_factory=list)


class Package(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    format: str = PACKAGE_FORMAT
    package: PackageMeta
    catalogs: dict[str, Catalog] = Field(default_factory=dict)
    recipes: list[Recipe] = Field(default_factory=list)
    collections: list[Collection] = Field(default_factory=list)
    lang_rules: dict[str, Any] = Field(default_factory=dict, alias="langRules")
    output: OutputConfig = Field(default_factory=OutputConfig)

    @property
    def code(self) -> str:
        return self.package.code

    def find_recipe(self, recipe_id: str) -> Recipe | None:
        for recipe in self.recipes:
            if recipe.id == recipe_id:
                return recipe
        return None

    @classmethod
    def from_file(cls, path: Path | str) -> "Package":
        """Load a package from a ``.json``, ``.yaml`` or ``.yml`` file."""
        path = Path(path)

        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)

        return cls.model_validate(data)

    def to_yaml(self, path: Path | str) -> None:
        """Save package to YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)

        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(
                data, f, default_flow_style=False, sort_keys=False, allow_unicode=True
            )
