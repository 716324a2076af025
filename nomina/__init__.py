"""Nomina: recipe-driven name and title generation.

Packages bundle weighted catalogs, recipes built from pattern blocks, and
per-locale language rules. The composer executes a pattern against catalogs
deterministically for a given seed; the engine runs recipes from loaded
packages and collects suggestions.

    from nomina import NominaEngine

    engine = NominaEngine()
    engine.load_package_file("names.json")
    response = engine.generate("names", n=5, recipes=["full"], seed="42")
"""

__version__ = "0.1.0"

from .composer import ExecutionContext, execute_pattern
from .core.errors import (
    NominaError,
    SelectionError,
    ResolutionError,
    PatternError,
    GenerationError,
    PackageFormatError,
)
from .core.models import Package, Recipe, CatalogItem, WhereClause
from .engine import NominaEngine
from .grammar import apply_transforms

__all__ = [
    "__version__",
    "ExecutionContext",
    "execute_pattern",
    "NominaError",
    "SelectionError",
    "ResolutionError",
    "PatternError",
    "GenerationError",
    "PackageFormatError",
    "Package",
    "Recipe",
    "CatalogItem",
    "WhereClause",
    "NominaEngine",
    "apply_transforms",
]
