"""All Pydantic models for Nomina, organized by domain.

- catalog.py: catalog items, catalogs, where-clause filters
- recipe.py: pattern blocks, recipes, collections, agreement config
- package.py: packages with JSON/YAML I/O
- results.py: pattern results and generation responses
"""

from .catalog import (
    CatalogItem,
    Catalog,
    WhereClause,
    coerce_where,
    merge_filters,
)
from .recipe import (
    AgreementFeature,
    AgreementConfig,
    BlockExt,
    SelectSpec,
    GenerateSpec,
    SelectBlock,
    GenerateBlock,
    LiteralBlock,
    InlineSelect,
    PPSpec,
    PPBlock,
    RefBlock,
    Block,
    BLOCK_KINDS,
    block_kind,
    parse_block,
    RecipeOption,
    Recipe,
    CollectionQuery,
    Collection,
)
from .package import PACKAGE_FORMAT, PackageMeta, OutputConfig, Package
from .results import PatternResult, Suggestion, GenerationIssue, GenerationResponse

__all__ = [
    # Catalog
    "CatalogItem",
    "Catalog",
    "WhereClause",
    "coerce_where",
    "merge_filters",
    # Recipe
    "AgreementFeature",
    "AgreementConfig",
    "BlockExt",
    "SelectSpec",
    "GenerateSpec",
    "SelectBlock",
    "GenerateBlock",
    "LiteralBlock",
    "InlineSelect",
    "PPSpec",
    "PPBlock",
    "RefBlock",
    "Block",
    "BLOCK_KINDS",
    "block_kind",
    "parse_block",
    "RecipeOption",
    "Recipe",
    "CollectionQuery",
    "Collection",
    # Package
    "PACKAGE_FORMAT",
    "PackageMeta",
    "OutputConfig",
    "Package",
    # Results
    "PatternResult",
    "Suggestion",
    "GenerationIssue",
    "GenerationResponse",
]
