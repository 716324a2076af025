"""Recipe models: pattern blocks, recipes, collections and agreement config.

A pattern is an ordered list of blocks. Each wire shape is identified by the
single key it carries (``select``, ``generate``, ``literal``, ``pp``, ``ref``)
and parsed into its own model, so the composer dispatches over a closed set
of variants instead of probing for properties.
"""

from typing import Annotated, Any, ClassVar, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    field_validator,
)

from .catalog import WhereClause


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# =============================================================================
# Agreement
# =============================================================================


class AgreementFeature(_WireModel):
    """One feature to copy from the referenced item into the block's filter.

    - from=tags: source tags intersected with ``require_all_of``
    - from=gram: value at ``path`` in the source's gram mapped via ``map_to_tags``
    - from=kinds: source kinds intersected with ``any_of``
    """

    source: Literal["tags", "gram", "kinds"] = Field(alias="from")
    require_all_of: list[str] = Field(default_factory=list, alias="requireAllOf")
    path: str | None = None
    map_to_tags: dict[str, str] = Field(default_factory=dict, alias="mapToTags")
    any_of: list[str] = Field(default_factory=list, alias="anyOf")


class AgreementConfig(_WireModel):
    ref: str
    features: list[AgreementFeature] = Field(default_factory=list)
    fallback: Literal["skip", "error"] | WhereClause | None = None


class BlockExt(_WireModel):
    """Optional block extensions."""

    optional: bool = False
    hidden: bool = False
    component_key: str | None = Field(default=None, alias="componentKey")
    optional_with: str | None = Field(default=None, alias="optionalWith")
    agree_with: AgreementConfig | None = Field(default=None, alias="agreeWith")


# =============================================================================
# Blocks
# =============================================================================


class SelectSpec(_WireModel):
    source: str = Field(default="catalog", alias="from")
    key: str
    where: WhereClause | None = None
    params: dict[str, Any] = Field(default_factory=dict)


class GenerateSpec(_WireModel):
    source: str = Field(alias="from")
    key: str | None = None
    collection: str | None = None
    where: WhereClause | None = None


class _ProducingBlock(_WireModel):
    """Shared fields of blocks that resolve an item (select/generate)."""

    as_name: str | None = Field(default=None, alias="as")
    distinct_from: list[str] = Field(default_factory=list, alias="distinctFrom")
    transform: str | None = None
    ext: BlockExt = Field(default_factory=BlockExt)

    @field_validator("transform", mode="before")
    @classmethod
    def _transform_type(cls, value: Any) -> Any:
        # Accept both "demonym" and {"type": "demonym"}
        if isinstance(value, dict):
            return value.get("type")
        return value


class SelectBlock(_ProducingBlock):
    kind: ClassVar[str] = "select"

    select: SelectSpec


class GenerateBlock(_ProducingBlock):
    kind: ClassVar[str] = "generate"

    generate: GenerateSpec


class LiteralBlock(_WireModel):
    kind: ClassVar[str] = "literal"

    literal: dict[str, str] | str
    ext: BlockExt = Field(default_factory=BlockExt)


class InlineSelect(_WireModel):
    select: SelectSpec


class PPSpec(_WireModel):
    prep: str | None = None
    ref: str | InlineSelect


class PPBlock(_WireModel):
    kind: ClassVar[str] = "pp"

    pp: PPSpec
    ext: BlockExt = Field(default_factory=BlockExt)


class RefBlock(_WireModel):
    kind: ClassVar[str] = "ref"

    ref: str
    ext: BlockExt = Field(default_factory=BlockExt)


BLOCK_KINDS = ("select", "generate", "literal", "pp", "ref")


def block_kind(value: Any) -> str | None:
    """Discriminate a raw or parsed block by the key it carries."""
    if isinstance(value, dict):
        for kind in BLOCK_KINDS:
            if kind in value:
                return kind
        return None
    return getattr(value, "kind", None)


Block = Annotated[
    Annotated[SelectBlock, Tag("select")]
    | Annotated[GenerateBlock, Tag("generate")]
    | Annotated[LiteralBlock, Tag("literal")]
    | Annotated[PPBlock, Tag("pp")]
    | Annotated[RefBlock, Tag("ref")],
    Discriminator(block_kind),
]

_block_adapter: TypeAdapter = TypeAdapter(Block)


def parse_block(
    data: Any,
) -> SelectBlock | GenerateBlock | LiteralBlock | PPBlock | RefBlock:
    """Parse one wire block into its typed variant.

    Raises:
        pydantic.ValidationError: If the shape is not a known block kind.
    """
    return _block_adapter.validate_python(data)


# =============================================================================
# Recipes and collections
# =============================================================================


class RecipeOption(_WireModel):
    """One ``oneOf`` alternative: an inline pattern or a ref to another recipe."""

    pattern: list[Block] | None = None
    ref: str | None = None


class Recipe(_WireModel):
    id: str
    display_name: dict[str, str] | str | None = Field(
        default=None, alias="displayName"
    )
    pattern: list[Block] | None = None
    one_of: list[RecipeOption] | None = Field(default=None, alias="oneOf")
    post: list[str] = Field(default_factory=list)


class CollectionQuery(_WireModel):
    tags: list[str] | None = None
    recipes: list[str] | None = None


class Collection(_WireModel):
    """Named group of recipes (and/or a tag query over catalog items)."""

    key: str
    display_name: dict[str, str] | str | None = Field(
        default=None, alias="displayName"
    )
    query: CollectionQuery = Field(default_factory=CollectionQuery)

    @property
    def recipe_ids(self) -> list[str]:
        return list(self.query.recipes or [])
