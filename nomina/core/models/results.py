"""Result models returned by the composer and the engine."""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field

from .catalog import CatalogItem


@dataclass
class PatternResult:
    """Output of one pattern execution: joined text plus the alias table."""

    text: str
    parts: dict[str, CatalogItem] = field(default_factory=dict)


class Suggestion(BaseModel):
    text: str
    recipe: str
    seed: str | None = None
    parts: dict[str, CatalogItem] = Field(default_factory=dict)
    tags: list[str] | None = None


class GenerationIssue(BaseModel):
    code: str = "generation_failed"
    message: str
    attempt: int
    kind: str | None = None
    context: dict[str, Any] = Field(default_factory=dict)


class GenerationResponse(BaseModel):
    suggestions: list[Suggestion] = Field(default_factory=list)
    errors: list[GenerationIssue] | None = None
