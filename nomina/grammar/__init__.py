"""Grammar: localized text, PP phrases, suffix rules and text transforms."""

from .phrases import (
    get_localized_text,
    apply_contractions,
    build_pp_phrase,
    adapt_title_to_gender,
    validate_lang_rules,
)
from .rules import (
    SuffixRule,
    SuffixRuleTable,
    GERMAN_DEMONYMS,
    ENGLISH_DEMONYMS,
    DEMONYM_TABLES,
    ENGLISH_PARTICLES,
    GERMAN_PARTICLES,
    TITLE_PARTICLES,
)
from .transforms import (
    apply_demonym_transform,
    apply_german_genitive,
    apply_english_possessive,
    apply_genitive_transform,
    apply_gender_adaptation,
    apply_block_transform,
    title_case,
    normalize_umlauts,
    POST_TRANSFORMS,
    apply_transform,
    apply_transforms,
)

__all__ = [
    # Phrases
    "get_localized_text",
    "apply_contractions",
    "build_pp_phrase",
    "adapt_title_to_gender",
    "validate_lang_rules",
    # Rules
    "SuffixRule",
    "SuffixRuleTable",
    "GERMAN_DEMONYMS",
    "ENGLISH_DEMONYMS",
    "DEMONYM_TABLES",
    "ENGLISH_PARTICLES",
    "GERMAN_PARTICLES",
    "TITLE_PARTICLES",
    # Transforms
    "apply_demonym_transform",
    "apply_german_genitive",
    "apply_english_possessive",
    "apply_genitive_transform",
    "apply_gender_adaptation",
    "apply_block_transform",
    "title_case",
    "normalize_umlauts",
    "POST_TRANSFORMS",
    "apply_transform",
    "apply_transforms",
]
