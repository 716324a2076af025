"""Text transforms.

Two families:

- Block transforms (``demonym``, ``genitive``/``possessive``, ``genderAdapt``)
  rewrite the text of one resolved item.
- Post transforms (``TrimSpaces``, ``CollapseSpaces``, ``TitleCase``,
  ``ConcatNoSpace``, ``NormalizeUmlauts``) run as a pipeline over composed
  text.

Transforms never fail a generation: unknown names and unsupported locales log
a warning and return the text unchanged.
"""

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from ..core.models import CatalogItem
from .phrases import adapt_title_to_gender, get_localized_text
from .rules import (
    DEMONYM_TABLES,
    ENGLISH_S_ENDING,
    GERMAN_SIBILANT_ENDING,
    TITLE_PARTICLES,
    UMLAUT_MAP,
)

logger = logging.getLogger(__name__)

# Letters/digits, optionally followed by an apostrophe segment ("peter's")
_WORD = re.compile(r"[^\W_]+(?:'[^\W_]*)?")
_WHITESPACE = re.compile(r"\s+")


# =============================================================================
# Demonym
# =============================================================================


def apply_demonym_transform(toponym: str, locale: str) -> str:
    """Derive the inhabitant name of a place (Hamburg -> Hamburger)."""
    if not toponym or not isinstance(toponym, str):
        logger.warning("Invalid toponym for demonym transform: %r", toponym)
        return toponym

    table = DEMONYM_TABLES.get(locale)
    if table is None:
        logger.warning("Demonym transform not implemented for locale: %s", locale)
        return toponym

    return table.apply(toponym)


# =============================================================================
# Genitive / possessive
# =============================================================================


def apply_german_genitive(name: str) -> str:
    """Hans -> Hans', Peter -> Peters."""
    if GERMAN_SIBILANT_ENDING.search(name):
        return name + "'"
    return name + "s"


def apply_english_possessive(name: str) -> str:
    """Charles -> Charles', Anna -> Anna's."""
    if ENGLISH_S_ENDING.search(name):
        return name + "'"
    return name + "'s"


_GENITIVE_RULES: dict[str, Callable[[str], str]] = {
    "de": apply_german_genitive,
    "en": apply_english_possessive,
}


def apply_genitive_transform(name: str, locale: str) -> str:
    if not name or not isinstance(name, str):
        logger.warning("Invalid name for genitive transform: %r", name)
        return name

    rule = _GENITIVE_RULES.get(locale)
    if rule is None:
        logger.warning("Genitive transform not implemented for locale: %s", locale)
        return name

    return rule(name)


# =============================================================================
# Gender adaptation
# =============================================================================


def apply_gender_adaptation(
    title: CatalogItem,
    parts: Mapping[str, CatalogItem],
    lang_rules: dict[str, Any] | None,
    locale: str,
) -> str:
    """Adapt a title to the gender of the item bound as ``Person``."""
    person = parts.get("Person")
    if person is None:
        logger.warning("Gender adaptation requested but no Person alias found")
        return get_localized_text(title.text, locale)

    gender = person.attrs.get("gender")
    if not gender:
        logger.warning("Person has no gender attribute")
        return get_localized_text(title.text, locale)

    return adapt_title_to_gender(title, gender, lang_rules, locale)


def apply_block_transform(
    transform: str,
    text: str,
    item: CatalogItem,
    parts: Mapping[str, CatalogItem],
    lang_rules: dict[str, Any] | None,
    locale: str,
) -> str:
    """Apply a block-level ``transform`` (case-insensitive) to resolved text."""
    kind = transform.lower()

    if kind == "genderadapt":
        return apply_gender_adaptation(item, parts, lang_rules, locale)
    if kind == "demonym":
        return apply_demonym_transform(text, locale)
    if kind in ("genitive", "possessive"):
        return apply_genitive_transform(text, locale)

    logger.warning("Unknown block transform: %s", transform)
    return text


# =============================================================================
# Post transforms
# =============================================================================


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def title_case(text: str, particles: Iterable[str] | None = None) -> str:
    """Capitalize words, keeping particles lowercase except in first position.

    For a word with an apostrophe only the part before it is capitalized, so
    "peter's" becomes "Peter's".
    """
    particle_set = TITLE_PARTICLES if particles is None else frozenset(
        p.lower() for p in particles
    )
    first = True

    def replace(match: re.Match) -> str:
        nonlocal first
        word = match.group(0)
        head, sep, tail = word.partition("'")
        is_first, first = first, False

        if not is_first and head.lower() in particle_set:
            return word.lower()
        return _capitalize(head) + sep + tail.lower()

    return _WORD.sub(replace, text)


def normalize_umlauts(text: str) -> str:
    """ä -> ae, Ö -> Oe, ß -> ss, ..."""
    for char, replacement in UMLAUT_MAP.items():
        text = text.replace(char, replacement)
    return text


POST_TRANSFORMS: dict[str, Callable[[str], str]] = {
    "trimspaces": str.strip,
    "collapsespaces": lambda text: _WHITESPACE.sub(" ", text),
    "titlecase": title_case,
    "concatnospace": lambda text: _WHITESPACE.sub("", text),
    "normalizeumlauts": normalize_umlauts,
}


def apply_transform(text: str, name: str) -> str:
    """Apply one named post transform (case-insensitive)."""
    fn = POST_TRANSFORMS.get(name.lower()) if isinstance(name, str) else None
    if fn is None:
        logger.warning("Unknown transform: %s", name)
        return text
    return fn(text)


def apply_transforms(text: str, transforms: Iterable[str] | None) -> str:
    """Apply post transforms in order."""
    for name in transforms or ():
        text = apply_transform(text, name)
    return text
