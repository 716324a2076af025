"""Language-rule driven phrase building.

Localized text lookup, preposition phrases (preposition + article + noun) and
gender-adapted title forms. ``lang_rules`` is the package's per-locale rule
mapping, e.g.::

    {"de": {
        "prepCase": {"an": "dat"},
        "articles": {"def": {"dat": {"m": "dem", "f": "der"}}},
        "contractions": {"an dem": "am"},
        "defaults": {"articleWhenNone": "omit", "defaultCase": "nom"},
        "titles": {"graf": {"forms": {"f": {"nom": "Gräfin"}}}},
    }}
"""

import logging
from typing import Any

from ..core.errors import MissingTextError
from ..core.models import CatalogItem

logger = logging.getLogger(__name__)


def get_localized_text(
    text: dict[str, str] | str, locale: str, fallback_locale: str | None = None
) -> str:
    """Resolve a locale map to one string.

    Tries ``locale``, then ``fallback_locale``, then the first locale present.

    Raises:
        MissingTextError: If the map is empty.
    """
    if isinstance(text, str):
        return text

    if text.get(locale):
        return text[locale]

    if fallback_locale and text.get(fallback_locale):
        return text[fallback_locale]

    for value in text.values():
        return value

    raise MissingTextError(locale)


def apply_contractions(phrase: str, contractions: dict[str, str] | None) -> str:
    """Replace the first occurrence of each contraction pattern."""
    if not contractions:
        return phrase
    for pattern, replacement in contractions.items():
        phrase = phrase.replace(pattern, replacement, 1)
    return phrase


def build_pp_phrase(
    item: CatalogItem,
    locale: str,
    prep: str | None,
    lang_rules: dict[str, Any] | None,
) -> str:
    """Format ``<prep> [<article>] <text>`` for an item.

    The article is looked up by the preposition's case and the item's
    grammatical gender, and only when the item asks for a definite article.
    """
    text = get_localized_text(item.text, locale)

    if not prep:
        return text

    rules = (lang_rules or {}).get(locale)
    if not rules:
        logger.debug("No language rules for %s, using plain preposition", locale)
        return f"{prep} {text}"

    gram_case = (rules.get("prepCase") or {}).get(prep)
    if not gram_case:
        logger.debug("No case mapping for preposition '%s' in %s", prep, locale)
        return f"{prep} {text}"

    item_gram = item.gram.get(locale) or {}
    article_kind = item_gram.get("article")

    if not item_gram or article_kind == "none":
        behavior = (rules.get("defaults") or {}).get("articleWhenNone", "omit")
        if behavior == "omit":
            return f"{prep} {text}"

    if article_kind != "def":
        return f"{prep} {text}"

    gender = item_gram.get("gender")
    if not gender:
        logger.warning(
            "Item has article='def' but no gender for %s: %s", locale, item.identity
        )
        return f"{prep} {text}"

    article = (
        ((rules.get("articles") or {}).get("def") or {}).get(gram_case) or {}
    ).get(gender)
    if not article:
        logger.warning(
            "No definite article for case=%s, gender=%s in %s",
            gram_case,
            gender,
            locale,
        )
        return f"{prep} {text}"

    return apply_contractions(f"{prep} {article} {text}", rules.get("contractions"))


def adapt_title_to_gender(
    title: CatalogItem,
    gender: str,
    lang_rules: dict[str, Any] | None,
    locale: str,
    case: str = "nom",
) -> str:
    """Return the form of a title matching ``gender``.

    Args:
        title: Title item; ``attrs.titleId`` keys into ``titles`` in the rules
        gender: Gender of the person being titled (m/f/n)
        lang_rules: Package language rules
        locale: Target locale
        case: Grammatical case (nom/gen/dat/akk or plain)

    Returns:
        The adapted form, or the title's own text when no forms apply.
    """
    title_id = title.attrs.get("titleId")
    if not title_id:
        logger.debug("No titleId in attrs, using plain text")
        return get_localized_text(title.text, locale)

    rules = (lang_rules or {}).get(locale) or {}
    title_def = (rules.get("titles") or {}).get(title_id)
    if not title_def:
        logger.warning("No title forms found for '%s' in %s", title_id, locale)
        return get_localized_text(title.text, locale)

    forms = title_def.get("forms") or {}
    gender_forms = forms.get(gender)

    if not gender_forms:
        logger.warning("No forms for gender '%s' in title '%s'", gender, title_id)
        base_forms = forms.get(title.attrs.get("baseGender") or "m")
        if base_forms:
            return (
                base_forms.get(case)
                or base_forms.get("nom")
                or base_forms.get("plain")
                or ""
            )
        return get_localized_text(title.text, locale)

    default_case = (rules.get("defaults") or {}).get("defaultCase", "nom")
    return (
        gender_forms.get(case)
        or gender_forms.get(default_case)
        or gender_forms.get("plain")
        or ""
    )


def validate_lang_rules(
    lang_rules: dict[str, Any] | None, locale: str
) -> tuple[bool, list[str]]:
    """Check that the rules for ``locale`` carry what PP phrases need.

    Returns:
        Tuple of (is_valid, missing keys)
    """
    rules = (lang_rules or {}).get(locale)
    if not rules:
        return False, ["langRules"]

    missing = []
    if not rules.get("prepCase"):
        missing.append("prepCase")

    articles = rules.get("articles")
    if not articles:
        missing.append("articles")
    elif not articles.get("def"):
        missing.append("articles.def")

    return not missing, missing
