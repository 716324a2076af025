"""Tests for localized text, PP phrases and title gender forms."""

import pytest

from nomina.core.errors import MissingTextError
from nomina.core.models import CatalogItem
from nomina.grammar import (
    adapt_title_to_gender,
    apply_contractions,
    build_pp_phrase,
    get_localized_text,
    validate_lang_rules,
)

DE_RULES = {
    "de": {
        "prepCase": {"an": "dat", "in": "dat", "durch": "akk"},
        "articles": {
            "def": {
                "dat": {"m": "dem", "f": "der", "n": "dem"},
                "akk": {"m": "den", "f": "die"},
            }
        },
        "contractions": {"an dem": "am", "in dem": "im"},
        "defaults": {"articleWhenNone": "omit", "defaultCase": "nom"},
        "titles": {
            "graf": {
                "forms": {
                    "m": {"nom": "Graf", "gen": "Grafen"},
                    "f": {"nom": "Gräfin", "plain": "Gräfin"},
                }
            },
            "herzog": {"forms": {"n": {"plain": "Herzogtum"}}},
        },
    }
}


def _place(text, gender=None, article="def"):
    gram = {"de": {"gender": gender, "article": article}} if gender else {}
    return CatalogItem(text={"de": text}, gram=gram)


class TestLocalizedText:
    """Tests for locale map resolution."""

    def test_plain_string(self):
        assert get_localized_text("Ulm", "de") == "Ulm"

    def test_requested_locale(self):
        assert get_localized_text({"de": "Köln", "en": "Cologne"}, "en") == "Cologne"

    def test_fallback_locale(self):
        assert get_localized_text({"de": "Köln", "fr": "Cologne"}, "en", "fr") == (
            "Cologne"
        )

    def test_first_available(self):
        assert get_localized_text({"de": "Köln"}, "en") == "Köln"

    def test_empty_map_raises(self):
        with pytest.raises(MissingTextError):
            get_localized_text({}, "de")


class TestPPPhrase:
    """Tests for preposition phrases."""

    def test_contraction(self):
        assert build_pp_phrase(_place("Main", "m"), "de", "an", DE_RULES) == "am Main"

    def test_feminine_article(self):
        assert build_pp_phrase(_place("Donau", "f"), "de", "an", DE_RULES) == (
            "an der Donau"
        )

    def test_no_preposition(self):
        assert build_pp_phrase(_place("Main", "m"), "de", None, DE_RULES) == "Main"

    def test_no_rules_for_locale(self):
        assert build_pp_phrase(_place("Main", "m"), "de", "on", {}) == "on Main"

    def test_unknown_preposition(self):
        assert build_pp_phrase(_place("Main", "m"), "de", "bei", DE_RULES) == (
            "bei Main"
        )

    def test_item_without_gram_omits_article(self):
        assert build_pp_phrase(_place("Berlin"), "de", "in", DE_RULES) == "in Berlin"

    def test_missing_gender_falls_back(self):
        item = CatalogItem(text={"de": "Harz"}, gram={"de": {"article": "def"}})
        assert build_pp_phrase(item, "de", "in", DE_RULES) == "in Harz"

    def test_missing_article_for_case(self):
        item = _place("Gebirge", "n")
        assert build_pp_phrase(item, "de", "durch", DE_RULES) == "durch Gebirge"

    def test_contraction_applies_once(self):
        assert apply_contractions("an dem an dem", {"an dem": "am"}) == "am an dem"


class TestTitleGender:
    """Tests for gender-adapted title forms."""

    def test_matching_gender(self):
        title = CatalogItem(text={"de": "Graf"}, attrs={"titleId": "graf"})
        assert adapt_title_to_gender(title, "f", DE_RULES, "de") == "Gräfin"

    def test_requested_case(self):
        title = CatalogItem(text={"de": "Graf"}, attrs={"titleId": "graf"})
        assert adapt_title_to_gender(title, "m", DE_RULES, "de", case="gen") == (
            "Grafen"
        )

    def test_missing_case_uses_default_case(self):
        title = CatalogItem(text={"de": "Graf"}, attrs={"titleId": "graf"})
        assert adapt_title_to_gender(title, "f", DE_RULES, "de", case="dat") == (
            "Gräfin"
        )

    def test_missing_gender_uses_base_gender(self):
        title = CatalogItem(text={"de": "Graf"}, attrs={"titleId": "graf"})
        assert adapt_title_to_gender(title, "n", DE_RULES, "de") == "Graf"

    def test_plain_form(self):
        title = CatalogItem(
            text={"de": "Herzog"}, attrs={"titleId": "herzog", "baseGender": "n"}
        )
        assert adapt_title_to_gender(title, "n", DE_RULES, "de") == "Herzogtum"

    def test_no_title_id(self):
        title = CatalogItem(text={"de": "Ritter"})
        assert adapt_title_to_gender(title, "f", DE_RULES, "de") == "Ritter"

    def test_unknown_title(self):
        title = CatalogItem(text={"de": "Baron"}, attrs={"titleId": "baron"})
        assert adapt_title_to_gender(title, "f", DE_RULES, "de") == "Baron"


class TestValidateLangRules:
    """Tests for language rule validation."""

    def test_complete_rules(self):
        assert validate_lang_rules(DE_RULES, "de") == (True, [])

    def test_missing_locale(self):
        assert validate_lang_rules(DE_RULES, "en") == (False, ["langRules"])

    def test_missing_definite_articles(self):
        rules = {"en": {"prepCase": {"in": "dat"}, "articles": {"indef": {}}}}
        assert validate_lang_rules(rules, "en") == (False, ["articles.def"])
