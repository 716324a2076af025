"""Suffix rule tables for locale-specific word derivation.

Each table is an ordered list of suffix rewrites; the first rule whose suffix
matches (case-insensitively) wins. When nothing matches, a trailing ``e`` is
replaced by ``e_suffix``, otherwise ``default_suffix`` is appended.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class SuffixRule:
    suffix: str
    replacement: str

    def matches(self, word: str) -> bool:
        return word.lower().endswith(self.suffix.lower())

    def apply(self, word: str) -> str:
        return word[: len(word) - len(self.suffix)] + self.replacement


@dataclass(frozen=True)
class SuffixRuleTable:
    rules: tuple[SuffixRule, ...]
    default_suffix: str
    e_suffix: str

    def apply(self, word: str) -> str:
        for rule in self.rules:
            if rule.matches(word):
                return rule.apply(word)
        if word[-1:].lower() == "e":
            return word[:-1] + self.e_suffix
        return word + self.default_suffix


def _table(pairs: list[tuple[str, str]], default_suffix: str, e_suffix: str):
    return SuffixRuleTable(
        rules=tuple(SuffixRule(s, r) for s, r in pairs),
        default_suffix=default_suffix,
        e_suffix=e_suffix,
    )


# =============================================================================
# Demonyms
# =============================================================================

GERMAN_DEMONYMS = _table(
    [
        ("ingen", "inger"),
        ("ing", "inger"),
        ("au", "auer"),
        ("ach", "acher"),
        ("heim", "heimer"),
        ("stein", "steiner"),
        ("burg", "burger"),
        ("dorf", "dorfer"),
        ("feld", "felder"),
        ("furt", "furter"),
        ("thal", "taler"),
        ("tal", "taler"),
        ("wald", "walder"),
        ("hagen", "hagener"),
        ("hausen", "hausener"),
        ("kirchen", "kirchner"),
        ("bach", "bacher"),
        ("bruch", "brucher"),
        ("born", "borner"),
        ("see", "seer"),
        ("zell", "zeller"),
    ],
    default_suffix="er",
    e_suffix="er",
)

# "nia" is shadowed by "ia"; first match wins.
ENGLISH_DEMONYMS = _table(
    [
        ("land", "lander"),
        ("ia", "ian"),
        ("nia", "nian"),
        ("a", "an"),
        ("y", "ian"),
        ("o", "an"),
        ("us", "an"),
        ("burg", "burger"),
        ("burgh", "burgher"),
        ("ton", "tonian"),
        ("ham", "hamite"),
        ("ville", "villian"),
        ("ford", "fordian"),
        ("shire", "shirian"),
        ("pool", "pudlian"),
        ("mouth", "mouthian"),
        ("port", "portian"),
        ("dale", "dalian"),
        ("wood", "woodian"),
        ("field", "fieldian"),
        ("bridge", "bridgean"),
        ("castle", "castlian"),
        ("haven", "havener"),
        ("wick", "wicker"),
        ("worth", "worthian"),
    ],
    default_suffix="ian",
    e_suffix="an",
)

DEMONYM_TABLES: dict[str, SuffixRuleTable] = {
    "de": GERMAN_DEMONYMS,
    "en": ENGLISH_DEMONYMS,
}


# =============================================================================
# Genitive / possessive
# =============================================================================

GERMAN_SIBILANT_ENDING = re.compile(r"(?:[sßxz]|tz)$", re.IGNORECASE)
ENGLISH_S_ENDING = re.compile(r"s$", re.IGNORECASE)


# =============================================================================
# Title case
# =============================================================================

ENGLISH_PARTICLES = frozenset(
    {"a", "an", "and", "at", "by", "for", "in", "of", "on", "or", "the", "to", "with"}
)
GERMAN_PARTICLES = frozenset(
    {
        "am", "an", "auf", "bei", "das", "dem", "den", "der", "des", "die",
        "im", "in", "und", "vom", "von", "zu", "zum", "zur",
    }
)
TITLE_PARTICLES = ENGLISH_PARTICLES | GERMAN_PARTICLES

UMLAUT_MAP = {
    "ä": "ae",
    "Ä": "Ae",
    "ö": "oe",
    "Ö": "Oe",
    "ü": "ue",
    "Ü": "Ue",
    "ß": "ss",
}
