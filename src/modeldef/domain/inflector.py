"""English inflection rules used to derive relationship names from tables.

Relationship mirror checks guess the attribute name a related model should
declare (``customers`` -> ``customer``) and the class a table maps to
(``order_items`` -> ``OrderItem``). All of that guessing lives here, as
explicit rule tables, so it can be tested in isolation.

Rule order:
    1. Uncountable words are returned unchanged.
    2. Irregular words are swapped from the table below.
    3. Suffix rules are tried top to bottom; the first match wins.

Only the last underscore-separated segment of a name is inflected, so
``order_items`` singularizes to ``order_item``.
"""

from __future__ import annotations

import re

__all__ = ["camelize", "classify", "pluralize", "singularize"]

UNCOUNTABLE = frozenset(
    {
        "equipment",
        "information",
        "rice",
        "money",
        "species",
        "series",
        "fish",
        "sheep",
        "jeans",
        "police",
        "news",
        "data",
        "metadata",
    }
)

#: singular -> plural
IRREGULAR = {
    "person": "people",
    "man": "men",
    "woman": "women",
    "child": "children",
    "sex": "sexes",
    "move": "moves",
    "zombie": "zombies",
    "mouse": "mice",
    "goose": "geese",
    "tooth": "teeth",
    "foot": "feet",
}

_IRREGULAR_SINGULAR = {plural: singular for singular, plural in IRREGULAR.items()}

_PLURAL_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(pattern, re.IGNORECASE), replacement)
    for pattern, replacement in (
        (r"(quiz)$", r"\1zes"),
        (r"^(oxen)$", r"\1"),
        (r"^(ox)$", r"\1en"),
        (r"^(m|l)ice$", r"\1ice"),
        (r"(matr|vert|ind)(?:ix|ex)$", r"\1ices"),
        (r"(x|ch|ss|sh)$", r"\1es"),
        (r"([^aeiouy]|qu)y$", r"\1ies"),
        (r"(hive)$", r"\1s"),
        (r"(?:([^f])fe|([lr])f)$", r"\1\2ves"),
        (r"sis$", "ses"),
        (r"([ti])a$", r"\1a"),
        (r"([ti])um$", r"\1a"),
        (r"(buffal|tomat)o$", r"\1oes"),
        (r"(bu)s$", r"\1ses"),
        (r"(alias|status)$", r"\1es"),
        (r"(octop|vir)i$", r"\1i"),
        (r"(octop|vir)us$", r"\1i"),
        (r"^(ax|test)is$", r"\1es"),
        (r"s$", "s"),
        (r"$", "s"),
    )
]

_SINGULAR_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(pattern, re.IGNORECASE), replacement)
    for pattern, replacement in (
        (r"(database)s$", r"\1"),
        (r"(quiz)zes$", r"\1"),
        (r"(matr)ices$", r"\1ix"),
        (r"(vert|ind)ices$", r"\1ex"),
        (r"^(ox)en", r"\1"),
        (r"(alias|status)(es)?$", r"\1"),
        (r"(octop|vir)(us|i)$", r"\1us"),
        (r"^(a)x[ie]s$", r"\1xis"),
        (r"(cris|test)(is|es)$", r"\1is"),
        (r"(shoe)s$", r"\1"),
        (r"(o)es$", r"\1"),
        (r"(bus)(es)?$", r"\1"),
        (r"^(m|l)ice$", r"\1ouse"),
        (r"(x|ch|ss|sh)es$", r"\1"),
        (r"(m)ovies$", r"\1ovie"),
        (r"([^aeiouy]|qu)ies$", r"\1y"),
        (r"([lr])ves$", r"\1f"),
        (r"(tive)s$", r"\1"),
        (r"(hive)s$", r"\1"),
        (r"([^f])ves$", r"\1fe"),
        (r"(^analy)(sis|ses)$", r"\1sis"),
        (
            r"((a)naly|(b)a|(d)iagno|(p)arenthe|(p)rogno|(s)ynop|(t)he)(sis|ses)$",
            r"\1sis",
        ),
        (r"([ti])a$", r"\1um"),
        (r"(ss)$", r"\1"),
        (r"s$", ""),
    )
]


def _split_last(word: str) -> tuple[str, str]:
    head, sep, last = word.rpartition("_")
    return head + sep, last


def _match_case(source: str, replacement: str) -> str:
    if source[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def _inflect(
    word: str,
    irregular: dict[str, str],
    rules: list[tuple[re.Pattern[str], str]],
) -> str:
    prefix, last = _split_last(word)
    if not last:
        return word
    lowered = last.lower()
    if lowered in UNCOUNTABLE:
        return word
    if lowered in irregular:
        return prefix + _match_case(last, irregular[lowered])
    for pattern, replacement in rules:
        if pattern.search(last):
            return prefix + pattern.sub(replacement, last, count=1)
    return word


def pluralize(word: str) -> str:
    """Return the plural form of ``word`` (``"category"`` -> ``"categories"``)."""
    if _split_last(word)[1].lower() in _IRREGULAR_SINGULAR:
        return word
    return _inflect(word, IRREGULAR, _PLURAL_RULES)


def singularize(word: str) -> str:
    """Return the singular form of ``word`` (``"addresses"`` -> ``"address"``)."""
    if _split_last(word)[1].lower() in IRREGULAR:
        return word
    return _inflect(word, _IRREGULAR_SINGULAR, _SINGULAR_RULES)


def camelize(word: str) -> str:
    """Convert ``snake_case`` to ``CamelCase`` (``"order_item"`` -> ``"OrderItem"``)."""
    return "".join(part[:1].upper() + part[1:] for part in word.split("_") if part)


def classify(table_name: str) -> str:
    """Guess the class name a table maps to.

    Any schema qualifier is dropped, the last segment is singularized and
    the result camelized.

    Args:
        table_name: A table name such as ``"order_items"`` or ``"public.people"``.

    Returns:
        str: The conventional class name, e.g. ``"OrderItem"`` or ``"Person"``.
    """
    return camelize(singularize(table_name.rsplit(".", 1)[-1]))
