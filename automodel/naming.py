"""Name normalization for synthesized entity types and their attributes.

Column names become lower snake case lookup names; table names become
singular, title-cased entity names. Both are plain string functions.
"""

import re

from automodel.models import ColumnDescriptor, ColumnType

_IRREGULAR_PLURALS = {
    "person": "people",
    "man": "men",
    "woman": "women",
    "child": "children",
    "mouse": "mice",
    "goose": "geese",
}
_IRREGULAR_SINGULARS = {plural: singular for singular, plural in _IRREGULAR_PLURALS.items()}

# Words ending in 's' that are already singular
_SINGULAR_ENDINGS = ("ss", "us", "is")

# Plurals of words ending in "s" (buses, statuses, aliases, viruses)
_S_STEM_PLURAL_ENDINGS = ("buses", "tuses", "iases", "ruses")


def underscore(name: str) -> str:
    """Convert a raw identifier to lower snake case.

    Examples:
        UserId     -> user_id
        IsActive   -> is_active
        HTMLParser -> html_parser
        order-items -> order_items
    """
    word = re.sub(r"([A-Z\d]+)([A-Z][a-z])", r"\1_\2", name)
    word = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", word)
    word = re.sub(r"[^\w]+", "_", word)
    return word.lower()


def singularize(word: str) -> str:
    """Best-effort English singular of a lower-case word."""
    if word in _IRREGULAR_SINGULARS:
        return _IRREGULAR_SINGULARS[word]
    if len(word) > 3 and word.endswith("ies"):
        return word[:-3] + "y"
    if word.endswith(("sses", "shes", "ches", "xes", "zes")):
        return word[:-2]
    if word.endswith(_S_STEM_PLURAL_ENDINGS):
        return word[:-2]
    if word.endswith(_SINGULAR_ENDINGS):
        return word
    if len(word) > 1 and word.endswith("s"):
        return word[:-1]
    return word


def pluralize(word: str) -> str:
    """Best-effort English plural, preserving the case of the stem."""
    lower = word.lower()
    if lower in _IRREGULAR_PLURALS:
        return word[0] + _IRREGULAR_PLURALS[lower][1:] if word else word
    if len(word) > 1 and lower.endswith("y") and lower[-2] not in "aeiou":
        return word[:-1] + ("IES" if word.isupper() else "ies")
    if lower.endswith(("s", "x", "z", "ch", "sh")):
        return word + ("ES" if word.isupper() else "es")
    return word + ("S" if word.isupper() else "s")


def camelize(name: str) -> str:
    """Convert snake case to title case: order_item -> OrderItem."""
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


def normalize_column_name(col: ColumnDescriptor) -> str:
    """Return the normalized lookup name of a column.

    Boolean columns additionally lose a leading 'is_' (IsActive -> active).
    Date and time columns get no special treatment.
    """
    name = underscore(col.name)
    if col.type == ColumnType.BOOLEAN:
        name = re.sub(r"^is_", "", name)
    return name


def normalize_table_name(base_name: str) -> str:
    """Return the entity name for a table: order_items -> OrderItem, Orders -> Order."""
    words = underscore(base_name).split("_")
    words[-1] = singularize(words[-1])
    entity_name = camelize("_".join(words))

    if not entity_name:
        return "_"
    if entity_name[0].isdigit():
        return f"_{entity_name}"
    return entity_name
