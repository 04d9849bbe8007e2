"""
Query pipeline helpers for flat-file repositories.

Every function here is list-in / list-out and never mutates its input:
filters and sorts build new lists, preserving the order of the list
they were given.

Recognized query parameters:
    sort      name | title | category, optionally suffixed with ",desc"
    Name      wildcard pattern matched against the model's name field
    Category  wildcard pattern matched against the Category field
    Title     must be single-valued, not used for filtering
"""

from __future__ import annotations

import re
import locale
import unicodedata
from functools import cmp_to_key
from typing import Any, Mapping

from flatstore.core.interfaces.storage import Record
from flatstore.repositories.results import Err, QueryError

# Parameter name -> example of the rejected multi-value form
SINGLE_VALUED_PARAMS: dict[str, str] = {
    "sort": "...?sort=Name&sort=Category",
    "Name": "...?Name=*a&Name=b",
    "Category": "...?Category=ea&Category=*z*",
    "Title": "...?Title=e&Title=*zqw*",
}

UNKNOWN_SORT_MESSAGE = "Error: the parameter 'sort' must to include a name, a title or a category."

CATEGORY_FIELD = "Category"


def is_multi_valued(value: Any) -> bool:
    """A parameter is multi-valued when it arrives as a sequence of values."""
    return isinstance(value, (list, tuple))


def check_single_valued(params: Mapping[str, Any]) -> Err | None:
    """Return an error for the first single-valued parameter given more than once."""
    for name, example in SINGLE_VALUED_PARAMS.items():
        if is_multi_valued(params.get(name)):
            return Err(
                f"Parameter '{name}' can't be an array. For example: {example}",
                QueryError.MULTI_VALUED,
            )
    return None


def wildcard_match(value: Any, pattern: str) -> bool:
    """
    Case-insensitive, fully anchored match where ``*`` is any run of characters.

    Every other character matches itself literally. Missing values never match.
    """
    if value is None:
        return False
    regex = ".*".join(re.escape(part) for part in str(pattern).lower().split("*"))
    return re.fullmatch(regex, str(value).lower(), flags=re.DOTALL) is not None


def set_collation_locale(name: str = "") -> bool:
    """
    Select the collation used for string sorts (``""`` takes it from the environment).

    Returns False when the locale is not available; the current one is kept.
    """
    try:
        locale.setlocale(locale.LC_COLLATE, name)
    except locale.Error:
        return False
    return True


def _is_byte_collation() -> bool:
    current = locale.setlocale(locale.LC_COLLATE) or "C"
    return current.split(".")[0] in ("C", "POSIX")


def collation_key(text: str) -> Any:
    """
    Sort key for a string under the current collation.

    The C/POSIX locale orders by code point, so there the key ignores
    accents first, then case, and keeps the raw text as the last tie-breaker.
    """
    if not _is_byte_collation():
        return locale.strxfrm(text)
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), text.casefold(), text)


def _compare_text(x: str, y: str) -> int:
    kx, ky = collation_key(x), collation_key(y)
    return (kx > ky) - (kx < ky)


def compare_values(x: Any, y: Any) -> int:
    """
    Three-way comparison picked by the runtime type of the values.

    Strings use locale-aware collation, everything else its natural
    ordering. Missing values compare after present ones.
    """
    if x is None or y is None:
        return (x is None) - (y is None)
    if isinstance(x, str):
        return _compare_text(x, str(y))
    try:
        return (x > y) - (x < y)
    except TypeError:
        return _compare_text(str(x), str(y))


def resolve_sort(sort: Any, name_field: str) -> tuple[str, bool] | None:
    """
    Translate a ``sort`` parameter into ``(field, descending)``.

    Returns None when the value does not name a sortable field.
    """
    key, sep, direction = str(sort).lower().partition(",")
    if sep and direction != "desc":
        return None

    if key in ("name", "title"):
        field = name_field
    elif key == "category":
        field = CATEGORY_FIELD
    else:
        return None
    return field, bool(sep)


def sort_records(records: list[Record], field: str, descending: bool = False) -> list[Record]:
    """
    Stable sort on one field.

    Records without the field keep their relative order and always come
    last, whichever direction is requested.
    """
    present = [record for record in records if record.get(field) is not None]
    missing = [record for record in records if record.get(field) is None]
    return sorted(
        present,
        key=cmp_to_key(lambda a, b: compare_values(a.get(field), b.get(field))),
        reverse=descending,
    ) + missing


def filter_records(records: list[Record], field: str, pattern: str) -> list[Record]:
    """Keep records whose ``field`` matches the wildcard ``pattern``."""
    return [record for record in records if wildcard_match(record.get(field), pattern)]
