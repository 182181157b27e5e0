"""String helpers used when building G-code text and file names."""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

STR_NOT_FOUND = -1
REC_SEP = "\v"
FIELD_SEP = "\t"

_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _strtod(s: str) -> float:
    """Parse the leading number of ``s``; 0.0 when there is none."""
    match = _FLOAT_PREFIX.match(s)
    return float(match.group()) if match else 0.0


def leftstr(s: str, n: int) -> str:
    """The first ``n`` characters of ``s``."""
    return s[: max(n, 0)]


def rightstr(s: str, n: int) -> str:
    """The last ``n`` characters of ``s``."""
    if n <= 0:
        return ""
    return s[max(len(s) - n, 0):]


def ltrim(s: str) -> str:
    """Remove leading spaces."""
    return s.lstrip(" ")


def rtrim(s: str) -> str:
    """Remove trailing spaces."""
    return s.rstrip(" ")


def trim(s: str) -> str:
    """Remove leading and trailing spaces."""
    return ltrim(rtrim(s))


def remove_last_slash(s: str) -> str:
    """Drop one trailing slash, if present."""
    return s[:-1] if s.endswith("/") else s


def remove_last_dir(s: str) -> str:
    """Everything before the last slash; empty when there is no slash."""
    pos = s.rfind("/")
    return s[:pos] if pos != -1 else ""


def key_value_record(key: str, value: str) -> str:
    """One record of a replacement table for :func:`substitute`."""
    return key + FIELD_SEP + value + REC_SEP


def _parse_replacements(replacements: str) -> list[tuple[str, str]]:
    records = replacements.split(REC_SEP)[:-1]
    pairs = []
    for number, record in enumerate(records, start=1):
        fields = record.split(FIELD_SEP)
        if len(fields) != 2:
            raise ValueError(
                f"replacement record {number} has {len(fields)} fields: {record!r}"
            )
        if not fields[0]:
            raise ValueError(f"replacement record {number} has an empty key")
        pairs.append((fields[0], fields[1]))
    return pairs


def substitute(s: str, replacements: str) -> str:
    """Replace every key of the record table ``replacements`` found in ``s``."""
    pairs = _parse_replacements(replacements)
    changed = True
    while changed:
        changed = False
        for key, value in pairs:
            pos = s.find(key)
            if pos != STR_NOT_FOUND:
                s = s[:pos] + value + s[pos + len(key):]
                changed = True
                break
    return s


def strhas(s: str, chars: str) -> int:
    """Position in ``s`` of the first of ``chars`` (tried in order) found, or -1."""
    for c in chars:
        pos = s.find(c)
        if pos != STR_NOT_FOUND:
            return pos
    return STR_NOT_FOUND


def stronlyhas(s: str, chars: str) -> bool:
    """True when every character of ``s`` is one of ``chars``."""
    return all(c in chars for c in s)


def strcnt(s: str, c: str) -> int:
    """How many times ``c`` occurs in ``s``."""
    return s.count(c)


def get_value(s: str, key: str) -> str:
    """Value of a ``key = value`` line in ``s``, or an empty string."""
    pos = s.find(key)
    if pos == STR_NOT_FOUND:
        return ""
    nl_pos = s.find("\n", pos)
    assignment = s[pos:] if nl_pos == -1 else s[pos:nl_pos]
    tokens = assignment.split("=")
    found_key = trim(tokens[0])
    found_value = trim(tokens[1]) if len(tokens) > 1 else ""
    return found_value if found_key == key else ""


def get_value_from_file(path: str | Path, key: str) -> str:
    """Value of a ``key = value`` line in the file at ``path``."""
    return get_value(Path(path).read_text(), key)


def elided_path(path: str, width: int) -> str:
    """Shorten ``path`` to a ``...`` prefix and its trailing directories."""
    keep_pos = -1
    end = len(path)
    while True:
        pos = path.rfind("/", 0, end)
        if pos == -1:
            break
        keep_pos = pos
        if len(path) - keep_pos > width:
            break
        end = pos
    if keep_pos <= 0:
        return path
    return "..." + path[keep_pos:]


def fmt(template: str, *args: object) -> str:
    """printf-style formatting that uses only as many arguments as ``%`` signs.

    A template with no ``%`` at all formats to an empty string.
    """
    count = template.count("%")
    if count < 1:
        return ""
    return template % tuple(args[:count])


def lookup(records: Iterable[str], key: str, field: int | str, separator: str = FIELD_SEP) -> str:
    """Find the record whose first field is ``key`` and return one of its fields.

    ``field`` is either a column index or a column name taken from the
    first record, which is then a header. Returns "" when nothing matches.
    """
    rows = list(records)
    if isinstance(field, str):
        if not rows:
            return ""
        header = rows[0].split(separator)
        if field not in header:
            return ""
        index = header.index(field)
        rows = rows[1:]
    else:
        index = field
    for row in rows:
        fields = row.split(separator)
        if fields[0] == key:
            return fields[index] if index < len(fields) else ""
    return ""


def real_to_string(n: float) -> str:
    """Format a real number with ``%f``."""
    return "%f" % n


def int_to_string(n: int) -> str:
    """Format an integer with ``%d``."""
    return "%d" % n