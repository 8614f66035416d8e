"""Identifier quoting per dialect."""

import re

from schemashift.types import Dialect

# (open, close) quote characters used when rendering identifiers
QUOTE_CHARS: dict[Dialect, tuple[str, str]] = {
    Dialect.MYSQL: ("`", "`"),
    Dialect.MARIADB: ("`", "`"),
    Dialect.POSTGRESQL: ('"', '"'),
    Dialect.SQLITE: ('"', '"'),
    Dialect.SQLSERVER: ("[", "]"),
}

# Quote styles accepted when reading DDL written for a dialect
ACCEPTED_QUOTES: dict[Dialect, tuple[tuple[str, str], ...]] = {
    Dialect.MYSQL: (("`", "`"),),
    Dialect.MARIADB: (("`", "`"),),
    Dialect.POSTGRESQL: (('"', '"'),),
    Dialect.SQLITE: (('"', '"'), ("`", "`"), ("[", "]")),
    Dialect.SQLSERVER: (("[", "]"), ('"', '"')),
}

BARE_IDENTIFIER = r"[A-Za-z_#@][\w$#@]*"

_ALL_QUOTE_CHARS = "`\"[]"


def quote_identifier(name: str, dialect: Dialect) -> str:
    """Quote a single identifier for a dialect.

    Existing quote characters are stripped first, so quoting is idempotent.
    """
    open_char, close_char = QUOTE_CHARS[dialect]
    return f"{open_char}{name.strip(_ALL_QUOTE_CHARS)}{close_char}"


def quote_identifiers(names: list[str], dialect: Dialect) -> str:
    """Quote and comma-join a column list."""
    return ", ".join(quote_identifier(name, dialect) for name in names)


def unquote_identifier(token: str) -> str:
    """Remove one level of identifier quoting, if present."""
    token = token.strip()
    if len(token) >= 2:
        for open_char, close_char in (("`", "`"), ('"', '"'), ("[", "]")):
            if token[0] == open_char and token[-1] == close_char:
                return token[1:-1]
    return token


def identifier_pattern(dialect: Dialect) -> str:
    """Regex alternative matching one identifier as written for a dialect."""
    alternatives = []
    for open_char, close_char in ACCEPTED_QUOTES[dialect]:
        alternatives.append(
            f"{re.escape(open_char)}[^{re.escape(close_char)}]+{re.escape(close_char)}"
        )
    alternatives.append(BARE_IDENTIFIER)
    return "(?:" + "|".join(alternatives) + ")"


def qualified_name_pattern(dialect: Dialect) -> str:
    """Regex matching an optionally schema-qualified identifier."""
    ident = identifier_pattern(dialect)
    return rf"{ident}(?:\s*\.\s*{ident})*"


def last_name_part(qualified: str, dialect: Dialect) -> str:
    """Reduce `schema.table` to the bare, unquoted table name."""
    parts = re.findall(identifier_pattern(dialect), qualified)
    if not parts:
        return unquote_identifier(qualified)
    return unquote_identifier(parts[-1])


def requote_identifiers(text: str, source: Dialect, target: Dialect) -> str:
    """Rewrite quoted identifiers in a verbatim clause for another dialect.

    String literals in single quotes are copied unchanged; bare identifiers
    are left bare.
    """
    openers = {open_char: close_char for open_char, close_char in ACCEPTED_QUOTES[source]}
    result: list[str] = []
    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        if char == "'":
            end = _literal_end(text, i)
            result.append(text[i:end])
            i = end
            continue
        if char in openers:
            close_at = text.find(openers[char], i + 1)
            if close_at == -1:
                result.append(text[i:])
                break
            result.append(quote_identifier(text[i + 1 : close_at], target))
            i = close_at + 1
            continue
        result.append(char)
        i += 1
    return "".join(result)


def _literal_end(text: str, start: int) -> int:
    """Index just past the single-quoted literal starting at `start`."""
    i = start + 1
    while i < len(text):
        if text[i] == "\\":
            i += 2
            continue
        if text[i] == "'":
            if i + 1 < len(text) and text[i + 1] == "'":
                i += 2
                continue
            return i + 1
        i += 1
    return len(text)
