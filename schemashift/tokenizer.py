"""Quote- and depth-aware text scanning for DDL.

Every helper here treats the following as opaque regions that are never
split or rewritten: single-quoted string literals (doubled-quote escapes,
and backslash escapes unless backslash_escapes is off), double-quoted and
backtick identifiers, and bracketed SQL Server identifiers.
"""

import re

_CLOSERS = {"'": "'", '"': '"', "`": "`", "[": "]"}

_DELIMITER_LINE = re.compile(r"^\s*DELIMITER\s+(\S+)\s*$", re.IGNORECASE)


def skip_quoted(text: str, start: int, backslash_escapes: bool = True) -> int:
    """Return the index just past the quoted region opening at `start`.

    If `text[start]` does not open a quoted region, `start` is returned.
    An unterminated region runs to the end of the text. Backslash escapes
    inside single quotes are a MySQL extension; pass backslash_escapes=False
    for standard strings.
    """
    opener = text[start]
    if opener not in _CLOSERS:
        return start
    closer = _CLOSERS[opener]
    i = start + 1
    length = len(text)
    while i < length:
        char = text[i]
        if backslash_escapes and opener == "'" and char == "\\":
            i += 2
            continue
        if char == closer:
            if i + 1 < length and text[i + 1] == closer and opener != "[":
                i += 2
                continue
            return i + 1
        i += 1
    return length


def find_closing_paren(
    text: str, open_index: int, backslash_escapes: bool = True
) -> int:
    """Find the parenthesis matching the one at `open_index`.

    Returns:
        Index of the matching ')' or -1 if the text is unbalanced
    """
    depth = 0
    i = open_index
    length = len(text)
    while i < length:
        char = text[i]
        if char in _CLOSERS:
            i = skip_quoted(text, i, backslash_escapes)
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1


def split_top_level(
    text: str, separator: str = ",", backslash_escapes: bool = True
) -> list[str]:
    """Split on `separator` at parenthesis depth 0 and outside quotes.

    Parts are stripped; empty parts are dropped.
    """
    parts: list[str] = []
    depth = 0
    start = 0
    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        if char in _CLOSERS:
            i = skip_quoted(text, i, backslash_escapes)
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == separator and depth == 0:
            parts.append(text[start:i])
            start = i + 1
        i += 1
    parts.append(text[start:])
    return [part.strip() for part in parts if part.strip()]


def collapse_whitespace(text: str, backslash_escapes: bool = True) -> str:
    """Collapse whitespace runs to single spaces outside quoted regions."""
    result: list[str] = []
    i = 0
    length = len(text)
    pending_space = False
    while i < length:
        char = text[i]
        if char.isspace():
            pending_space = True
            i += 1
            continue
        if pending_space and result:
            result.append(" ")
        pending_space = False
        if char in _CLOSERS:
            end = skip_quoted(text, i, backslash_escapes)
            result.append(text[i:end])
            i = end
            continue
        result.append(char)
        i += 1
    return "".join(result)


def strip_comments(text: str, backslash_escapes: bool = True) -> str:
    """Remove `-- ...` line comments and `/* ... */` blocks outside quotes."""
    result: list[str] = []
    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        if char in _CLOSERS:
            end = skip_quoted(text, i, backslash_escapes)
            result.append(text[i:end])
            i = end
            continue
        if text.startswith("--", i):
            newline = text.find("\n", i)
            if newline == -1:
                break
            i = newline
            continue
        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end == -1:
                break
            # keep tokens on either side apart
            result.append(" ")
            i = end + 2
            continue
        result.append(char)
        i += 1
    return "".join(result)


def split_statements(sql: str, backslash_escapes: bool = True) -> list[str]:
    """Split a SQL dump into statements.

    Statements end with the current delimiter (initially ';') outside
    quoted regions. `DELIMITER xx` lines switch the delimiter, as in
    mysql client dumps. Comments are removed and the returned statements
    carry no trailing delimiter.
    """
    statements: list[str] = []
    delimiter = ";"
    buffer: list[str] = []

    for line in strip_comments(sql, backslash_escapes).splitlines():
        match = _DELIMITER_LINE.match(line)
        if match:
            _flush(buffer, statements)
            delimiter = match.group(1)
            continue
        buffer.append(line)
        text = "\n".join(buffer)
        pieces = _split_on_delimiter(text, delimiter, backslash_escapes)
        if len(pieces) > 1:
            statements.extend(piece for piece in pieces[:-1] if piece.strip())
            buffer = [pieces[-1]] if pieces[-1].strip() else []

    _flush(buffer, statements)
    return [statement.strip() for statement in statements]


def _flush(buffer: list[str], statements: list[str]) -> None:
    text = "\n".join(buffer).strip()
    if text:
        statements.append(text)
    buffer.clear()


def _split_on_delimiter(
    text: str, delimiter: str, backslash_escapes: bool
) -> list[str]:
    pieces: list[str] = []
    start = 0
    i = 0
    length = len(text)
    while i < length:
        if text[i] in _CLOSERS:
            i = skip_quoted(text, i, backslash_escapes)
            continue
        if text.startswith(delimiter, i):
            pieces.append(text[start:i])
            i += len(delimiter)
            start = i
            continue
        i += 1
    pieces.append(text[start:])
    return pieces
