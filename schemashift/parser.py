"""CREATE TABLE parser producing a dialect-neutral Table."""

import re

from schemashift.catalog import TypeCatalog, split_type
from schemashift.exceptions import ParseError
from schemashift.log import get_logger
from schemashift.quoting import (
    identifier_pattern,
    last_name_part,
    qualified_name_pattern,
    quote_identifier,
    unquote_identifier,
)
from schemashift.schema import Column, IndexDefinition, Table, UniqueConstraint
from schemashift.tokenizer import (
    collapse_whitespace,
    find_closing_paren,
    skip_quoted,
    split_top_level,
    strip_comments,
)
from schemashift.types import Dialect, TypeFamily

logger = get_logger(__name__)

_ANY_CREATE_TABLE = re.compile(r"\bCREATE\b.*?\bTABLE\b", re.IGNORECASE | re.DOTALL)
_EXTRA_CLAUSE = re.compile(
    r"(?:CONSTRAINT|FOREIGN\s+KEY|CHECK|FULLTEXT|SPATIAL|EXCLUDE|PERIOD\s+FOR)\b",
    re.IGNORECASE,
)
# words that open a MySQL clause but are plain column names elsewhere
_AMBIGUOUS_LEAD = re.compile(
    r"(?:KEY|INDEX|FULLTEXT|SPATIAL|EXCLUDE|PERIOD)\b", re.IGNORECASE
)
_LITERAL_PREFIX = re.compile(r"[bBxXnNeE]'")
_WORD = re.compile(r"[^\s(),]+")
_CAST = re.compile(r"\s*::\s*")
_REFERENTIAL_ACTION = re.compile(
    r"\s+(?:ON\s+(?:DELETE|UPDATE)\s+"
    r"(?:CASCADE|RESTRICT|SET\s+NULL|SET\s+DEFAULT|NO\s+ACTION)"
    r"|MATCH\s+(?:FULL|PARTIAL|SIMPLE)"
    r"|(?:NOT\s+)?DEFERRABLE"
    r"|INITIALLY\s+(?:DEFERRED|IMMEDIATE))",
    re.IGNORECASE,
)


def _keyword(pattern: str) -> re.Pattern[str]:
    return re.compile(r"\s*(?:" + pattern + r")(?![\w$])", re.IGNORECASE)


_NOT_NULL = _keyword(r"NOT\s+NULL")
_NULL = _keyword(r"NULL")
_DEFAULT = _keyword(r"DEFAULT")
_PRIMARY_KEY = _keyword(r"PRIMARY\s+KEY(?:\s+(?:ASC|DESC))?(?:\s+(?:CLUSTERED|NONCLUSTERED))?")
_UNIQUE = _keyword(r"UNIQUE(?:\s+KEY)?(?:\s+(?:CLUSTERED|NONCLUSTERED))?")
_AUTO_INCREMENT = _keyword(r"AUTO_INCREMENT|AUTOINCREMENT")
_IDENTITY = re.compile(
    r"\s*IDENTITY(?![\w$])(?:\s*\(\s*-?\d+\s*,\s*-?\d+\s*\))?", re.IGNORECASE
)
_GENERATED_IDENTITY = re.compile(
    r"\s*GENERATED\s+(?:ALWAYS|BY\s+DEFAULT(?:\s+ON\s+NULL)?)\s+AS\s+IDENTITY",
    re.IGNORECASE,
)
_GENERATED_COLUMN = re.compile(r"\s*(?:GENERATED\s+ALWAYS\s+)?AS\s*(?=\()", re.IGNORECASE)
_ON_UPDATE = _keyword(r"ON\s+UPDATE")
_COMMENT = _keyword(r"COMMENT")
_CHARSET = re.compile(
    r"\s*(?:CHARACTER\s+SET|CHARSET|COLLATE)\s+[\w$\"'`]+", re.IGNORECASE
)
_MODIFIER = _keyword(r"UNSIGNED|SIGNED|ZEROFILL")
_CHECK = _keyword(r"CHECK")
_REFERENCES = _keyword(r"REFERENCES")
_STORAGE = _keyword(r"STORED|VIRTUAL|PERSISTENT")


class DdlParser:
    """Parser for a single CREATE TABLE statement.

    Identifiers are accepted bare or in the quoting style of the source
    dialect; anything else fails the header or column match.
    """

    def __init__(self, catalog: TypeCatalog | None = None) -> None:
        self.catalog = catalog or TypeCatalog()

    def parse(self, ddl: str, dialect: Dialect) -> Table:
        """Parse a CREATE TABLE statement.

        Args:
            ddl: Statement text, comments allowed
            dialect: Dialect the statement is written in

        Returns:
            Parsed table

        Raises:
            ParseError: If no CREATE TABLE (...) of the dialect is found
        """
        escapes = dialect.is_mysql_family
        text = collapse_whitespace(strip_comments(ddl, escapes), escapes)
        ident = identifier_pattern(dialect)
        header = re.compile(
            r"\bCREATE\s+(?:OR\s+REPLACE\s+)?(?:(?:GLOBAL|LOCAL)\s+)?"
            r"(?:TEMP(?:ORARY)?\s+|UNLOGGED\s+)?TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?"
            rf"(?P<name>{qualified_name_pattern(dialect)})\s*\(",
            re.IGNORECASE,
        )

        match = header.search(text)
        if match is None:
            found = _ANY_CREATE_TABLE.search(text)
            if found is None:
                raise ParseError("No CREATE TABLE statement found", text)
            raise ParseError(
                f"CREATE TABLE header does not match {dialect.value} identifier quoting",
                text[found.start() :],
            )

        open_index = match.end() - 1
        close_index = find_closing_paren(text, open_index, escapes)
        if close_index == -1:
            raise ParseError(
                "Unbalanced parentheses in CREATE TABLE body", text[open_index:]
            )

        table = Table(name=last_name_part(match.group("name"), dialect))
        clauses = split_top_level(
            text[open_index + 1 : close_index], backslash_escapes=escapes
        )
        if not clauses:
            raise ParseError("CREATE TABLE body is empty", text[match.start() :])

        primary_key: list[tuple[str, str]] = []
        uniques: list[tuple[UniqueConstraint, str]] = []
        indexes: list[tuple[IndexDefinition, str]] = []

        for clause in clauses:
            if self._parse_table_constraint(
                clause, dialect, ident, table, primary_key, uniques, indexes
            ):
                continue
            column, inline_clauses, inline_unique = self._parse_column(
                clause, dialect, ident
            )
            try:
                table.add_column(column)
            except ValueError as e:
                raise ParseError(str(e), clause) from e
            if column.is_primary_key:
                primary_key.append((column.name, clause))
            table.extra_clauses.extend(inline_clauses)
            if inline_unique:
                uniques.append((UniqueConstraint(columns=[column.name]), clause))

        for name, clause in primary_key:
            self._require_column(table, name, clause)
            table.add_primary_key(name)
        for constraint, clause in uniques:
            constraint.columns = [
                self._require_column(table, name, clause) for name in constraint.columns
            ]
            table.unique_constraints.append(constraint)
        for index, clause in indexes:
            index.columns = [
                self._require_column(table, name, clause) for name in index.columns
            ]
            table.indexes.append(index)

        logger.debug(
            f"Parsed table {table.name}: {len(table.columns)} columns, "
            f"primary key {table.primary_key}"
        )
        return table

    def _parse_table_constraint(
        self,
        clause: str,
        dialect: Dialect,
        ident: str,
        table: Table,
        primary_key: list[tuple[str, str]],
        uniques: list[tuple[UniqueConstraint, str]],
        indexes: list[tuple[IndexDefinition, str]],
    ) -> bool:
        if (
            not dialect.is_mysql_family
            and _AMBIGUOUS_LEAD.match(clause)
            and self._is_column(clause, dialect, ident)
        ):
            return False

        constraint_name = rf"(?:CONSTRAINT\s+(?P<cname>{ident})\s+)?"

        pk = re.match(
            constraint_name
            + r"PRIMARY\s+KEY\b(?:\s+(?:CLUSTERED|NONCLUSTERED))?\s*"
            + rf"(?:{ident}\s*)?(?=\()",
            clause,
            re.IGNORECASE,
        )
        if pk:
            for name in self._column_list(clause, pk.end(), dialect, ident):
                primary_key.append((name, clause))
            return True

        unique = re.match(
            constraint_name
            + r"UNIQUE\b(?:\s+(?:KEY|INDEX))?(?:\s+(?:CLUSTERED|NONCLUSTERED))?\s*"
            + rf"(?P<iname>{ident})?\s*(?=\()",
            clause,
            re.IGNORECASE,
        )
        if unique:
            name = unique.group("cname") or unique.group("iname")
            constraint = UniqueConstraint(
                columns=self._column_list(clause, unique.end(), dialect, ident),
                name=unquote_identifier(name) if name else None,
            )
            uniques.append((constraint, clause))
            return True

        index = re.match(
            rf"(?:KEY|INDEX)\b\s*(?P<iname>{ident})?\s*(?=\()", clause, re.IGNORECASE
        )
        if index:
            name = index.group("iname")
            definition = IndexDefinition(
                columns=self._column_list(clause, index.end(), dialect, ident),
                name=unquote_identifier(name) if name else None,
            )
            indexes.append((definition, clause))
            return True

        if _EXTRA_CLAUSE.match(clause):
            logger.debug(f"Keeping clause verbatim in {table.name}: {clause}")
            table.extra_clauses.append(clause)
            return True

        return False

    def _is_column(self, clause: str, dialect: Dialect, ident: str) -> bool:
        """Whether the clause reads as a name followed by a known type."""
        name = re.match(rf"{ident}\s+", clause)
        if name is None:
            return False
        type_token, _ = split_type(clause[name.end() :])
        if not type_token:
            return False
        info = self.catalog.type_info_for(type_token, dialect)
        return self.catalog.is_known(info.canonical)

    def _column_list(
        self, clause: str, open_index: int, dialect: Dialect, ident: str
    ) -> list[str]:
        escapes = dialect.is_mysql_family
        close_index = find_closing_paren(clause, open_index, escapes)
        if close_index == -1:
            raise ParseError("Unbalanced column list", clause)

        names: list[str] = []
        for part in split_top_level(
            clause[open_index + 1 : close_index], backslash_escapes=escapes
        ):
            # drop prefix lengths and sort order: `name`(10) DESC
            name = re.match(ident, part)
            if name is None:
                raise ParseError(
                    f"Column name does not match {dialect.value} identifier quoting",
                    part,
                )
            names.append(unquote_identifier(name.group(0)))
        if not names:
            raise ParseError("Empty column list", clause)
        return names

    def _require_column(self, table: Table, name: str, clause: str) -> str:
        column = table.get_column(name)
        if column is None:
            raise ParseError(f"Unknown column '{name}' in {table.name}", clause)
        return column.name

    def _parse_column(
        self, clause: str, dialect: Dialect, ident: str
    ) -> tuple[Column, list[str], bool]:
        """Parse one column definition.

        Returns:
            The column, any inline REFERENCES/CHECK constraints rewritten
            as table-level clauses, and whether it was marked UNIQUE
        """
        name_match = re.match(rf"(?P<name>{ident})\s*", clause)
        if name_match is None:
            raise ParseError(
                f"Column name does not match {dialect.value} identifier quoting",
                clause,
            )
        name = unquote_identifier(name_match.group("name"))

        type_text, rest = split_type(clause[name_match.end() :])
        if not type_text:
            raise ParseError(f"Column '{name}' has no type", clause)

        info = self.catalog.type_info_for(type_text, dialect)
        column = Column(
            name=name,
            raw_type=info.raw_type,
            base_type=info.base_type,
            length=info.length,
            precision=info.precision,
            scale=info.scale,
            enum_values=list(info.enum_values) if info.enum_values is not None else None,
            unsigned=info.unsigned,
            is_auto_increment=info.is_serial,
        )
        inline_clauses: list[str] = []
        inline_unique = False
        constraint_name = re.compile(rf"\s*CONSTRAINT\s+{ident}", re.IGNORECASE)
        escapes = dialect.is_mysql_family

        pos = 0
        while pos < len(rest):
            if rest[pos].isspace():
                pos += 1
                continue

            if m := _NOT_NULL.match(rest, pos):
                column.nullable = False
            elif m := _NULL.match(rest, pos):
                column.nullable = True
            elif m := _DEFAULT.match(rest, pos):
                value, end = _read_expression(rest, m.end(), escapes)
                self._apply_default(column, value, escapes)
                pos = end
                continue
            elif m := _PRIMARY_KEY.match(rest, pos):
                column.is_primary_key = True
                column.nullable = False
            elif m := _UNIQUE.match(rest, pos):
                inline_unique = True
            elif (
                (m := _AUTO_INCREMENT.match(rest, pos))
                or (m := _GENERATED_IDENTITY.match(rest, pos))
                or (m := _IDENTITY.match(rest, pos))
            ):
                column.is_auto_increment = True
                # GENERATED ... AS IDENTITY (START WITH 1 ...)
                pos = _skip_parenthesized(rest, m.end(), escapes)
                continue
            elif m := _GENERATED_COLUMN.match(rest, pos):
                pos = _skip_parenthesized(rest, m.end(), escapes)
                logger.debug(f"Dropping generated column expression on {name}")
                continue
            elif m := _ON_UPDATE.match(rest, pos):
                value, end = _read_expression(rest, m.end(), escapes)
                column.on_update = value
                pos = end
                continue
            elif m := _COMMENT.match(rest, pos):
                value, end = _read_expression(rest, m.end(), escapes)
                column.comment = _unquote_string(value)
                pos = end
                continue
            elif m := _CHARSET.match(rest, pos):
                pass
            elif m := _MODIFIER.match(rest, pos):
                if m.group(0).strip().lower() == "unsigned":
                    column.unsigned = True
            elif m := _CHECK.match(rest, pos):
                end = _skip_parenthesized(rest, m.end(), escapes)
                inline_clauses.append(f"CHECK {rest[m.end():end].strip()}")
                pos = end
                continue
            elif m := _REFERENCES.match(rest, pos):
                end = _references_end(rest, m.end(), dialect)
                inline_clauses.append(
                    f"FOREIGN KEY ({quote_identifier(name, dialect)}) "
                    f"{rest[pos:end].strip()}"
                )
                pos = end
                continue
            elif m := constraint_name.match(rest, pos):
                pass
            elif m := _STORAGE.match(rest, pos):
                pass
            else:
                word = _WORD.match(rest, pos)
                end = word.end() if word else pos + 1
                logger.debug(f"Ignoring '{rest[pos:end]}' in column {name}")
                pos = end
                continue
            pos = m.end()

        if column.is_auto_increment:
            family = self.catalog.family_of(info.canonical)
            if family != TypeFamily.INTEGER:
                logger.warning(
                    f"Column {name} of type {info.raw_type} cannot auto-increment, "
                    "dropping the flag"
                )
                column.is_auto_increment = False

        return column, inline_clauses, inline_unique

    def _apply_default(self, column: Column, value: str, escapes: bool) -> None:
        value = _strip_cast(_strip_outer_parens(value, escapes), escapes)
        if value.upper() == "NULL":
            column.default_value = None
        elif value.lower().startswith("nextval("):
            column.is_auto_increment = True
            column.default_value = None
        else:
            column.default_value = value


def _read_expression(
    text: str, pos: int, backslash_escapes: bool = True
) -> tuple[str, int]:
    """Read one default-like expression starting at `pos`.

    Handles quoted literals (with b'' / N'' prefixes), parenthesized
    expressions, function calls, bare words and PostgreSQL ::casts.
    """
    while pos < len(text) and text[pos].isspace():
        pos += 1
    start = pos
    if pos >= len(text):
        return "", pos

    if _LITERAL_PREFIX.match(text, pos):
        pos = skip_quoted(text, pos + 1, backslash_escapes)
    elif text[pos] == "'" or text[pos] == '"':
        pos = skip_quoted(text, pos, backslash_escapes)
    elif text[pos] == "(":
        pos = _skip_parenthesized(text, pos, backslash_escapes)
    else:
        word = _WORD.match(text, pos)
        pos = word.end() if word else pos + 1
        if pos < len(text) and text[pos] == "(":
            pos = _skip_parenthesized(text, pos, backslash_escapes)

    cast = _CAST.match(text, pos)
    while cast:
        type_text, _ = split_type(text[cast.end() :])
        pos = cast.end() + len(type_text)
        cast = _CAST.match(text, pos)

    return text[start:pos].strip(), pos


def _skip_parenthesized(text: str, pos: int, backslash_escapes: bool = True) -> int:
    probe = pos
    while probe < len(text) and text[probe].isspace():
        probe += 1
    if probe >= len(text) or text[probe] != "(":
        return pos
    close = find_closing_paren(text, probe, backslash_escapes)
    return len(text) if close == -1 else close + 1


def _references_end(text: str, pos: int, dialect: Dialect) -> int:
    target = re.compile(rf"\s*{qualified_name_pattern(dialect)}")
    match = target.match(text, pos)
    if match is None:
        return pos
    pos = _skip_parenthesized(text, match.end(), dialect.is_mysql_family)
    action = _REFERENTIAL_ACTION.match(text, pos)
    while action:
        pos = action.end()
        action = _REFERENTIAL_ACTION.match(text, pos)
    return pos


def _strip_outer_parens(value: str, backslash_escapes: bool = True) -> str:
    while (
        value.startswith("(")
        and find_closing_paren(value, 0, backslash_escapes) == len(value) - 1
    ):
        value = value[1:-1].strip()
    return value


def _strip_cast(value: str, backslash_escapes: bool = True) -> str:
    """Remove a trailing PostgreSQL ::type cast outside quotes and parentheses."""
    depth = 0
    i = 0
    while i < len(value):
        char = value[i]
        if char in "'\"":
            i = skip_quoted(value, i, backslash_escapes)
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif depth == 0 and value.startswith("::", i):
            return value[:i].strip()
        i += 1
    return value


def _unquote_string(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == "'":
        return value[1:-1].replace("''", "'").replace("\\'", "'")
    return value


def parse(ddl: str, dialect: Dialect) -> Table:
    """Parse a CREATE TABLE statement with a default parser."""
    return DdlParser().parse(ddl, dialect)
