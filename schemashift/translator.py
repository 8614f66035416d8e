"""Dialect translation pipeline for CREATE TABLE statements."""

import re
from dataclasses import dataclass, field

from schemashift.catalog import TypeCatalog
from schemashift.config import Settings, settings
from schemashift.constants import LINE_SEPARATOR
from schemashift.defaults import format_default
from schemashift.exceptions import ConversionError
from schemashift.implementations.factory import get_emitter
from schemashift.log import get_logger
from schemashift.parser import DdlParser
from schemashift.quoting import last_name_part, requote_identifiers
from schemashift.schema import Column, Table
from schemashift.tokenizer import split_statements, split_top_level
from schemashift.types import Dialect, TypeFamily, normalize_dialect

logger = get_logger(__name__)

_DROP_TABLE = re.compile(
    r"^\s*DROP\s+TABLE\s+(?:IF\s+EXISTS\s+)?(?P<names>.+?)\s*(?:CASCADE|RESTRICT)?\s*$",
    re.IGNORECASE | re.DOTALL,
)
_CREATE_TABLE = re.compile(r"^\s*CREATE\b[\w\s]*?\bTABLE\b", re.IGNORECASE)


@dataclass
class StatementError:
    """A dump statement that failed to translate."""

    index: int
    statement: str
    error: ConversionError


@dataclass
class DumpTranslation:
    """Result of translating a multi-statement dump."""

    statements: list[str] = field(default_factory=list)
    errors: list[StatementError] = field(default_factory=list)

    @property
    def sql(self) -> str:
        """Translated statements separated by blank lines."""
        return (LINE_SEPARATOR * 2).join(self.statements)

    @property
    def ok(self) -> bool:
        return not self.errors


class DialectTranslator:
    """Translate CREATE TABLE statements between dialects.

    Each call parses into a fresh Table, translates column types and
    defaults in place, and renders the result with the target emitter.
    """

    def __init__(self, config: Settings | None = None) -> None:
        self.settings = config or settings
        self.catalog = TypeCatalog(
            varchar_default_length=self.settings.varchar_default_length,
            warn_on_unknown_type=self.settings.warn_on_unknown_type,
        )
        self.parser = DdlParser(self.catalog)

    def translate(
        self, ddl: str, source: Dialect | str, target: Dialect | str
    ) -> str:
        """Translate one CREATE TABLE statement.

        Leading DROP TABLE statements are re-emitted as comments.

        Args:
            ddl: CREATE TABLE statement, optionally preceded by DROP TABLE
                statements and comments
            source: Dialect of ddl
            target: Dialect to produce

        Returns:
            Translated DDL with CRLF line endings; ddl itself when source
            and target are the same dialect

        Raises:
            ParseError: If ddl holds no CREATE TABLE of the source dialect
            UnsupportedDialectError: If a dialect tag is unknown
        """
        source = normalize_dialect(source)
        target = normalize_dialect(target)
        if source == target:
            return ddl

        drops: list[str] = []
        creates: list[str] = []
        for statement in split_statements(ddl, source.is_mysql_family):
            drop = _DROP_TABLE.match(statement)
            if drop:
                drops.extend(self._drop_names(drop.group("names"), source))
            elif _CREATE_TABLE.match(statement):
                creates.append(statement)
            else:
                logger.debug(f"Skipping statement: {statement[:60]}")

        if len(creates) > 1:
            logger.warning(
                f"Found {len(creates)} CREATE TABLE statements, translating the "
                "first; use translate_dump for whole dumps"
            )
        # the parser reports a missing CREATE TABLE
        table = self.parser.parse(creates[0] if creates else ddl, source)
        table.drop_if_exists = bool(drops)
        return self._render(table, source, target, drops)

    def translate_table(
        self, table: Table, source: Dialect | str, target: Dialect | str
    ) -> str:
        """Translate a Table built outside the parser.

        Args:
            table: Table whose column raw_type values are in the source dialect
            source: Dialect of the column types
            target: Dialect to produce

        Returns:
            Translated DDL
        """
        source = normalize_dialect(source)
        target = normalize_dialect(target)
        drops = [table.name] if table.drop_if_exists else []
        return self._render(table, source, target, drops)

    def translate_dump(
        self, sql: str, source: Dialect | str, target: Dialect | str
    ) -> DumpTranslation:
        """Translate every CREATE TABLE statement of a dump.

        DROP TABLE statements attach to the next CREATE TABLE. Other
        statements are skipped. A failing statement is recorded and the
        rest are still translated.

        Args:
            sql: Dump text, possibly with DELIMITER switches
            source: Dialect of sql
            target: Dialect to produce

        Returns:
            Translated statements and per-statement errors
        """
        source = normalize_dialect(source)
        target = normalize_dialect(target)
        result = DumpTranslation()
        if source == target:
            result.statements.append(sql)
            return result

        drops: list[str] = []
        for index, statement in enumerate(
            split_statements(sql, source.is_mysql_family)
        ):
            drop = _DROP_TABLE.match(statement)
            if drop:
                drops.extend(self._drop_names(drop.group("names"), source))
                continue
            if not _CREATE_TABLE.match(statement):
                logger.debug(f"Skipping statement {index}: {statement[:60]}")
                continue

            try:
                table = self.parser.parse(statement, source)
                table.drop_if_exists = bool(drops)
                result.statements.append(self._render(table, source, target, drops))
            except ConversionError as e:
                logger.error(f"Failed to translate statement {index}: {e}")
                result.errors.append(
                    StatementError(index=index, statement=statement, error=e)
                )
            drops = []

        summary = (
            f"Translated {len(result.statements)} tables from {source.value} "
            f"to {target.value}, {len(result.errors)} failed"
        )
        if result.ok:
            logger.info(summary)
        else:
            logger.warning(summary)
        return result

    def convert_type(
        self, type_token: str, source: Dialect | str, target: Dialect | str
    ) -> str:
        """Translate a single column type token."""
        source = normalize_dialect(source)
        target = normalize_dialect(target)
        if source == target:
            return type_token
        info = self.catalog.type_info_for(type_token, source)
        return self.catalog.translate(info, source, target).token

    def _drop_names(self, names: str, dialect: Dialect) -> list[str]:
        return [last_name_part(name, dialect) for name in split_top_level(names)]

    def _render(
        self, table: Table, source: Dialect, target: Dialect, drops: list[str]
    ) -> str:
        for column in table.columns:
            self._translate_column(column, source, target)
        table.extra_clauses = [
            requote_identifiers(clause, source, target) for clause in table.extra_clauses
        ]

        emitter = get_emitter(target, self.settings)
        lines = [emitter.drop_table_comment(name) for name in drops]
        if lines:
            lines.append("")
        lines.append(emitter.emit(table))
        return LINE_SEPARATOR.join(lines)

    def _translate_column(self, column: Column, source: Dialect, target: Dialect) -> None:
        info = self.catalog.type_info_for(column.raw_type, source)
        translated = self.catalog.translate(info, source, target)

        column.raw_type = translated.token
        column.base_type = translated.token.split("(")[0].strip().lower()
        if translated.auto_increment:
            column.is_auto_increment = True
        if column.is_auto_increment and translated.family != TypeFamily.INTEGER:
            logger.warning(
                f"Column {column.name} of type {translated.token} cannot "
                "auto-increment, dropping the flag"
            )
            column.is_auto_increment = False

        if column.is_auto_increment:
            column.default_value = None
        else:
            column.default_value = format_default(
                column.default_value, translated, target
            )


_default_translator: DialectTranslator | None = None


def _translator() -> DialectTranslator:
    global _default_translator
    if _default_translator is None:
        _default_translator = DialectTranslator()
    return _default_translator


def translate_create_table(
    ddl: str, source: Dialect | str, target: Dialect | str
) -> str:
    """Translate one CREATE TABLE statement with the global settings."""
    return _translator().translate(ddl, source, target)


def translate_dump(
    sql: str, source: Dialect | str, target: Dialect | str
) -> DumpTranslation:
    """Translate a multi-statement dump with the global settings."""
    return _translator().translate_dump(sql, source, target)


def convert_type(type_token: str, source: Dialect | str, target: Dialect | str) -> str:
    """Translate a single column type token with the global settings."""
    return _translator().convert_type(type_token, source, target)
