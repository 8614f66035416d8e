"""Exceptions for DDL translation."""


class ConversionError(Exception):
    """Base exception for schema conversion errors."""

    pass


class ParseError(ConversionError):
    """Raised when a CREATE TABLE statement cannot be parsed."""

    def __init__(self, message: str, fragment: str | None = None) -> None:
        self.fragment = fragment
        if fragment:
            snippet = fragment if len(fragment) <= 80 else fragment[:77] + "..."
            message = f"{message}: {snippet}"
        super().__init__(message)


class UnsupportedDialectError(ConversionError):
    """Raised when a dialect tag has no translation path."""

    def __init__(self, dialect: str) -> None:
        self.dialect = dialect
        super().__init__(f"Unsupported database dialect: {dialect}")
