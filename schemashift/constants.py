"""Translation constants."""

from typing import Final

# MySQL table suffix defaults
DEFAULT_MYSQL_ENGINE: Final[str] = "InnoDB"
DEFAULT_MYSQL_CHARSET: Final[str] = "utf8mb4"

# Room for quote characters when enum/set literals are stored as text
ENUM_LENGTH_SLACK: Final[int] = 2

# Length given to VARCHAR/NVARCHAR when the source declared none
DEFAULT_VARCHAR_LENGTH: Final[int] = 255

LINE_SEPARATOR: Final[str] = "\r\n"
COLUMN_INDENT: Final[str] = "\t"

# Keyword defaults that every target understands without parentheses
KEYWORD_DEFAULTS: Final[frozenset[str]] = frozenset(
    {
        "CURRENT_TIMESTAMP",
        "CURRENT_DATE",
        "CURRENT_TIME",
        "LOCALTIMESTAMP",
        "LOCALTIME",
    }
)
