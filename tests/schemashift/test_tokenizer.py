"""Tests for quote- and depth-aware text scanning."""

from schemashift.tokenizer import (
    collapse_whitespace,
    find_closing_paren,
    skip_quoted,
    split_statements,
    split_top_level,
    strip_comments,
)


def test_split_top_level_respects_parameters() -> None:
    """Test that nested parameter lists are not split."""
    parts = split_top_level("a decimal(10,2), b int, PRIMARY KEY (a, b)")

    assert parts == ["a decimal(10,2)", "b int", "PRIMARY KEY (a, b)"]


def test_split_top_level_respects_literals() -> None:
    """Test that commas inside quoted literals are not split."""
    parts = split_top_level("s enum('a,b','c'), t varchar(5) DEFAULT ',', u int")

    assert parts == ["s enum('a,b','c')", "t varchar(5) DEFAULT ','", "u int"]


def test_split_top_level_drops_empty_parts() -> None:
    """Test that empty parts are dropped."""
    assert split_top_level(" a , , b ,") == ["a", "b"]


def test_skip_quoted_escapes() -> None:
    """Test doubled and backslash-escaped quotes."""
    assert skip_quoted("'it''s' x", 0) == 7
    assert skip_quoted(r"'it\'s' x", 0) == 7
    assert skip_quoted("[a]]b] x", 0) == 3
    assert skip_quoted("abc", 0) == 0


def test_standard_strings_keep_backslash() -> None:
    """Test that a backslash does not escape outside MySQL strings."""
    text = r"'C:\' x"

    assert skip_quoted(text, 0) == len(text)
    assert skip_quoted(text, 0, backslash_escapes=False) == 5
    assert split_top_level(r"p DEFAULT 'C:\', q int", backslash_escapes=False) == [
        r"p DEFAULT 'C:\'",
        "q int",
    ]


def test_find_closing_paren() -> None:
    """Test matching parenthesis lookup."""
    text = "(a (b) ')' c) d"

    assert find_closing_paren(text, 0) == 12
    assert find_closing_paren("(a (b)", 0) == -1


def test_collapse_whitespace_keeps_literals() -> None:
    """Test whitespace collapsing outside quotes only."""
    text = "CREATE   TABLE\n\tt (\n  a  varchar(5) DEFAULT 'x   y'\n)"

    assert collapse_whitespace(text) == "CREATE TABLE t ( a varchar(5) DEFAULT 'x   y' )"


def test_strip_comments() -> None:
    """Test removal of line and block comments outside quotes."""
    text = "a -- note\nb /* block\n comment */c '-- kept'"

    result = strip_comments(text)

    assert "note" not in result
    assert "block" not in result
    assert "'-- kept'" in result
    assert result.split() == ["a", "b", "c", "'--", "kept'"]


def test_split_statements_basic() -> None:
    """Test splitting on semicolons outside literals."""
    sql = "DROP TABLE a;\nCREATE TABLE a (x varchar(3) DEFAULT ';');\n-- done\n"

    assert split_statements(sql) == [
        "DROP TABLE a",
        "CREATE TABLE a (x varchar(3) DEFAULT ';')",
    ]


def test_split_statements_delimiter_switch() -> None:
    """Test DELIMITER handling as in mysql client dumps."""
    sql = (
        "CREATE TABLE a (x int);\n"
        "DELIMITER $$\n"
        "CREATE TRIGGER t BEFORE INSERT ON a FOR EACH ROW BEGIN SET NEW.x = 1; END$$\n"
        "DELIMITER ;\n"
        "CREATE TABLE b (y int);"
    )

    statements = split_statements(sql)

    assert len(statements) == 3
    assert statements[1].endswith("END")
    assert "SET NEW.x = 1;" in statements[1]
    assert statements[2] == "CREATE TABLE b (y int)"


def test_split_statements_without_trailing_delimiter() -> None:
    """Test that a final statement without ';' is kept."""
    assert split_statements("CREATE TABLE a (x int)") == ["CREATE TABLE a (x int)"]
