"""Split a string of SQLite SQL into individual statements.

All operations here drive the same :class:`~sql_split.scan.Scanner` and differ only in when they stop, so their
results always agree: ``count(sql) == len(split(sql))``, ``split_n(sql, n) == split(sql)[:n]`` and
``has_more_than_one(sql) == (count(sql) > 1)``.
"""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING, Literal

from sql_split.scan import Scanner, Statement

if TYPE_CHECKING:
    from collections.abc import Iterator

CommentPolicy = Literal["skip", "keep"]

_COMMENT_POLICIES = {
    "skip": False,
    "keep": True,
}


def _scanner(sql: str, comments: CommentPolicy) -> Scanner:
    keep_comment_only = _COMMENT_POLICIES.get(comments)
    if keep_comment_only is None:
        raise ValueError(f"Unknown comments policy {comments!r}; expected 'skip' or 'keep'")
    return Scanner(sql, keep_comment_only=keep_comment_only)


def iter_statements(sql: str, *, comments: CommentPolicy = "skip") -> Iterator[Statement]:
    """Lazily yield each statement in *sql* together with its offsets.

    Scanning advances only as far as the statement being yielded. Each item is a
    :class:`~sql_split.scan.Statement` whose ``start``/``end`` slice the original string, which is handy for mapping a
    database error back to the input it came from.

    Args:
        sql: A SQL string potentially containing multiple statements.
        comments: ``"skip"`` (default) drops statements that consist only of comments. ``"keep"`` also yields
            statements made only of block comments.

    Returns:
        An iterator of ``Statement(text, start, end)`` records.

    Raises:
        ValueError: If *comments* is not ``"skip"`` or ``"keep"``.
    """
    return _scanner(sql, comments)


def split(sql: str, *, comments: CommentPolicy = "skip") -> list[str]:
    """Split a multi-statement SQL string into individual statements.

    A ``;`` ends a statement unless it sits inside a string literal, a quoted identifier (``"..."``, ``[...]`` or
    backtick-quoted) or a comment. Each statement is returned without its terminating ``;`` and with surrounding
    whitespace and ``--`` line comments removed. Block comments stay attached to the statement they precede. Empty
    statements (``;;``) and statements made only of comments are dropped, and text after the last ``;`` is returned
    as a final statement.

    Malformed SQL never raises: an unterminated literal or comment simply extends to the end of the input.

    Args:
        sql: A SQL string potentially containing multiple statements.
        comments: ``"skip"`` (default) or ``"keep"``; see :func:`iter_statements`.

    Returns:
        A list of individual SQL statement strings.

    Raises:
        ValueError: If *comments* is not ``"skip"`` or ``"keep"``.

    Examples:
        >>> split("CREATE TABLE foo (bar text); CREATE TABLE meep (moop text)")
        ['CREATE TABLE foo (bar text)', 'CREATE TABLE meep (moop text)']
        >>> split("SELECT ';'; SELECT 2;")
        ["SELECT ';'", 'SELECT 2']
    """
    return [statement.text for statement in _scanner(sql, comments)]


def split_n(sql: str, n: int, *, comments: CommentPolicy = "skip") -> list[str]:
    """Return the first *n* statements of *sql*, scanning no further than needed.

    Equivalent to ``split(sql)[:n]``, but the input after the *n*-th statement is never scanned.

    Args:
        sql: A SQL string potentially containing multiple statements.
        n: Maximum number of statements to return.
        comments: ``"skip"`` (default) or ``"keep"``; see :func:`iter_statements`.

    Returns:
        Up to *n* SQL statement strings.

    Raises:
        TypeError: If *n* is not an integer.
        ValueError: If *n* is negative or *comments* is not ``"skip"`` or ``"keep"``.
    """
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"n must be an int, not {type(n).__name__}")
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    scanner = _scanner(sql, comments)
    return [statement.text for statement in itertools.islice(scanner, n)]


def count(sql: str, *, comments: CommentPolicy = "skip") -> int:
    """Count the statements :func:`split` would return for *sql*.

    Args:
        sql: A SQL string potentially containing multiple statements.
        comments: ``"skip"`` (default) or ``"keep"``; see :func:`iter_statements`.

    Returns:
        The number of statements.

    Raises:
        ValueError: If *comments* is not ``"skip"`` or ``"keep"``.
    """
    return _scanner(sql, comments).count_remaining()


def has_more_than_one(sql: str, *, comments: CommentPolicy = "skip") -> bool:
    """Return whether *sql* holds more than one statement.

    Stops scanning as soon as a second statement is found. Use it to guard APIs that silently execute only the first
    statement of a string.

    Args:
        sql: A SQL string potentially containing multiple statements.
        comments: ``"skip"`` (default) or ``"keep"``; see :func:`iter_statements`.

    Returns:
        ``True`` if :func:`count` would be greater than one.

    Raises:
        ValueError: If *comments* is not ``"skip"`` or ``"keep"``.
    """
    return next(itertools.islice(_scanner(sql, comments), 1, None), None) is not None
