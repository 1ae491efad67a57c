from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from sql_split import count, has_more_than_one, split, split_n

if TYPE_CHECKING:
    from collections.abc import Callable


# -- Input fixtures ------------------------------------------------------------


@pytest.fixture
def migration_sql() -> str:
    return (
        "-- schema v2\n"
        "CREATE TABLE departments (id integer PRIMARY KEY, name text NOT NULL);\n"
        "/* seed rows; keep in sync with fixtures */\n"
        "INSERT INTO departments (name) VALUES ('R&D; labs'), ('it''s ops');\n"
        'CREATE INDEX "idx;name" ON departments (name);\n'
    )


# -- Assertion helpers ---------------------------------------------------------


def assert_consistent(sql: str) -> list[str]:
    """Assert that every operation agrees with ``split`` on *sql* and return the statements."""
    statements = split(sql)
    assert count(sql) == len(statements)
    assert has_more_than_one(sql) is (len(statements) > 1)
    for n in range(len(statements) + 2):
        assert split_n(sql, n) == statements[:n]
    return statements


@pytest.fixture
def consistent() -> Callable[[str], list[str]]:
    return assert_consistent
