"""Execute-All Recipebook — interactive examples for running multi-statement SQL against sqlite3 with sql_split."""

from __future__ import annotations

from typing import TYPE_CHECKING

import marimo

if TYPE_CHECKING:
    import types
    from collections.abc import Callable, Iterator

    from sql_split import Statement

__generated_with = "0.19.11"
app = marimo.App()


@app.cell
def _(mo: types.ModuleType):
    mo.md("""
    # Execute-All Recipebook

    SQLite compiles only the first statement of a string handed to
    `execute()`; anything after the first `;` is either rejected or silently
    ignored depending on the driver.  These recipes use **sql_split** to find
    safe split points first, then hand each statement to the database.

    **How to use this notebook:**

    - `marimo run recipes/execute_all.py` — read-only app mode
    - `marimo edit recipes/execute_all.py` — interactive editing mode
    """)
    return


@app.cell
def _():
    import sqlite3

    import marimo as mo

    from sql_split import has_more_than_one, iter_statements, split, split_n

    return has_more_than_one, iter_statements, mo, split, split_n, sqlite3


@app.cell
def _(
    mo: types.ModuleType,
    split: Callable[[str], list[str]],
    sqlite3: types.ModuleType,
):
    # --- Recipe: Run every statement of a migration ---
    _migration = """
    -- v1: departments
    CREATE TABLE departments (id integer PRIMARY KEY, name text NOT NULL);
    /* seed rows; the names contain semicolons on purpose */
    INSERT INTO departments (name) VALUES ('R&D; labs'), ('it''s ops');
    CREATE INDEX "idx;departments;name" ON departments (name);
    """

    _conn = sqlite3.connect(":memory:")
    _statements = split(_migration)
    for _stmt in _statements:
        _conn.execute(_stmt)
    _names = [_row[0] for _row in _conn.execute("SELECT name FROM departments ORDER BY id")]
    _conn.close()

    _rows = "\n".join(f"| {_i + 1} | `{_stmt.splitlines()[-1][:60]}` |" for _i, _stmt in enumerate(_statements))
    mo.md(
        f"""
        ## Recipe 1: Run Every Statement of a Migration

        `split` returns each statement without its `;`, so they can be passed
        one at a time to `Connection.execute`.  Semicolons inside the string
        literals, the quoted index name and the block comment are not treated
        as terminators.

        | # | Statement (last line) |
        |---|-----------------------|
        {_rows}

        **Rows inserted:** {", ".join(f"`{_n}`" for _n in _names)}
        """
    )
    return


@app.cell
def _(
    has_more_than_one: Callable[[str], bool],
    mo: types.ModuleType,
    sqlite3: types.ModuleType,
):
    # --- Recipe: Refuse multi-statement input to a single-statement API ---
    _conn = sqlite3.connect(":memory:")
    _conn.execute("CREATE TABLE users (id integer PRIMARY KEY, name text)")

    def _run_one(sql: str) -> str:
        if has_more_than_one(sql):
            return "rejected: more than one statement"
        _conn.execute(sql)
        return "executed"

    _inputs = [
        "INSERT INTO users (name) VALUES ('alice; bob')",
        "INSERT INTO users (name) VALUES ('carol'); DROP TABLE users",
        "INSERT INTO users (name) VALUES ('dave'); -- trailing note",
        "INSERT INTO users (name) VALUES ('erin'); /* trailing note */",
    ]
    _rows = "\n".join(f"| `{_sql}` | {_run_one(_sql)} |" for _sql in _inputs)
    _remaining = _conn.execute("SELECT count(*) FROM users").fetchone()[0]
    _conn.close()

    mo.md(
        f"""
        ## Recipe 2: Guard a Single-Statement API

        `has_more_than_one` stops scanning as soon as it sees a second
        statement, so it is cheap enough to run on every call.  A trailing
        `--` or `/* */` comment does not count as a statement.

        | Input | Outcome |
        |-------|---------|
        {_rows}

        **Rows in `users`:** {_remaining}
        """
    )
    return


@app.cell
def _(
    iter_statements: Callable[[str], Iterator[Statement]],
    mo: types.ModuleType,
    sqlite3: types.ModuleType,
):
    # --- Recipe: Point at the statement the database rejected ---
    _script = "CREATE TABLE t (a int);\nINSERT INTO t VALUES (1);\nINSERT INTO missing VALUES (2);\nSELECT * FROM t;"

    _conn = sqlite3.connect(":memory:")
    _failure = None
    for _statement in iter_statements(_script):
        try:
            _conn.execute(_statement.text)
        except sqlite3.Error as _exc:
            _failure = (_statement, _exc)
            break
    _conn.close()

    if _failure is None:
        _report = "All statements succeeded."
    else:
        _stmt, _exc = _failure
        _line = _script.count("\n", 0, _stmt.start) + 1
        _report = f"**`{_exc}`** in statement at offsets {_stmt.start} to {_stmt.end} (line {_line}): `{_stmt.text}`"

    mo.md(
        f"""
        ## Recipe 3: Map a Database Error Back to the Script

        `iter_statements` yields `Statement(text, start, end)` records whose
        offsets slice the original script, so an error from the engine can be
        reported against the input the user wrote.

        {_report}
        """
    )
    return


@app.cell
def _(
    mo: types.ModuleType,
    split_n: Callable[[str, int], list[str]],
):
    # --- Recipe: Preview the head of a large dump ---
    _dump = ";\n".join(f"INSERT INTO log VALUES ({_i}, 'entry {_i}; ok')" for _i in range(50_000))
    _head = split_n(_dump, 3)
    _rows = "\n".join(f"- `{_stmt}`" for _stmt in _head)

    mo.md(
        f"""
        ## Recipe 4: Preview the Head of a Large Dump

        `split_n` stops after the requested number of statements; the rest of
        the {len(_dump):,}-character dump is never scanned.

        {_rows}
        """
    )
    return


if __name__ == "__main__":
    app.run()
