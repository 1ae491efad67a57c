"""Tests for the scanner state machine itself."""

from __future__ import annotations

import logging

import pytest

from sql_split import Mode, Scanner, Statement
from sql_split.scan import CLOSERS, OPENERS, find_closer


class TestTransitionTables:
    def test_every_region_mode_has_opener_and_closer(self) -> None:
        region_modes = set(Mode) - {Mode.NORMAL}
        assert set(OPENERS.values()) == region_modes
        assert set(CLOSERS) == region_modes

    @pytest.mark.parametrize(
        ("mode", "escapes"),
        [
            (Mode.SINGLE_QUOTED, True),
            (Mode.DOUBLE_QUOTED, True),
            (Mode.BACKTICK_QUOTED, False),
            (Mode.BRACKET_QUOTED, False),
            (Mode.LINE_COMMENT, False),
            (Mode.BLOCK_COMMENT, False),
        ],
    )
    def test_doubled_escape(self, mode: Mode, escapes: bool) -> None:
        assert CLOSERS[mode].doubled_escape is escapes

    def test_is_comment(self) -> None:
        assert {mode for mode in Mode if mode.is_comment} == {Mode.LINE_COMMENT, Mode.BLOCK_COMMENT}


class TestFindCloser:
    @pytest.mark.parametrize(
        ("sql", "pos", "mode", "expected"),
        [
            ("'abc' x", 1, Mode.SINGLE_QUOTED, 5),
            ("'it''s' x", 1, Mode.SINGLE_QUOTED, 7),
            ("'''' x", 1, Mode.SINGLE_QUOTED, 4),
            ('"a""b" x', 1, Mode.DOUBLE_QUOTED, 6),
            ("`a``b` x", 1, Mode.BACKTICK_QUOTED, 3),
            ("[a]] x", 1, Mode.BRACKET_QUOTED, 3),
            ("-- c\nx", 2, Mode.LINE_COMMENT, 5),
            ("/* a */ x", 2, Mode.BLOCK_COMMENT, 7),
            ("/*/ */", 2, Mode.BLOCK_COMMENT, 6),
        ],
    )
    def test_closes(self, sql: str, pos: int, mode: Mode, expected: int) -> None:
        assert find_closer(sql, pos, mode) == expected

    @pytest.mark.parametrize(
        ("sql", "mode"),
        [
            ("'abc", Mode.SINGLE_QUOTED),
            ("'abc''", Mode.SINGLE_QUOTED),
            ('"abc', Mode.DOUBLE_QUOTED),
            ("[abc", Mode.BRACKET_QUOTED),
            ("-- abc", Mode.LINE_COMMENT),
            ("/* abc *", Mode.BLOCK_COMMENT),
        ],
    )
    def test_unterminated(self, sql: str, mode: Mode) -> None:
        assert find_closer(sql, 1, mode) == -1


class TestScanner:
    def test_yields_statements(self) -> None:
        scanner = Scanner("SELECT 1; SELECT 2")
        assert list(scanner) == [Statement("SELECT 1", 0, 8), Statement("SELECT 2", 10, 18)]
        assert scanner.emitted == 2
        assert next(scanner, None) is None

    def test_state_between_steps(self) -> None:
        sql = "SELECT 1; SELECT 2"
        scanner = Scanner(sql)
        assert next(scanner).text == "SELECT 1"
        assert scanner.position == sql.index(";") + 1
        assert scanner.mode is Mode.NORMAL
        assert scanner.emitted == 1

    def test_stops_repeatedly(self) -> None:
        scanner = Scanner("")
        assert list(scanner) == []
        assert list(scanner) == []

    def test_empty_boundaries_not_counted(self) -> None:
        scanner = Scanner(";;  ;\n")
        assert list(scanner) == []
        assert scanner.emitted == 0

    def test_comment_only_statements_dropped(self) -> None:
        scanner = Scanner("/* a */; SELECT 1; /* b */ -- c")
        assert [s.text for s in scanner] == ["SELECT 1"]
        assert scanner.emitted == 1

    def test_keep_comment_only(self) -> None:
        scanner = Scanner("/* a */; SELECT 1; /* b */ -- c", keep_comment_only=True)
        assert [s.text for s in scanner] == ["/* a */", "SELECT 1", "/* b */"]
        assert scanner.emitted == 3


class TestCountRemaining:
    def test_counts_all(self) -> None:
        assert Scanner("SELECT 1;; SELECT ';'; /* x */").count_remaining() == 2

    def test_counts_after_partial_iteration(self) -> None:
        scanner = Scanner("SELECT 1; SELECT 2; SELECT 3")
        assert next(scanner).text == "SELECT 1"
        assert scanner.count_remaining() == 3
        assert scanner.count_remaining() == 3

    def test_builds_no_statement_text(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fail(*args: object) -> None:
            raise AssertionError("statement text was built")

        monkeypatch.setattr("sql_split.scan.Statement", fail)
        assert Scanner("SELECT 1; SELECT 2").count_remaining() == 2


class TestForcedClosureLogging:
    @pytest.mark.parametrize(
        ("sql", "mode"),
        [
            ("SELECT 'abc", "single_quoted"),
            ('SELECT "abc', "double_quoted"),
            ("SELECT `abc", "backtick_quoted"),
            ("SELECT [abc", "bracket_quoted"),
            ("SELECT /* abc", "block_comment"),
        ],
    )
    def test_unterminated_region_logged(self, sql: str, mode: str, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="sql_split.scan"):
            assert [s.text for s in Scanner(sql)] == [sql]
        assert f"Unterminated {mode} region opened at offset 7" in caplog.text

    def test_trailing_line_comment_not_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="sql_split.scan"):
            list(Scanner("SELECT 1 -- end"))
        assert caplog.records == []
