"""Statement-boundary scanner for SQLite SQL.

The scanner is a single-pass state machine over the input string. At every position exactly one :class:`Mode` is
active; the mode decides whether a ``;`` ends a statement or is ordinary content. Quoted regions and comments make
``;`` inert, so a boundary is only ever emitted for a ``;`` seen in :attr:`Mode.NORMAL`.

Transitions are table driven:

======================  ===============  ======================
Opener (from NORMAL)    Mode             Closer
======================  ===============  ======================
``'``                   SINGLE_QUOTED    ``'`` (``''`` escapes)
``"``                   DOUBLE_QUOTED    ``"`` (``""`` escapes)
backtick                BACKTICK_QUOTED  backtick
``[``                   BRACKET_QUOTED   ``]``
``--``                  LINE_COMMENT     newline
``/*``                  BLOCK_COMMENT    ``*/``
======================  ===============  ======================

End of input closes whatever region is still open (forced closure). The scanner never raises on malformed SQL.
"""

from __future__ import annotations

import enum
import logging
import re
import typing
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

# SQLite's whitespace set (see sqlite3IsSpace / tokenize.c).
WHITESPACE: Final = " \t\n\f\r"


class Mode(enum.Enum):
    """Lexical context of the current scan position."""

    NORMAL = "normal"
    SINGLE_QUOTED = "single_quoted"
    DOUBLE_QUOTED = "double_quoted"
    BACKTICK_QUOTED = "backtick_quoted"
    BRACKET_QUOTED = "bracket_quoted"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"

    @property
    def is_comment(self) -> bool:
        return self in (Mode.LINE_COMMENT, Mode.BLOCK_COMMENT)


class Closer(typing.NamedTuple):
    """How a non-NORMAL mode ends."""

    delimiter: str
    doubled_escape: bool


class Statement(typing.NamedTuple):
    """One statement found in the input.

    ``start`` and ``end`` are code point offsets into the original string, so ``sql[start:end] == text`` always holds.
    """

    text: str
    start: int
    end: int


OPENERS: Final[dict[str, Mode]] = {
    "'": Mode.SINGLE_QUOTED,
    '"': Mode.DOUBLE_QUOTED,
    "`": Mode.BACKTICK_QUOTED,
    "[": Mode.BRACKET_QUOTED,
    "--": Mode.LINE_COMMENT,
    "/*": Mode.BLOCK_COMMENT,
}

CLOSERS: Final[dict[Mode, Closer]] = {
    Mode.SINGLE_QUOTED: Closer("'", doubled_escape=True),
    Mode.DOUBLE_QUOTED: Closer('"', doubled_escape=True),
    Mode.BACKTICK_QUOTED: Closer("`", doubled_escape=False),
    Mode.BRACKET_QUOTED: Closer("]", doubled_escape=False),
    Mode.LINE_COMMENT: Closer("\n", doubled_escape=False),
    Mode.BLOCK_COMMENT: Closer("*/", doubled_escape=False),
}

# Everything significant in NORMAL mode: a terminator or any region opener.
_NORMAL_TOKEN = re.compile(r""";|--|/\*|['"`\[]""")


def find_closer(sql: str, pos: int, mode: Mode) -> int:
    """Return the offset just past the delimiter that ends *mode*, searching from *pos*.

    A doubled delimiter inside a quoted region is an escaped character and does not close it. Returns ``-1`` when
    the region runs to end of input.
    """
    closer = CLOSERS[mode]
    delimiter = closer.delimiter
    while True:
        found = sql.find(delimiter, pos)
        if found < 0:
            return -1
        after = found + len(delimiter)
        if closer.doubled_escape and sql.startswith(delimiter, after):
            pos = after + len(delimiter)
            continue
        return after


class Scanner:
    """Iterator over the non-empty statements of a SQL string.

    The scanner holds the whole scan state between steps: the active :attr:`mode`, the scan :attr:`position`, the
    extent of the pending statement's content, and how many statements were emitted. Each call to :func:`next` resumes
    from that state and runs only as far as the next statement, so a caller that stops iterating early never pays for
    the unscanned remainder.

    A statement's text runs from its first to its last piece of content. Whitespace and ``--`` line comments around it
    are trimmed; block comments are content and stay attached to the statement they touch. A statement whose content
    lies entirely inside comments is not a statement unless *keep_comment_only* is set.

    Args:
        sql: The input string. It is only read, never copied.
        keep_comment_only: When true, statements made only of block comments are emitted too.
    """

    __slots__ = (
        "_content_end",
        "_content_start",
        "_has_code",
        "_keep_comment_only",
        "_region_start",
        "_sql",
        "emitted",
        "mode",
        "position",
    )

    def __init__(self, sql: str, *, keep_comment_only: bool = False) -> None:
        self._sql = sql
        self._keep_comment_only = keep_comment_only
        self._content_start: int | None = None
        self._content_end = 0
        self._has_code = False
        self._region_start = 0
        self.mode = Mode.NORMAL
        self.position = 0
        self.emitted = 0

    def __iter__(self) -> Iterator[Statement]:
        return self

    def __next__(self) -> Statement:
        span = self._advance()
        if span is None:
            raise StopIteration
        start, end = span
        return Statement(self._sql[start:end], start, end)

    def count_remaining(self) -> int:
        """Scan to end of input without building statement text; return the total number of statements emitted."""
        while self._advance() is not None:
            pass
        return self.emitted

    def _advance(self) -> tuple[int, int] | None:
        """Run to the next statement and return its ``(start, end)`` span, or ``None`` at end of input."""
        sql = self._sql
        length = len(sql)
        while self.position <= length:
            if self.mode is not Mode.NORMAL:
                self._leave_region()
                continue

            match = _NORMAL_TOKEN.search(sql, self.position)
            if match is None:
                self._note_text(self.position, length)
                # Step past the end so the next call stops.
                self.position = length + 1
                return self._boundary()

            token = match.group()
            self._note_text(self.position, match.start())
            self.position = match.end()
            if token == ";":
                span = self._boundary()
                if span is not None:
                    return span
                continue

            self.mode = OPENERS[token]
            self._region_start = match.start()
            if self.mode is not Mode.LINE_COMMENT and self._content_start is None:
                self._content_start = match.start()
            if not self.mode.is_comment:
                self._has_code = True
        return None

    def _leave_region(self) -> None:
        """Consume the open quoted region or comment, forcing closure at end of input."""
        sql = self._sql
        closed = content_end = find_closer(sql, self.position, self.mode)
        if closed < 0:
            # A line comment may legitimately run to end of input.
            if self.mode is not Mode.LINE_COMMENT:
                logger.debug(
                    "Unterminated %s region opened at offset %d closed at end of input",
                    self.mode.value,
                    self._region_start,
                )
            closed = content_end = len(sql)
            while sql[content_end - 1] in WHITESPACE:
                content_end -= 1
        if self.mode is not Mode.LINE_COMMENT:
            self._content_end = content_end
        self.position = closed
        self.mode = Mode.NORMAL

    def _note_text(self, begin: int, end: int) -> None:
        """Record plain NORMAL-mode text between *begin* and *end* as statement content."""
        text = self._sql[begin:end]
        leading = len(text) - len(text.lstrip(WHITESPACE))
        if leading == len(text):
            return
        if self._content_start is None:
            self._content_start = begin + leading
        self._content_end = begin + len(text.rstrip(WHITESPACE))
        self._has_code = True

    def _boundary(self) -> tuple[int, int] | None:
        """Close the pending statement; return its span unless it has no content."""
        start, end, has_code = self._content_start, self._content_end, self._has_code
        self._content_start = None
        self._has_code = False
        if start is None or not (has_code or self._keep_comment_only):
            return None
        self.emitted += 1
        return start, end
