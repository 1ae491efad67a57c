"""Split strings of SQLite SQL into individual statements without parsing them."""

from sql_split.scan import Mode, Scanner, Statement
from sql_split.split import CommentPolicy, count, has_more_than_one, iter_statements, split, split_n

__all__ = [
    "CommentPolicy",
    "count",
    "has_more_than_one",
    "iter_statements",
    "Mode",
    "Scanner",
    "split_n",
    "split",
    "Statement",
]
