"""Sphinx build settings for the sql-split API reference."""

import os
import sys

# The package is pure Python, so the docs build imports it straight from the source tree.
_SRC = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
sys.path.insert(0, _SRC)

project = "sql-split"
author = "sql-split contributors"
copyright = "2026, sql-split contributors"  # noqa: A001
html_title = project

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.doctest",
    "sphinx.ext.intersphinx",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "sphinx_autodoc_typehints",
    "sphinx_copybutton",
    "sphinx_llm.txt",
]

# Docstrings use the Google layout (Args/Returns/Raises/Examples).
napoleon_google_docstring = True
napoleon_numpy_docstring = False

# Keep members in source order so Mode and the transition tables read top to bottom.
autodoc_member_order = "bysource"
autodoc_typehints = "description"

# The split() examples double as doctests: `sphinx-build -b doctest docs docs/_build`.
doctest_global_setup = "from sql_split import count, has_more_than_one, split, split_n"

intersphinx_mapping = {"python": ("https://docs.python.org/3", None)}

html_theme = "furo"
exclude_patterns = ["_build"]
