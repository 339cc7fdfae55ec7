"""Rendering of column constraint clauses."""

from tablewright.models.table import ColumnConstraints

# Rendering order of constraint keywords. Generated DDL depends on it.
CONSTRAINT_KEYWORDS = (
    ("not_null", "NOT NULL"),
    ("check", "CHECK"),
    ("foreign_key", "FOREIGN KEY"),
    ("unique", "UNIQUE"),
    ("primary_key", "PRIMARY KEY"),
)


def render_constraints(constraints: ColumnConstraints) -> str:
    """Return the space-joined keywords of the active constraints.

    An empty constraint set renders as an empty string.
    """
    return " ".join(
        keyword for flag, keyword in CONSTRAINT_KEYWORDS if getattr(constraints, flag)
    )
