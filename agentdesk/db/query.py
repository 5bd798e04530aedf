"""SQL fragment builders for parameterized queries.

Values are always bound as parameters. Column names are interpolated, so
callers must only pass column names from a trusted whitelist.
"""

from typing import Any


def build_where_clause(conditions: dict[str, Any]) -> tuple[str, list[Any]]:
    """Build a WHERE clause from equality conditions.

    Args:
        conditions: Column name to value. None values are skipped.

    Returns:
        Tuple of (clause, params). Clause is ``1=1`` when nothing applies.
    """
    fragments = []
    params: list[Any] = []

    for key, value in conditions.items():
        if value is None:
            continue
        fragments.append(f"{key} = ?")
        params.append(value)

    if not fragments:
        return "1=1", []

    return " AND ".join(fragments), params


def build_update_clause(
    data: dict[str, Any],
    exclude: set[str] | None = None
) -> tuple[str, list[Any]]:
    """Build the SET portion of an UPDATE statement.

    Args:
        data: Column name to new value. None values are skipped.
        exclude: Column names never written, whatever their value.

    Returns:
        Tuple of (clause, params). Clause is empty when nothing applies.
    """
    exclude = exclude or set()
    fragments = []
    params: list[Any] = []

    for key, value in data.items():
        if key in exclude or value is None:
            continue
        fragments.append(f"{key} = ?")
        params.append(value)

    return ", ".join(fragments), params
