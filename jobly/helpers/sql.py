"""
SQL helpers for the data-access layer.

Column names cannot be bound as query parameters, so partial updates
interpolate double-quoted column names into the statement text and bind
only the values. Field-name maps passed here must be fixed, code-defined
tables; callers restrict the update keys through schema validation first.
"""

from typing import Mapping, NamedTuple, Tuple, Union

from jobly.core.exceptions import BadRequestError

SqlValue = Union[str, int, float, bool, None]


class SqlFragment(NamedTuple):
    """SET-clause text plus the values bound to its positional placeholders."""
    set_clause: str
    values: Tuple[SqlValue, ...]


def sql_for_partial_update(
    changes: Mapping[str, SqlValue],
    field_name_map: Mapping[str, str]
) -> SqlFragment:
    """
    Build the SET clause of a partial UPDATE.

    Args:
        changes: Logical field name -> new value, e.g. {"firstName": "Aliya", "age": 32}.
            Iteration order decides placeholder numbering.
        field_name_map: Logical field name -> column name, e.g. {"firstName": "first_name"}.
            Keys missing from the map are used as column names verbatim.

    Returns:
        SqlFragment('"first_name"=$1, "age"=$2', ("Aliya", 32))

    Raises:
        BadRequestError: If `changes` is empty
    """
    keys = list(changes)
    if not keys:
        raise BadRequestError("No data")

    # {"firstName": "Aliya", "age": 32} => ['"first_name"=$1', '"age"=$2']
    cols = [
        f'"{field_name_map.get(key) or key}"=${idx}'
        for idx, key in enumerate(keys, start=1)
    ]

    return SqlFragment(
        set_clause=", ".join(cols),
        values=tuple(changes[key] for key in keys),
    )
