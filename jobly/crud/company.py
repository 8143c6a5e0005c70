"""
CRUD operations for companies.

Every statement is parameterized SQL run through `query`; rows come back
as dicts keyed by the API's camelCase field names.
"""

from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.database import query
from jobly.core.exceptions import BadRequestError, NotFoundError
from jobly.helpers.sql import sql_for_partial_update

COMPANY_COLUMNS = ('handle, name, description, '
                   'num_employees AS "numEmployees", logo_url AS "logoUrl"')

FIELD_NAME_MAP = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


def create(db: Session, data: dict) -> dict:
    """
    Create a company.

    Args:
        db: Database session
        data: {handle, name, description, numEmployees, logoUrl}

    Returns:
        The created company

    Raises:
        BadRequestError: If the handle or name is already taken
    """
    duplicate_check = query(
        db,
        "SELECT handle FROM companies WHERE handle = $1 OR name = $2",
        [data["handle"], data["name"]],
    ).first()
    if duplicate_check:
        raise BadRequestError(f"Duplicate company: {data['handle']}")

    row = query(
        db,
        f"""INSERT INTO companies
            (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {COMPANY_COLUMNS}""",
        [
            data["handle"],
            data["name"],
            data.get("description"),
            data.get("numEmployees"),
            data.get("logoUrl"),
        ],
    ).mappings().first()
    db.commit()

    return dict(row)


def find_all(
    db: Session,
    name: Optional[str] = None,
    min_employees: Optional[int] = None,
    max_employees: Optional[int] = None
) -> List[dict]:
    """
    Find all companies, optionally filtered.

    Args:
        db: Database session
        name: Case-insensitive substring of the company name
        min_employees: Inclusive lower bound on num_employees
        max_employees: Inclusive upper bound on num_employees

    Returns:
        Companies ordered by name

    Raises:
        BadRequestError: If min_employees > max_employees
    """
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise BadRequestError("minEmployees cannot be greater than maxEmployees")

    where_expressions = []
    values = []

    if name:
        values.append(f"%{name}%")
        where_expressions.append(f"LOWER(name) LIKE LOWER(${len(values)})")

    if min_employees is not None:
        values.append(min_employees)
        where_expressions.append(f"num_employees >= ${len(values)}")

    if max_employees is not None:
        values.append(max_employees)
        where_expressions.append(f"num_employees <= ${len(values)}")

    sql = f"SELECT {COMPANY_COLUMNS} FROM companies"
    if where_expressions:
        sql += " WHERE " + " AND ".join(where_expressions)
    sql += " ORDER BY name"

    return [dict(row) for row in query(db, sql, values).mappings().all()]


def get(db: Session, handle: str) -> dict:
    """
    Get a company and its jobs.

    Raises:
        NotFoundError: If no company has this handle
    """
    row = query(
        db,
        f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = $1",
        [handle],
    ).mappings().first()

    if not row:
        raise NotFoundError(f"No company: {handle}")

    company = dict(row)
    jobs = query(
        db,
        """SELECT id, title, salary, equity
           FROM jobs
           WHERE company_handle = $1
           ORDER BY id""",
        [handle],
    ).mappings().all()
    company["jobs"] = [dict(job) for job in jobs]

    return company


def update(db: Session, handle: str, data: dict) -> dict:
    """
    Partially update a company; only the fields present in `data` change.

    Args:
        db: Database session
        handle: Company to update
        data: Any of {name, description, numEmployees, logoUrl}

    Returns:
        The updated company

    Raises:
        BadRequestError: If `data` is empty or the new name is taken
        NotFoundError: If no company has this handle
    """
    set_clause, values = sql_for_partial_update(data, FIELD_NAME_MAP)
    handle_var_idx = f"${len(values) + 1}"

    try:
        row = query(
            db,
            f"""UPDATE companies
                SET {set_clause}
                WHERE handle = {handle_var_idx}
                RETURNING {COMPANY_COLUMNS}""",
            [*values, handle],
        ).mappings().first()
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"Duplicate company name: {data.get('name')}")

    if not row:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    return dict(row)


def remove(db: Session, handle: str) -> None:
    """
    Delete a company and, by cascade, its jobs.

    Raises:
        NotFoundError: If no company has this handle
    """
    row = query(
        db,
        "DELETE FROM companies WHERE handle = $1 RETURNING handle",
        [handle],
    ).first()

    if not row:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
