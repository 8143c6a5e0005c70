"""
CRUD operations for jobs.
"""

from typing import List, Optional
from sqlalchemy.orm import Session

from jobly.core.database import query
from jobly.core.exceptions import BadRequestError, NotFoundError
from jobly.helpers.sql import sql_for_partial_update

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'

# Updatable job fields share their column names
FIELD_NAME_MAP: dict = {}


def create(db: Session, data: dict) -> dict:
    """
    Create a job.

    Args:
        db: Database session
        data: {title, salary, equity, companyHandle}

    Returns:
        The created job with its id

    Raises:
        BadRequestError: If the company does not exist or already has a job with this title
    """
    title = data["title"]
    company_handle = data["companyHandle"]

    company = query(
        db,
        "SELECT handle FROM companies WHERE handle = $1",
        [company_handle],
    ).first()
    if not company:
        raise BadRequestError(f"No company: {company_handle}")

    duplicate_check = query(
        db,
        "SELECT id FROM jobs WHERE title = $1 AND company_handle = $2",
        [title, company_handle],
    ).first()
    if duplicate_check:
        raise BadRequestError(f"Duplicate job: {title} at {company_handle}")

    row = query(
        db,
        f"""INSERT INTO jobs
            (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {JOB_COLUMNS}""",
        [title, data.get("salary"), data.get("equity"), company_handle],
    ).mappings().first()
    db.commit()

    return dict(row)


def find_all(
    db: Session,
    title: Optional[str] = None,
    min_salary: Optional[int] = None,
    has_equity: bool = False
) -> List[dict]:
    """
    Find all jobs, optionally filtered.

    Args:
        db: Database session
        title: Case-insensitive substring of the job title
        min_salary: Inclusive lower bound on salary
        has_equity: If True, only jobs with non-zero equity

    Returns:
        Jobs ordered by title
    """
    where_expressions = []
    values = []

    if title:
        values.append(f"%{title}%")
        where_expressions.append(f"LOWER(title) LIKE LOWER(${len(values)})")

    if min_salary is not None:
        values.append(min_salary)
        where_expressions.append(f"salary >= ${len(values)}")

    if has_equity:
        where_expressions.append("equity > 0")

    sql = f"SELECT {JOB_COLUMNS} FROM jobs"
    if where_expressions:
        sql += " WHERE " + " AND ".join(where_expressions)
    sql += " ORDER BY title"

    return [dict(row) for row in query(db, sql, values).mappings().all()]


def get(db: Session, job_id: int) -> dict:
    """
    Retrieve a job by its ID.

    Raises:
        NotFoundError: If the job does not exist
    """
    row = query(
        db,
        f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = $1",
        [job_id],
    ).mappings().first()

    if not row:
        raise NotFoundError(f"No job: {job_id}")

    return dict(row)


def update(db: Session, job_id: int, data: dict) -> dict:
    """
    Partially update a job; only the fields present in `data` change.

    Args:
        db: Database session
        job_id: Job to update
        data: Any of {title, salary, equity}

    Returns:
        The updated job

    Raises:
        BadRequestError: If `data` is empty
        NotFoundError: If the job does not exist
    """
    set_clause, values = sql_for_partial_update(data, FIELD_NAME_MAP)
    id_var_idx = f"${len(values) + 1}"

    row = query(
        db,
        f"""UPDATE jobs
            SET {set_clause}
            WHERE id = {id_var_idx}
            RETURNING {JOB_COLUMNS}""",
        [*values, job_id],
    ).mappings().first()

    if not row:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    return dict(row)


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job by ID.

    Raises:
        NotFoundError: If the job does not exist
    """
    row = query(db, "DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id]).first()

    if not row:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
