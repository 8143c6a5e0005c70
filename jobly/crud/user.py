"""
CRUD operations for users and their job applications.

Passwords are stored as bcrypt hashes and never returned.
"""

import logging
from typing import List
from sqlalchemy.orm import Session

from jobly.core.database import query
from jobly.core.exceptions import BadRequestError, NotFoundError, UnauthorizedError
from jobly.core.security import get_password_hash, verify_password
from jobly.helpers.sql import sql_for_partial_update

logger = logging.getLogger(__name__)

USER_COLUMNS = ('username, first_name AS "firstName", last_name AS "lastName", '
                'email, is_admin AS "isAdmin"')

FIELD_NAME_MAP = {
    "firstName": "first_name",
    "lastName": "last_name",
}


def authenticate(db: Session, username: str, password: str) -> dict:
    """
    Check a username/password pair.

    Returns:
        The user (without password)

    Raises:
        UnauthorizedError: If the user is missing or the password is wrong
    """
    row = query(
        db,
        f"SELECT {USER_COLUMNS}, password FROM users WHERE username = $1",
        [username],
    ).mappings().first()

    if row and verify_password(password, row["password"]):
        user = dict(row)
        del user["password"]
        return user

    logger.warning(f"Failed login for username {username!r}")
    raise UnauthorizedError("Invalid username/password")


def register(db: Session, data: dict) -> dict:
    """
    Create a user with a hashed password.

    Args:
        db: Database session
        data: {username, password, firstName, lastName, email, isAdmin}

    Returns:
        The created user (without password)

    Raises:
        BadRequestError: If the username is taken
    """
    username = data["username"]

    duplicate_check = query(
        db,
        "SELECT username FROM users WHERE username = $1",
        [username],
    ).first()
    if duplicate_check:
        raise BadRequestError(f"Duplicate username: {username}")

    row = query(
        db,
        f"""INSERT INTO users
            (username, password, first_name, last_name, email, is_admin)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {USER_COLUMNS}""",
        [
            username,
            get_password_hash(data["password"]),
            data["firstName"],
            data["lastName"],
            data["email"],
            bool(data.get("isAdmin", False)),
        ],
    ).mappings().first()
    db.commit()

    return dict(row)


def _applied_job_ids(db: Session) -> dict:
    applications = query(
        db,
        "SELECT username, job_id FROM applications ORDER BY job_id",
    ).all()

    job_ids = {}
    for username, job_id in applications:
        job_ids.setdefault(username, []).append(job_id)
    return job_ids


def find_all(db: Session) -> List[dict]:
    """
    Find all users, each with the ids of the jobs they applied to.

    Returns:
        Users ordered by username
    """
    rows = query(
        db,
        f"SELECT {USER_COLUMNS} FROM users ORDER BY username",
    ).mappings().all()

    job_ids = _applied_job_ids(db)
    return [
        {**row, "jobs": job_ids.get(row["username"], [])}
        for row in rows
    ]


def get(db: Session, username: str) -> dict:
    """
    Get a user and the ids of the jobs they applied to.

    Raises:
        NotFoundError: If the user does not exist
    """
    row = query(
        db,
        f"SELECT {USER_COLUMNS} FROM users WHERE username = $1",
        [username],
    ).mappings().first()

    if not row:
        raise NotFoundError(f"No user: {username}")

    applications = query(
        db,
        "SELECT job_id FROM applications WHERE username = $1 ORDER BY job_id",
        [username],
    ).scalars().all()

    return {**row, "jobs": list(applications)}


def update(db: Session, username: str, data: dict) -> dict:
    """
    Partially update a user; only the fields present in `data` change.

    A new password is hashed before it is stored.

    Args:
        db: Database session
        username: User to update
        data: Any of {firstName, lastName, password, email}

    Returns:
        The updated user (without password)

    Raises:
        BadRequestError: If `data` is empty
        NotFoundError: If the user does not exist
    """
    data = dict(data)
    if data.get("password"):
        data["password"] = get_password_hash(data["password"])

    set_clause, values = sql_for_partial_update(data, FIELD_NAME_MAP)
    username_var_idx = f"${len(values) + 1}"

    row = query(
        db,
        f"""UPDATE users
            SET {set_clause}
            WHERE username = {username_var_idx}
            RETURNING {USER_COLUMNS}""",
        [*values, username],
    ).mappings().first()

    if not row:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    db.commit()
    return dict(row)


def remove(db: Session, username: str) -> None:
    """
    Delete a user and their applications.

    Raises:
        NotFoundError: If the user does not exist
    """
    row = query(
        db,
        "DELETE FROM users WHERE username = $1 RETURNING username",
        [username],
    ).first()

    if not row:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    db.commit()


def apply_to_job(db: Session, username: str, job_id: int) -> None:
    """
    Record that a user applied to a job.

    Raises:
        NotFoundError: If the job or the user does not exist
        BadRequestError: If the user already applied to this job
    """
    job = query(db, "SELECT id FROM jobs WHERE id = $1", [job_id]).first()
    if not job:
        raise NotFoundError(f"No job: {job_id}")

    user = query(db, "SELECT username FROM users WHERE username = $1", [username]).first()
    if not user:
        raise NotFoundError(f"No user: {username}")

    duplicate_check = query(
        db,
        "SELECT job_id FROM applications WHERE username = $1 AND job_id = $2",
        [username, job_id],
    ).first()
    if duplicate_check:
        raise BadRequestError(f"Already applied to job {job_id}")

    query(
        db,
        "INSERT INTO applications (username, job_id) VALUES ($1, $2)",
        [username, job_id],
    )
    db.commit()
