"""
User management endpoints.

Admins manage every account; other users may only read, update and delete
their own account and apply to jobs as themselves.
"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import ensure_admin, ensure_correct_user_or_admin
from jobly.core.security import create_token
from jobly.crud import user as user_crud
from jobly.schemas.user import (
    UserCreatedEnvelope,
    UserDetailEnvelope,
    UserEnvelope,
    UserListEnvelope,
    UserNewRequest,
    UserUpdateRequest,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=UserCreatedEnvelope,
             dependencies=[Depends(ensure_admin)])
def create_user(
    request: UserNewRequest,
    db: Session = Depends(get_db)
):
    """
    Add a new user, possibly an admin. This is not the registration endpoint.

    Returns the user and a token for them.

    Authorization required: admin
    """
    user = user_crud.register(db, request.changes())
    logger.info(f"Admin created user {user['username']} (admin: {user['isAdmin']})")
    return {"user": user, "token": create_token(user)}


@router.get("/", response_model=UserListEnvelope, dependencies=[Depends(ensure_admin)])
def list_users(db: Session = Depends(get_db)):
    """Authorization required: admin"""
    return {"users": user_crud.find_all(db)}


@router.get("/{username}", response_model=UserDetailEnvelope,
            dependencies=[Depends(ensure_correct_user_or_admin)])
def get_user(username: str, db: Session = Depends(get_db)):
    """
    Get a user and the ids of the jobs they applied to.

    Authorization required: same user or admin
    """
    return {"user": user_crud.get(db, username)}


@router.patch("/{username}", response_model=UserEnvelope,
              dependencies=[Depends(ensure_correct_user_or_admin)])
def update_user(
    username: str,
    request: UserUpdateRequest,
    db: Session = Depends(get_db)
):
    """
    Update a user. Fields: { firstName, lastName, password, email }

    Authorization required: same user or admin
    """
    user = user_crud.update(db, username, request.changes())
    logger.info(f"Updated user {username}")
    return {"user": user}


@router.delete("/{username}", dependencies=[Depends(ensure_correct_user_or_admin)])
def delete_user(username: str, db: Session = Depends(get_db)):
    """Authorization required: same user or admin"""
    user_crud.remove(db, username)
    logger.info(f"Deleted user {username}")
    return {"deleted": username}


@router.post("/{username}/jobs/{job_id}", status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(ensure_correct_user_or_admin)])
def apply_to_job(username: str, job_id: int, db: Session = Depends(get_db)):
    """
    Apply to a job on behalf of a user.

    Authorization required: same user or admin
    """
    user_crud.apply_to_job(db, username, job_id)
    logger.info(f"User {username} applied to job {job_id}")
    return {"applied": job_id}
