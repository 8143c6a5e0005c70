"""
Authentication endpoints.

- POST /token: Exchange username/password for a JWT
- POST /register: Create a (non-admin) account and receive a JWT
"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.security import create_token
from jobly.crud import user as user_crud
from jobly.schemas.user import TokenResponse, UserLoginRequest, UserRegisterRequest

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def get_token(
    request: UserLoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate a user and return a JWT for further requests.

    Authorization required: none
    """
    user = user_crud.authenticate(db, request.username, request.password)
    logger.info(f"User logged in: {user['username']}")
    return {"token": create_token(user)}


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=TokenResponse)
def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user. Self-registered users are never admins.

    Authorization required: none
    """
    new_user = user_crud.register(db, {**request.changes(), "isAdmin": False})
    logger.info(f"New user registered: {new_user['username']}")
    return {"token": create_token(new_user)}
