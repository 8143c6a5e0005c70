"""
FastAPI dependencies for authentication and authorization.

`get_current_user` never fails: a missing or bad token means an anonymous
caller. The `ensure_*` dependencies then decide what that caller may do.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from pydantic import ValidationError

from jobly.core.exceptions import ForbiddenError, UnauthorizedError
from jobly.core.security import decode_token
from jobly.schemas.user import CurrentUser

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>); optional
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[CurrentUser]:
    """
    Identify the caller from the Bearer token, if one is present and valid.

    Returns None for anonymous callers, including those sending a token
    that fails verification.
    """
    if not credentials:
        return None

    try:
        payload = decode_token(credentials.credentials)
        return CurrentUser.model_validate(payload)
    except (JWTError, ValidationError) as e:
        logger.warning(f"Ignoring invalid token: {e}")
        return None


def ensure_logged_in(
    user: Optional[CurrentUser] = Depends(get_current_user),
) -> CurrentUser:
    """
    Require a logged-in caller.

    Raises:
        UnauthorizedError: If the caller is anonymous
    """
    if user is None:
        raise UnauthorizedError()
    return user


def ensure_admin(
    user: Optional[CurrentUser] = Depends(get_current_user),
) -> CurrentUser:
    """
    Require an admin caller.

    Raises:
        UnauthorizedError: If the caller is anonymous
        ForbiddenError: If the caller is not an admin
    """
    if user is None:
        raise UnauthorizedError()
    if not user.is_admin:
        raise ForbiddenError("You must be an admin to access this.")
    return user


def ensure_correct_user_or_admin(
    username: str,
    user: Optional[CurrentUser] = Depends(get_current_user),
) -> CurrentUser:
    """
    Require the user named in the `username` path parameter, or an admin.

    Runs before any lookup, so non-admins get 403 for other usernames
    whether or not they exist.

    Raises:
        UnauthorizedError: If the caller is anonymous
        ForbiddenError: If the caller is neither that user nor an admin
    """
    if user is None:
        raise UnauthorizedError()
    if not (user.is_admin or user.username == username):
        raise ForbiddenError("You are not authorized.")
    return user
