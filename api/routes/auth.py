"""
Login Endpoint

Checks credentials against the demo accounts and hands back the user
record with a session token.
"""

import logging

from fastapi import APIRouter, HTTPException, status

from api.models import ErrorResponse, LoginRequest, LoginResponse, UserModel
from core.auth import authenticate, new_session_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid credentials"}},
    summary="Log in",
    description="Accepts `admin/admin123` or `operator/operator123`. Any other pair returns 401."
)
async def login(credentials: LoginRequest):
    """Log in with a demo account."""
    user = authenticate(credentials.username, credentials.password)

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password"
        )

    return LoginResponse(user=UserModel(**user.to_dict()), token=new_session_token())
