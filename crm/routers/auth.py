"""Authentication routes."""

import logging

from fastapi import APIRouter, Depends, status

from crm.dependencies.auth import get_current_actor, get_current_user
from crm.dependencies.services import get_auth_service
from crm.models.user import User
from crm.policies import Actor
from crm.schemas.auth import (
    AuthTokens,
    CurrentUser,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    TokenPair,
)
from crm.schemas.common import BaseResponse, SuccessResponse
from crm.schemas.user import UserResponse
from crm.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    response_model=SuccessResponse[AuthTokens],
    status_code=status.HTTP_201_CREATED,
)
async def register(
    register_request: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Register a new user and return a token pair."""

    user, token, refresh_token = await auth_service.register(register_request)

    logger.info("User registered", extra={"user_id": user.id, "email": user.email})

    return SuccessResponse(
        message="User registered successfully",
        data=AuthTokens(
            user=UserResponse.model_validate(user),
            token=token,
            refresh_token=refresh_token,
        ),
    )


@router.post("/login", response_model=SuccessResponse[AuthTokens])
async def login(
    login_request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Authenticate with email and password."""

    user, token, refresh_token = await auth_service.login(
        login_request.email, login_request.password
    )

    return SuccessResponse(
        message="Login successful",
        data=AuthTokens(
            user=UserResponse.model_validate(user),
            token=token,
            refresh_token=refresh_token,
        ),
    )


@router.post("/refresh", response_model=SuccessResponse[TokenPair])
async def refresh(
    refresh_request: RefreshTokenRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    token, refresh_token = await auth_service.refresh(refresh_request.refresh_token)

    return SuccessResponse(
        message="Token refreshed successfully",
        data=TokenPair(token=token, refresh_token=refresh_token),
    )


@router.get("/me", response_model=SuccessResponse[CurrentUser])
async def get_me(
    actor: Actor = Depends(get_current_actor),
    current_user: User | None = Depends(get_current_user),
):
    """Return the caller together with their effective permissions."""

    return SuccessResponse(
        data=CurrentUser(
            user=UserResponse.model_validate(current_user),
            permissions=sorted(actor.permissions),
        )
    )


@router.post("/logout", response_model=BaseResponse)
async def logout(actor: Actor = Depends(get_current_actor)):
    # Tokens are stateless; the client discards them
    logger.info("User logged out", extra={"user_id": actor.id})
    return BaseResponse(message="Logged out successfully")
