"""Authentication router for user registration and login."""

import logging

from fastapi import APIRouter, status

from storefront.domain.shared import DomainException, InternalError
from storefront.presentation.api.dependencies import AuthService, DBSession
from storefront.presentation.api.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from storefront_auth import AuthError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User registered successfully"},
        400: {"description": "User already exists or invalid input"},
        500: {"description": "Server error"},
    },
)
async def register(
    request: RegisterRequest,
    auth_service: AuthService,
    session: DBSession,
) -> RegisterResponse:
    """
    Register a new account.

    Returns an access token for the new user.
    """
    try:
        _, token = await auth_service.register(
            username=request.username,
            email=request.email,
            password=request.password,
        )
        await session.commit()
    except (DomainException, AuthError):
        await session.rollback()
        raise
    except Exception as e:
        await session.rollback()
        raise InternalError(cause=e) from e

    return RegisterResponse(message="User registered successfully", token=token)


@router.post(
    "/login",
    summary="Authenticate user",
    responses={
        200: {"description": "Login successful"},
        400: {"description": "Invalid credentials"},
        500: {"description": "Server error"},
    },
)
async def login(
    request: LoginRequest,
    auth_service: AuthService,
) -> LoginResponse:
    """
    Authenticate with email and password.

    Unknown email and wrong password give the same response.
    """
    try:
        user, token = await auth_service.login(
            email=request.email,
            password=request.password,
        )
    except (DomainException, AuthError):
        raise
    except Exception as e:
        raise InternalError(cause=e) from e

    return LoginResponse(message="Login successful", token=token, username=user.username)
