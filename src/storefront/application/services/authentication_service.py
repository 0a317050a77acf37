"""Authentication service for user registration and login."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from storefront.domain.user import DuplicateUserError, InvalidEmailError, User
from storefront_auth import (
    InvalidCredentialsError,
    JWTService,
    PasswordHashingService,
)

if TYPE_CHECKING:
    from storefront.domain.user import UserRepository

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Application service for user authentication.

    Orchestrates storefront_auth infrastructure (password hashing, JWT
    tokens) with the User domain to provide:
    - User registration
    - Login with password

    Both operations return the user together with a freshly issued access
    token whose subject is the user's id.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
    ):
        self._user_repo = user_repository
        self._password_service = password_service
        self._jwt_service = jwt_service

    async def register(
        self,
        username: str,
        email: str,
        password: str,
    ) -> tuple[User, str]:
        existing_user = await self._user_repo.find_by_email(email)
        if existing_user is not None:
            raise DuplicateUserError(email)

        password_hash = self._password_service.hash(password)
        user = User.create(username=username, email=email, password_hash=password_hash)
        # A concurrent registration that passed the lookup above is rejected
        # by the unique email index and surfaces as DuplicateUserError here.
        await self._user_repo.save(user)

        # No welcome email is sent on registration.
        access_token = self._jwt_service.create_access_token(user_id=user.id)

        logger.info("User registered: %s", user.email)
        return user, access_token

    async def login(
        self,
        email: str,
        password: str,
    ) -> tuple[User, str]:
        try:
            user = await self._user_repo.find_by_email(email)
        except InvalidEmailError as e:
            raise InvalidCredentialsError from e
        if user is None:
            raise InvalidCredentialsError

        if not self._password_service.verify(password, user.password_hash):
            raise InvalidCredentialsError

        access_token = self._jwt_service.create_access_token(user_id=user.id)

        logger.info("User logged in: %s", user.email)
        return user, access_token
