"""Authentication service."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from crm.models.base import utcnow
from crm.models.user import User
from crm.schemas.auth import RegisterRequest
from crm.utils.exceptions import AuthenticationError, EmailAlreadyExistsError
from crm.utils.security import hash_password, verify_password

from .jwt_service import JWTService
from .user_service import UserService

logger = logging.getLogger(__name__)


class AuthService:
    """Service for registration, login and token handling."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.jwt_service = JWTService()
        self.user_service = UserService(db)

    def issue_tokens(self, user: User) -> tuple[str, str]:
        """Create an access/refresh token pair for a user."""
        access_token = self.jwt_service.create_access_token(user.id, user.email)
        refresh_token = self.jwt_service.create_refresh_token(user.id)
        return access_token, refresh_token

    async def register(self, data: RegisterRequest) -> tuple[User, str, str]:
        """Register a new user without roles."""

        if await self.user_service.get_user_by_email(data.email):
            raise EmailAlreadyExistsError()

        user = User(
            email=data.email,
            password_hash=hash_password(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
            phone=data.phone,
        )
        self.db.add(user)
        await self.db.commit()

        logger.info(f"New user registered: {user.email}", extra={"user_id": user.id})

        user = await self.user_service.get_user(user.id)
        return (user, *self.issue_tokens(user))

    async def login(self, email: str, password: str) -> tuple[User, str, str]:
        """Authenticate with email and password."""

        user = await self.user_service.get_user_by_email(email)
        if not user:
            raise AuthenticationError("Invalid email or password")

        if not user.is_active:
            raise AuthenticationError("Your account has been deactivated. Contact administrator.")

        if not verify_password(password, user.password_hash):
            logger.warning(f"Failed login attempt for {email}", extra={"email": email})
            raise AuthenticationError("Invalid email or password")

        user.last_login = utcnow()
        await self.db.commit()

        logger.info(f"User logged in: {email}", extra={"user_id": user.id})

        user = await self.user_service.get_user(user.id)
        return (user, *self.issue_tokens(user))

    async def refresh(self, refresh_token: str) -> tuple[str, str]:
        """Exchange a valid refresh token for a new token pair."""

        payload = self.jwt_service.decode_refresh_token(refresh_token)
        user = await self.authenticate_user_id(payload["sub"])
        return self.issue_tokens(user)

    async def authenticate_token(self, token: str) -> User:
        """Resolve a bearer access token to an active user."""

        payload = self.jwt_service.decode_access_token(token)
        return await self.authenticate_user_id(payload["sub"])

    async def authenticate_user_id(self, user_id: str) -> User:
        user = await self.user_service.get_user(user_id)

        if not user:
            raise AuthenticationError("User not found. Invalid token.")

        if not user.is_active:
            raise AuthenticationError("User account is deactivated.")

        return user
