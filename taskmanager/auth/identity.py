"""
Identity verification: registration and login.
"""

from __future__ import annotations

import logging
import secrets

from pydantic import BaseModel

from taskmanager.auth.jwt import TokenIssuer
from taskmanager.auth.passwords import PasswordHasher
from taskmanager.core.errors import (
    ConfigurationError,
    DuplicateEmailError,
    DuplicateIdentifierError,
    InvalidCredentialsError,
)
from taskmanager.core.models import Role, User, UserSummary
from taskmanager.core.validation import (
    ensure_valid,
    validate_login,
    validate_registration,
)
from taskmanager.storage.repositories import UserRepository

logger = logging.getLogger(__name__)


class LoginResult(BaseModel):
    """Successful login: the bearer token plus the public user summary."""
    token: str
    type: str = "Bearer"
    expires_in: int  # seconds
    user: UserSummary


class IdentityVerifier:
    """
    Registers users and verifies identifier + secret pairs.
    
    Collaborators are passed in; nothing is looked up globally.
    """
    
    def __init__(self, users: UserRepository, hasher: PasswordHasher, issuer: TokenIssuer):
        self.users = users
        self.hasher = hasher
        self.issuer = issuer
        # Compared against when the identifier is unknown, so both failure
        # paths do the same hashing work.
        self._dummy_hash = hasher.hash(secrets.token_urlsafe(16))
    
    async def register(self, identifier: str, email: str, secret: str) -> UserSummary:
        """
        Create a USER account.
        
        Raises:
            ValidationError: malformed input
            DuplicateIdentifierError: identifier already taken
            DuplicateEmailError: email already registered
        """
        ensure_valid(validate_registration(identifier, email, secret))
        user = await self._create_user(identifier, email, secret, Role.USER)
        logger.info("User registered successfully: %s", identifier)
        return user.summary()
    
    async def ensure_admin(self, identifier: str, email: str, secret: str) -> UserSummary:
        """
        Create the bootstrap admin if it does not exist yet.
        
        An existing ADMIN with this identifier is left untouched.
        
        Raises:
            ConfigurationError: the identifier belongs to a non-admin account
        """
        existing = await self.users.find_by_identifier(identifier)
        if existing:
            if existing.role != Role.ADMIN:
                logger.error(
                    "Bootstrap admin %s is taken by an account with role %s",
                    identifier, existing.role.value,
                )
                raise ConfigurationError(
                    f"ADMIN_IDENTIFIER '{identifier}' belongs to a non-admin account"
                )
            return existing.summary()
        ensure_valid(validate_registration(identifier, email, secret))
        user = await self._create_user(identifier, email, secret, Role.ADMIN)
        logger.info("Bootstrap admin created: %s", identifier)
        return user.summary()
    
    async def _create_user(self, identifier: str, email: str, secret: str, role: Role) -> User:
        password_hash = self.hasher.hash(secret)
        
        # Uniqueness checks and the insert commit as one unit.
        async with self.users.transaction():
            if await self.users.exists_by_identifier(identifier):
                logger.warning("Registration failed - username already taken: %s", identifier)
                raise DuplicateIdentifierError()
            
            if await self.users.exists_by_email(email):
                logger.warning("Registration failed - email already registered: %s", email)
                raise DuplicateEmailError()
            
            user = User(
                identifier=identifier,
                email=email.lower(),
                password_hash=password_hash,
                role=role,
            )
            await self.users.save(user)
        
        return user
    
    async def authenticate(self, identifier: str, secret: str) -> User:
        """
        Check an identifier + secret pair.
        
        Unknown identifier and wrong secret raise the same error.
        """
        ensure_valid(validate_login(identifier, secret))
        
        user = await self.users.find_by_identifier(identifier)
        if not user:
            self.hasher.verify(secret, self._dummy_hash)
            logger.warning("Login failed - user not found: %s", identifier)
            raise InvalidCredentialsError()
        
        if not self.hasher.verify(secret, user.password_hash):
            logger.warning("Login failed - bad password for user: %s", identifier)
            raise InvalidCredentialsError()
        
        return user
    
    async def login(self, identifier: str, secret: str) -> LoginResult:
        """Authenticate and issue a session token."""
        user = await self.authenticate(identifier, secret)
        token = self.issuer.issue(user.identifier, user.role)
        logger.info("Login successful for user: %s", identifier)
        return LoginResult(
            token=token,
            expires_in=self.issuer.expires_in,
            user=user.summary(),
        )
