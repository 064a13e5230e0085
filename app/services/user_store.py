# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Clarity - Mood Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.errors import ConflictError, InternalError, InvalidCredentialsError, NotFoundError
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.utils.passwords import PasswordHasher

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().casefold()


class UserStore:
    """Account records, email uniqueness and credential checks."""

    def __init__(self, repo: UserRepository, hasher: PasswordHasher = None):
        self.repo = repo
        self.hasher = hasher or PasswordHasher()

    def create_user(self, email: str, password: str, first_name: str, last_name: str) -> User:
        email = normalize_email(email)
        if self.repo.get_by_email(email) is not None:
            raise ConflictError("User with this email already exists")

        user = User(
            email=email,
            password_digest=self.hasher.hash(password),
            first_name=first_name,
            last_name=last_name,
        )
        try:
            user = self.repo.add(user)
        except IntegrityError as e:
            # lost a race with a concurrent signup for the same email
            raise ConflictError("User with this email already exists") from e
        except SQLAlchemyError as e:
            logger.error(f"🛑 Failed to create user: {e}", exc_info=True)
            raise InternalError("Failed to create user") from e

        logger.info(f"🆕 User {user.id} created")
        return user

    def authenticate(self, email: str, password: str) -> User:
        user = self.repo.get_by_email(normalize_email(email))
        # Unknown email and wrong password must look the same to the caller
        if user is None or not self.hasher.verify(password, user.password_digest):
            raise InvalidCredentialsError()
        return user

    def get_by_id(self, user_id: int) -> User:
        user = self.repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def get_by_email(self, email: str) -> User:
        user = self.repo.get_by_email(normalize_email(email))
        if user is None:
            raise NotFoundError("User not found")
        return user
