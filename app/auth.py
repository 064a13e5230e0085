# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Clarity - Mood Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.models.database import SessionLocal
from app.models.user import User
from app.repositories.user_repository import SqlAlchemyUserRepository
from app.services.token_service import TokenService
from app.services.user_store import UserStore

bearer_scheme = HTTPBearer(auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_user_store(db: Session = Depends(get_db)) -> UserStore:
    return UserStore(SqlAlchemyUserRepository(db))


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> int:
    token = credentials.credentials if credentials else None
    return tokens.validate(token)


def get_current_user(
    user_id: int = Depends(get_current_user_id),
    users: UserStore = Depends(get_user_store),
) -> User:
    # 404 when the token outlived its account
    return users.get_by_id(user_id)
