# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Clarity - Mood Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import APIRouter, Depends, Request

from app.auth import get_current_user, get_token_service, get_user_store
from app.models.user import User
from app.schemas.user_schemas import (
    AuthResponse,
    LoginRequest,
    ProfileResponse,
    SignupRequest,
    UserOut,
)
from app.services.token_service import TokenService
from app.services.user_store import UserStore
from app.utils.rate_limit_utils import auth_rate_limit, limiter

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/signup", status_code=201, response_model=AuthResponse)
@limiter.limit(auth_rate_limit)
def signup(
    request: Request,
    payload: SignupRequest,
    users: UserStore = Depends(get_user_store),
    tokens: TokenService = Depends(get_token_service),
):
    user = users.create_user(payload.email, payload.password, payload.first_name, payload.last_name)
    return {
        "message": "User created successfully",
        "token": tokens.issue(user.id),
        "user": UserOut.model_validate(user),
    }


@router.post("/login", response_model=AuthResponse)
@limiter.limit(auth_rate_limit)
def login(
    request: Request,
    payload: LoginRequest,
    users: UserStore = Depends(get_user_store),
    tokens: TokenService = Depends(get_token_service),
):
    user = users.authenticate(payload.email, payload.password)
    return {
        "message": "Login successful",
        "token": tokens.issue(user.id),
        "user": UserOut.model_validate(user),
    }


@router.get("/profile", response_model=ProfileResponse)
def profile(user: User = Depends(get_current_user)):
    return {"user": UserOut.model_validate(user)}
