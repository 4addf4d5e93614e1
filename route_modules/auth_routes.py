"""
Auth Routes - registration, login and the caller's identity.
"""
from fastapi import APIRouter, Depends, Response
from auth import get_current_user
from models import RegisterRequest, LoginRequest, TokenResponse
from models_orm import UserORM
from service_modules.auth_service import AuthService, get_auth_service

router = APIRouter()


@router.post("/api/auth/register")
async def register(
    payload: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Create a client or trainer account."""
    return service.register_user(payload.model_dump())


@router.post("/api/auth/login", response_model=TokenResponse)
async def login(
    payload: LoginRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service)
):
    """Exchange credentials for a bearer token (also set as a cookie)."""
    result = service.login(payload.email, payload.password)
    response.set_cookie("access_token", result["access_token"], httponly=True, samesite="lax")
    return result


@router.post("/api/auth/logout")
async def logout(response: Response):
    response.delete_cookie("access_token")
    return {"status": "success"}


@router.get("/api/auth/me")
async def me(current_user: UserORM = Depends(get_current_user)):
    return {
        "id": current_user.id,
        "name": current_user.name,
        "email": current_user.email,
        "role": current_user.role
    }
