"""인증 라우터 — 회원가입, 로그인, 프로필 및 관리자 사용자 관리 API.

Auth Router — Registration, login, profile, and admin user management.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from complaint_portal.api.deps import get_current_actor
from complaint_portal.database import get_db
from complaint_portal.schemas.actor import Actor
from complaint_portal.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
    TokenResponse,
    UserRead,
    UserUpdate,
)
from complaint_portal.schemas.common import ApiResponse
from complaint_portal.services.auth_service import auth_service
from complaint_portal.services.user_service import user_service

router: APIRouter = APIRouter()


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(
    data: RegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """회원가입. Admin 역할은 등록 키가 필요."""
    user, token = await auth_service.register(db, data)
    await db.commit()
    return {"message": "User registered successfully", "token": token, "user": UserRead.model_validate(user)}


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    user, token = await auth_service.login(db, data)
    return {"message": "Login successful", "token": token, "user": UserRead.model_validate(user)}


@router.get("/profile")
async def get_profile(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_actor: Annotated[Actor, Depends(get_current_actor)],
) -> dict:
    user = await auth_service.get_profile(db, current_actor)
    return {"success": True, "message": "Profile retrieved successfully", "user": UserRead.model_validate(user)}


@router.patch("/profile")
async def update_profile(
    data: ProfileUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_actor: Annotated[Actor, Depends(get_current_actor)],
) -> dict:
    user = await auth_service.update_profile(db, current_actor, data)
    await db.commit()
    return {"success": True, "message": "Profile updated successfully", "user": UserRead.model_validate(user)}


@router.post("/change-password", response_model=ApiResponse)
async def change_password(
    data: ChangePasswordRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_actor: Annotated[Actor, Depends(get_current_actor)],
) -> dict:
    await auth_service.change_password(db, current_actor, data)
    await db.commit()
    return {"message": "Password changed successfully"}


@router.get("/staff")
async def list_staff(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_actor: Annotated[Actor, Depends(get_current_actor)],
) -> dict:
    """Staff 목록 (배정 대상). Admin만 가능."""
    staff = await user_service.list_staff(db, current_actor)
    return {
        "success": True,
        "message": "Staff retrieved successfully",
        "users": [UserRead.model_validate(user) for user in staff],
    }


@router.get("/all")
async def list_users(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_actor: Annotated[Actor, Depends(get_current_actor)],
) -> dict:
    users = await user_service.list_users(db, current_actor)
    return {
        "success": True,
        "message": "Users retrieved successfully",
        "users": [UserRead.model_validate(user) for user in users],
    }


@router.patch("/users/{user_id}")
async def update_user(
    user_id: int,
    data: UserUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_actor: Annotated[Actor, Depends(get_current_actor)],
) -> dict:
    """역할/부서 변경. Admin만 가능."""
    user = await user_service.update_user(db, current_actor, user_id, data)
    await db.commit()
    return {"success": True, "message": "User updated successfully", "user": UserRead.model_validate(user)}


@router.delete("/users/{user_id}", response_model=ApiResponse)
async def delete_user(
    user_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_actor: Annotated[Actor, Depends(get_current_actor)],
) -> dict:
    """사용자 삭제. Admin만 가능, 본인/다른 Admin 제외."""
    await user_service.delete_user(db, current_actor, user_id)
    await db.commit()
    return {"message": "User deleted successfully"}
