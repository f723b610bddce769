"""민원 라우터 — 민원 등록, 조회, 상태 변경, 배정, 피드백, 통계 API.

Complaint Router — HTTP surface over ComplaintService.
Every handler resolves the actor, calls the service, commits, and wraps the
result in the ``{success, message, ...}`` envelope.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from complaint_portal.api.deps import get_current_actor
from complaint_portal.database import get_db
from complaint_portal.schemas.actor import Actor
from complaint_portal.schemas.complaint import (
    AssignRequest,
    ComplaintCreate,
    FeedbackRequest,
    StatusUpdateRequest,
)
from complaint_portal.services.complaint_service import complaint_service

router: APIRouter = APIRouter()


@router.post("", status_code=201)
async def create_complaint(
    data: ComplaintCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_actor: Annotated[Actor, Depends(get_current_actor)],
) -> dict:
    """민원 등록. User 역할만 가능."""
    complaint = await complaint_service.create(db, current_actor, data)
    await db.commit()
    return {
        "success": True,
        "message": "Complaint submitted successfully",
        "complaint": await complaint_service.build_response(db, complaint),
    }


@router.get("")
async def list_complaints(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_actor: Annotated[Actor, Depends(get_current_actor)],
    status: str | None = Query(None),
    category: str | None = Query(None),
    priority: str | None = Query(None),
    search: str | None = Query(None),
    page: str | None = Query(None),
    limit: str | None = Query(None),
) -> dict:
    """역할 범위 민원 목록. page/limit 는 서비스에서 정규화."""
    result = await complaint_service.list_complaints(
        db,
        current_actor,
        {
            "status": status,
            "category": category,
            "priority": priority,
            "search": search,
            "page": page,
            "limit": limit,
        },
    )
    return {
        "success": True,
        "message": "Complaints retrieved successfully",
        "complaints": result.items,
        "pagination": result.pagination(),
    }


@router.get("/stats/overview")
async def get_complaint_stats(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_actor: Annotated[Actor, Depends(get_current_actor)],
) -> dict:
    """관리자 통계. Admin만 가능."""
    stats = await complaint_service.get_stats(db, current_actor)
    return {"success": True, "message": "Statistics retrieved successfully", "stats": stats}


@router.get("/{complaint_id}")
async def get_complaint(
    complaint_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_actor: Annotated[Actor, Depends(get_current_actor)],
) -> dict:
    complaint = await complaint_service.get_by_id(db, current_actor, complaint_id)
    return {
        "success": True,
        "message": "Complaint retrieved successfully",
        "complaint": await complaint_service.build_response(db, complaint),
    }


@router.patch("/{complaint_id}/status")
async def update_complaint_status(
    complaint_id: int,
    data: StatusUpdateRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_actor: Annotated[Actor, Depends(get_current_actor)],
) -> dict:
    """상태 변경. 배정된 Staff 또는 Admin."""
    complaint = await complaint_service.update_status(
        db, current_actor, complaint_id, data.status, data.resolution_notes
    )
    await db.commit()
    return {
        "success": True,
        "message": "Complaint status updated successfully",
        "complaint": await complaint_service.build_response(db, complaint),
    }


@router.patch("/{complaint_id}/assign")
async def assign_complaint(
    complaint_id: int,
    data: AssignRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_actor: Annotated[Actor, Depends(get_current_actor)],
) -> dict:
    """담당자 배정. Admin만 가능."""
    complaint = await complaint_service.assign(db, current_actor, complaint_id, data.staff_id)
    await db.commit()
    return {
        "success": True,
        "message": "Complaint assigned successfully",
        "complaint": await complaint_service.build_response(db, complaint),
    }


@router.patch("/{complaint_id}/feedback")
async def submit_complaint_feedback(
    complaint_id: int,
    data: FeedbackRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_actor: Annotated[Actor, Depends(get_current_actor)],
) -> dict:
    """피드백 등록. 작성자 본인, Resolved 상태에서 1회."""
    complaint = await complaint_service.submit_feedback(
        db, current_actor, complaint_id, data.feedback, data.feedback_rating
    )
    await db.commit()
    return {
        "success": True,
        "message": "Feedback submitted successfully",
        "complaint": await complaint_service.build_response(db, complaint),
    }
