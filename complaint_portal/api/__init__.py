"""API 라우터 패키지 — 모든 엔드포인트 통합.

API Router package — Aggregates every endpoint under a single router that
``main`` mounts at ``/api``.

Included routers:
    - auth: 인증 및 사용자 관리 (Authentication and user management)
    - complaints: 민원 생명주기 (Complaint lifecycle)
    - uploads: 첨부파일 업로드 (Attachment uploads)
"""

from fastapi import APIRouter

from complaint_portal.api.auth import router as auth_router
from complaint_portal.api.complaints import router as complaints_router
from complaint_portal.api.uploads import router as uploads_router

api_router: APIRouter = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Auth"])
api_router.include_router(complaints_router, prefix="/complaints", tags=["Complaints"])
api_router.include_router(uploads_router, prefix="/uploads", tags=["Uploads"])
