"""업로드 라우터 — presigned URL 생성 + 로컬 업로드 API.

Upload Router — Presigned URLs for complaint attachments.
로컬 모드에서는 PUT 엔드포인트로 파일을 직접 받아 저장하고 GET으로 제공합니다.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse
from pydantic import BaseModel, Field

from complaint_portal.api.deps import get_current_actor
from complaint_portal.schemas.actor import Actor
from complaint_portal.services.access_policy import Operation, ensure_access
from complaint_portal.services.storage_service import storage_service
from complaint_portal.utils.exceptions import NotFoundError

router: APIRouter = APIRouter()


class PresignedUrlRequest(BaseModel):
    filename: str = Field(..., min_length=1, max_length=255)
    content_type: str


class PresignedUrlResponse(BaseModel):
    success: bool = True
    upload_url: str
    file_url: str


@router.post("/presigned-url", response_model=PresignedUrlResponse)
async def create_presigned_url(
    data: PresignedUrlRequest,
    current_actor: Annotated[Actor, Depends(get_current_actor)],
) -> dict:
    """presigned upload URL을 생성합니다 (S3 또는 로컬)."""
    result = storage_service.generate_presigned_upload_url(
        filename=data.filename,
        content_type=data.content_type,
        actor_id=current_actor.id,
    )
    return {"upload_url": result["upload_url"], "file_url": result["file_url"]}


@router.put("/local/{key:path}")
async def upload_local(
    key: str,
    request: Request,
    current_actor: Annotated[Actor, Depends(get_current_actor)],
    token: str | None = None,
) -> dict:
    """로컬 모드 전용 — 파일을 서버에 직접 저장합니다.

    The ``token`` query parameter comes from the presigned URL and must have
    been issued to the same actor for the same key.
    """
    if not storage_service.is_local:
        raise NotFoundError("Local uploads are disabled")
    storage_service.validate_key(key)
    storage_service.verify_upload_token(token, key, current_actor.id)
    body = await request.body()
    file_url = storage_service.save_local(key, body)
    return {"success": True, "file_url": file_url}


@router.get("/local/{key:path}")
async def download_local(key: str) -> FileResponse:
    """로컬 모드 전용 — 저장된 파일을 제공합니다 (Serves the stored file at its file_url)."""
    if not storage_service.is_local:
        raise NotFoundError("Local uploads are disabled")
    return FileResponse(storage_service.local_file(key))


@router.delete("/{key:path}")
async def delete_upload(
    key: str,
    current_actor: Annotated[Actor, Depends(get_current_actor)],
) -> dict:
    """업로드 파일 삭제 — Admin only."""
    ensure_access(current_actor, None, Operation.MANAGE_UPLOADS)
    storage_service.delete(key)
    return {"success": True, "message": "File deleted successfully"}
