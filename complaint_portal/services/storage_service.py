"""스토리지 서비스 — S3 또는 로컬 파일 저장.

Storage Service — Presigned upload URLs for complaint attachments.
AWS 키가 비어있으면 자동으로 로컬 모드로 전환됩니다.
(Falls back to local disk when no bucket credentials are configured.)

로컬 모드의 업로드 URL은 요청한 사용자와 키에 묶인 서명 토큰을 포함합니다.
Local upload URLs carry a signed token bound to the key and the requesting actor.
"""

import logging
import re
import uuid
from datetime import datetime, timezone
from pathlib import Path

import jwt

from complaint_portal.config import Settings, settings
from complaint_portal.utils.exceptions import (
    DuplicateError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from complaint_portal.utils.jwt import create_upload_token, decode_token

logger = logging.getLogger(__name__)

# 허용 MIME 타입 — Images and PDF only
ALLOWED_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "application/pdf": "pdf",
}

# folder/YYYY/MM/DD/<uuid hex>.<ext> — only keys this service generates
KEY_PATTERN: re.Pattern[str] = re.compile(
    r"^[a-z][a-z0-9_-]*/\d{4}/\d{2}/\d{2}/[0-9a-f]{32}\.(?:"
    + "|".join(sorted(set(ALLOWED_CONTENT_TYPES.values())))
    + r")$"
)

_PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent.parent


class StorageService:
    """파일 업로드 서비스 — S3 또는 로컬 모드 자동 선택."""

    def __init__(self, config: Settings) -> None:
        self.config: Settings = config
        self._client = None

    @property
    def is_local(self) -> bool:
        return not self.config.AWS_ACCESS_KEY_ID or not self.config.AWS_S3_BUCKET

    @property
    def uploads_dir(self) -> Path:
        if self.config.LOCAL_UPLOADS_DIR:
            return Path(self.config.LOCAL_UPLOADS_DIR)
        return _PROJECT_ROOT / "uploads"

    @property
    def client(self):
        if self.is_local:
            return None
        if self._client is None:
            import boto3
            from botocore.config import Config as BotoConfig

            self._client = boto3.client(
                "s3",
                region_name=self.config.AWS_S3_REGION,
                aws_access_key_id=self.config.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=self.config.AWS_SECRET_ACCESS_KEY,
                config=BotoConfig(signature_version="s3v4"),
            )
        return self._client

    def _public_base(self) -> str:
        return self.config.PUBLIC_BASE_URL.rstrip("/")

    def _generate_key(self, content_type: str, folder: str) -> str:
        ext = ALLOWED_CONTENT_TYPES[content_type]
        date_prefix = datetime.now(timezone.utc).strftime("%Y/%m/%d")
        return f"{folder}/{date_prefix}/{uuid.uuid4().hex}.{ext}"

    def validate_key(self, key: str) -> str:
        """키 형식 검사 — Reject any key this service could not have generated."""
        if not KEY_PATTERN.fullmatch(key):
            raise ValidationError.for_field("key", "Invalid upload key")
        return key

    def _local_path(self, key: str) -> Path:
        self.validate_key(key)
        root = self.uploads_dir.resolve()
        path = (root / key).resolve()
        if not path.is_relative_to(root):
            raise ValidationError.for_field("key", "Invalid upload key")
        return path

    def file_url(self, key: str) -> str:
        if self.is_local:
            return f"{self._public_base()}/api/uploads/local/{key}"
        return f"https://{self.config.AWS_S3_BUCKET}.s3.{self.config.AWS_S3_REGION}.amazonaws.com/{key}"

    def generate_presigned_upload_url(
        self,
        filename: str,
        content_type: str,
        actor_id: int,
        folder: str = "complaints",
        expires: int = 3600,
    ) -> dict[str, str]:
        """presigned PUT URL과 최종 file URL을 반환합니다.

        Only images (jpeg, png, gif, webp) and PDF documents are accepted.
        In local mode the upload URL is signed for ``actor_id`` and expires
        after ``expires`` seconds, like an S3 presigned URL.
        """
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise ValidationError.for_field(
                "content_type", "Only images (JPEG, PNG, GIF, WebP) and PDF files are allowed"
            )
        key = self._generate_key(content_type, folder)

        if self.is_local:
            token = create_upload_token(key, actor_id, self.config, expires_seconds=expires)
            upload_url = f"{self._public_base()}/api/uploads/local/{key}?token={token}"
        else:
            upload_url = self.client.generate_presigned_url(
                "put_object",
                Params={
                    "Bucket": self.config.AWS_S3_BUCKET,
                    "Key": key,
                    "ContentType": content_type,
                },
                ExpiresIn=expires,
            )
        logger.info("storage.presigned key=%s filename=%s local=%s", key, filename, self.is_local)
        return {"upload_url": upload_url, "file_url": self.file_url(key), "key": key}

    def verify_upload_token(self, token: str | None, key: str, actor_id: int) -> None:
        """로컬 업로드 토큰 검증 — The token must be ours, unexpired, for this key and actor."""
        if not token:
            raise ForbiddenError("Upload token required")
        try:
            payload = decode_token(token, self.config)
        except jwt.ExpiredSignatureError:
            raise ForbiddenError("Upload URL has expired")
        except jwt.InvalidTokenError:
            raise ForbiddenError("Invalid upload token")
        if payload.get("type") != "upload" or payload.get("key") != key:
            raise ForbiddenError("Invalid upload token")
        if payload.get("sub") != str(actor_id):
            raise ForbiddenError("Upload URL was issued to another user")

    def save_local(self, key: str, data: bytes) -> str:
        """로컬 파일 저장 — Write an uploaded body under the uploads dir, returns its URL.

        기존 파일은 덮어쓰지 않습니다 (Existing files are never overwritten).
        """
        if len(data) > self.config.UPLOAD_MAX_BYTES:
            limit_mb = self.config.UPLOAD_MAX_BYTES // (1024 * 1024)
            raise ValidationError.for_field("file", f"File too large. Maximum size is {limit_mb}MB")
        path = self._local_path(key)
        if path.exists():
            raise DuplicateError("File already uploaded")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.info("storage.saved key=%s size=%d", key, len(data))
        return self.file_url(key)

    def local_file(self, key: str) -> Path:
        """저장된 로컬 파일 경로 — Path of a stored upload, NotFoundError when absent."""
        path = self._local_path(key)
        if not path.is_file():
            raise NotFoundError("File not found")
        return path

    def delete(self, key: str) -> None:
        """업로드 파일 삭제 — Remove a stored attachment (local file or S3 object)."""
        self.validate_key(key)
        if self.is_local:
            self.local_file(key).unlink()
        else:
            self.client.delete_object(Bucket=self.config.AWS_S3_BUCKET, Key=key)
        logger.info("storage.deleted key=%s local=%s", key, self.is_local)


storage_service: StorageService = StorageService(settings)
