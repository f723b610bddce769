"""공통 Pydantic 요청/응답 스키마 정의.

Common Pydantic schemas: the response envelope shared by every endpoint and
the helper that turns pydantic validation failures into the portal's
ValidationError.
"""

from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from complaint_portal.utils.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class ApiResponse(BaseModel):
    """범용 응답 봉투 — Response envelope.

    Attributes:
        success: 성공 여부 (Whether the operation succeeded)
        message: 사람이 읽을 수 있는 메시지 (Human-readable message)
    """

    success: bool = True
    message: str


def field_errors(errors: list[Any]) -> list[dict[str, Any]]:
    """pydantic 오류 → 필드별 오류 목록 — Flatten pydantic error dicts to {field, message}."""
    breakdown: list[dict[str, Any]] = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        breakdown.append({"field": ".".join(loc) or "__root__", "message": error.get("msg", "Invalid value")})
    return breakdown


def validate_input(model: type[ModelT], data: ModelT | dict[str, Any]) -> ModelT:
    """입력 검증 — Validate raw input against a schema, raising the portal ValidationError."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError("Validation failed", field_errors(exc.errors())) from exc
