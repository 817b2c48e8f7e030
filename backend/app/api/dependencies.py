"""공유 API dependencies - 엔드포인트 간 중복 제거"""

from functools import lru_cache
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import get_db
from app.core.security import decode_token
from app.infrastructure.cache.settings_cache import SettingsCache
from app.models.user import User
from app.schemas.common import ErrorDetail

security = HTTPBearer()


# ===== Auth Dependencies =====


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """현재 사용자 조회 (토큰 발급은 외부 인증 서비스 담당)"""
    invalid_token = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=ErrorDetail(error="INVALID_TOKEN", message="Invalid or expired token").model_dump(),
    )

    payload = decode_token(credentials.credentials)
    if not payload or payload.get("type") != "access":
        raise invalid_token

    try:
        user_id = UUID(payload.get("sub", ""))
    except ValueError:
        raise invalid_token

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise invalid_token
    return user


# ===== Shared Infrastructure =====


@lru_cache
def get_settings_cache() -> SettingsCache:
    """settings 레코드 캐시 (프로세스 단위 공유, 테스트에서 override)"""
    return SettingsCache(ttl_seconds=get_settings().settings_cache_ttl_seconds)


# ===== Service Error Handling =====

# 서비스 레이어에서 발생하는 에러 코드와 HTTP 응답 매핑
# (status_code, error_code, message)
SERVICE_ERROR_MAPPING: dict[str, tuple[int, str, str]] = {
    # 조회
    "MEETING_NOT_FOUND": (404, "NOT_FOUND", "Meeting not found"),
    "SUGGESTION_NOT_FOUND": (404, "NOT_FOUND", "Suggestion not found"),
    # 권한
    "MEETING_ACCESS_DENIED": (403, "FORBIDDEN", "You do not have access to this meeting"),
    "SUGGESTION_ACCESS_DENIED": (403, "FORBIDDEN", "You do not have access to this suggestion"),
    # 검증
    "REJECTION_REASON_REQUIRED": (400, "VALIDATION_ERROR", "Rejection reason is required"),
    # 상태 전이
    "SUGGESTION_ALREADY_REVIEWED": (409, "CONFLICT", "Suggestion has already been reviewed"),
}


def handle_service_error(error: ValueError, default_message: str = "Validation error") -> None:
    """서비스 레이어 에러를 HTTPException으로 변환

    Args:
        error: 서비스에서 발생한 ValueError (에러 코드가 str로 전달됨)
        default_message: 매핑되지 않은 에러의 기본 메시지

    Raises:
        HTTPException: 매핑된 HTTP 에러 응답
    """
    error_code = str(error)

    if error_code in SERVICE_ERROR_MAPPING:
        status_code, code, message = SERVICE_ERROR_MAPPING[error_code]
        raise HTTPException(
            status_code=status_code,
            detail=ErrorDetail(error=code, message=message).model_dump(),
        )

    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=ErrorDetail(error="VALIDATION_ERROR", message=default_message).model_dump(),
    )
