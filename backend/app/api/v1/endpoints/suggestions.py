"""Suggestion API 엔드포인트

회의록에서 추출한 태스크 제안 생성/조회/승인/거절.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_current_user, get_settings_cache, handle_service_error
from app.core.database import get_db
from app.infrastructure.cache.settings_cache import SettingsCache
from app.models.user import User
from app.schemas import ErrorResponse
from app.schemas.suggestion import (
    ApproveSuggestionRequest,
    PendingSuggestionResponse,
    RejectSuggestionRequest,
    RejectSuggestionResponse,
    SuggestionResponse,
)
from app.schemas.task import TaskResponse
from app.services.suggestion_service import SuggestionService

router = APIRouter(prefix="/suggestions", tags=["Suggestions"])

# meetings 하위 리소스 라우터 (process / reprocess)
meetings_suggestions_router = APIRouter(prefix="/meetings", tags=["Meetings"])


def get_suggestion_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    settings_cache: Annotated[SettingsCache, Depends(get_settings_cache)],
) -> SuggestionService:
    return SuggestionService(db, settings_cache)


@router.get(
    "",
    response_model=list[PendingSuggestionResponse],
    summary="대기 중 제안 목록",
    description="내가 작성한 모든 회의의 대기 중(pending) 제안을 최신순으로 조회합니다.",
    responses={
        401: {"model": ErrorResponse},
    },
)
async def list_pending_suggestions(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[SuggestionService, Depends(get_suggestion_service)],
) -> list[PendingSuggestionResponse]:
    return await service.list_pending_suggestions(current_user.id)


@router.get(
    "/meetings/{meeting_id}",
    response_model=list[SuggestionResponse],
    summary="회의 제안 목록",
    description="회의의 모든 제안을 최신순으로 조회합니다.",
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def list_meeting_suggestions(
    meeting_id: UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[SuggestionService, Depends(get_suggestion_service)],
) -> list[SuggestionResponse]:
    try:
        return await service.list_meeting_suggestions(meeting_id, current_user.id)
    except ValueError as e:
        handle_service_error(e)


async def _process_meeting(
    meeting_id: UUID, current_user: User, service: SuggestionService
) -> list[SuggestionResponse]:
    try:
        return await service.process_meeting(meeting_id, current_user.id)
    except ValueError as e:
        handle_service_error(e)


@router.post(
    "/meetings/{meeting_id}/process",
    response_model=list[SuggestionResponse],
    status_code=status.HTTP_201_CREATED,
    summary="회의록 처리",
    description="회의록에서 태스크 제안을 생성합니다. 반복 호출 시 새 제안이 추가됩니다.",
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def process_meeting(
    meeting_id: UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[SuggestionService, Depends(get_suggestion_service)],
) -> list[SuggestionResponse]:
    return await _process_meeting(meeting_id, current_user, service)


@router.post(
    "/{suggestion_id}/approve",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="제안 승인",
    description="제안을 승인하고 태스크를 생성합니다. 요청 필드가 제안 내용보다 우선합니다.",
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def approve_suggestion(
    suggestion_id: UUID,
    request: ApproveSuggestionRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[SuggestionService, Depends(get_suggestion_service)],
) -> TaskResponse:
    try:
        return await service.approve_suggestion(suggestion_id, current_user.id, request)
    except ValueError as e:
        handle_service_error(e)


@router.post(
    "/{suggestion_id}/reject",
    response_model=RejectSuggestionResponse,
    summary="제안 거절",
    description="사유와 함께 제안을 거절합니다. 태스크는 생성되지 않습니다.",
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def reject_suggestion(
    suggestion_id: UUID,
    request: RejectSuggestionRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[SuggestionService, Depends(get_suggestion_service)],
) -> RejectSuggestionResponse:
    try:
        return await service.reject_suggestion(suggestion_id, current_user.id, request.reason)
    except ValueError as e:
        handle_service_error(e)


@meetings_suggestions_router.post(
    "/{meeting_id}/process",
    response_model=list[SuggestionResponse],
    status_code=status.HTTP_201_CREATED,
    summary="회의록 처리",
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def process_meeting_from_meeting(
    meeting_id: UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[SuggestionService, Depends(get_suggestion_service)],
) -> list[SuggestionResponse]:
    return await _process_meeting(meeting_id, current_user, service)


@meetings_suggestions_router.post(
    "/{meeting_id}/reprocess",
    response_model=list[SuggestionResponse],
    status_code=status.HTTP_201_CREATED,
    summary="회의록 재처리",
    description="기존 제안은 유지한 채 새 제안을 추가로 생성합니다.",
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def reprocess_meeting(
    meeting_id: UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[SuggestionService, Depends(get_suggestion_service)],
) -> list[SuggestionResponse]:
    return await _process_meeting(meeting_id, current_user, service)
