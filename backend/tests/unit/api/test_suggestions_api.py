"""Suggestion API 엔드포인트 단위 테스트

서비스 레이어를 mock하여 라우팅, 응답 형태(camelCase), 에러 매핑을 검증하고,
마지막으로 실제 DB와 JWT 인증을 사용한 전체 흐름을 확인합니다.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from app.core.security import create_access_token
from app.schemas.common_brief import MeetingBriefResponse
from app.schemas.suggestion import (
    PendingSuggestionResponse,
    RejectSuggestionResponse,
    SuggestionResponse,
)
from app.schemas.task import TaskResponse


# ===== 자체 Fixture (DB 불필요) =====


@pytest.fixture
def mock_user():
    """DB 없는 mock User 객체"""
    user = MagicMock()
    user.id = uuid4()
    user.email = "test@example.com"
    user.name = "테스트 사용자"
    return user


@pytest.fixture
def mock_suggestion_service():
    """SuggestionService mock"""
    return AsyncMock()


@pytest.fixture
async def api_client(mock_user, mock_suggestion_service):
    """DB 독립적인 async client (인증/서비스 override)"""
    from app.api.dependencies import get_current_user
    from app.api.v1.endpoints.suggestions import get_suggestion_service
    from app.core.database import get_db
    from app.main import app

    async def mock_get_db():
        yield MagicMock()

    async def override_user():
        return mock_user

    app.dependency_overrides[get_db] = mock_get_db
    app.dependency_overrides[get_current_user] = override_user
    app.dependency_overrides[get_suggestion_service] = lambda: mock_suggestion_service

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.pop(get_db, None)
    app.dependency_overrides.pop(get_current_user, None)
    app.dependency_overrides.pop(get_suggestion_service, None)


def make_suggestion(meeting_id=None, **overrides) -> SuggestionResponse:
    data = {
        "id": uuid4(),
        "meeting_id": meeting_id or uuid4(),
        "original_text": "vendor contract renewal",
        "suggested_task": "Renew vendor contract",
        "suggested_description": None,
        "confidence_score": 0.85,
        "status": "pending",
        "created_at": datetime.now(timezone.utc),
    }
    data.update(overrides)
    return SuggestionResponse(**data)


# ===== GET /suggestions =====


@pytest.mark.asyncio
async def test_list_pending_suggestions_api(api_client, mock_suggestion_service):
    meeting_id = uuid4()
    suggestion = make_suggestion(meeting_id)
    mock_suggestion_service.list_pending_suggestions = AsyncMock(
        return_value=[
            PendingSuggestionResponse(
                **suggestion.model_dump(),
                meeting=MeetingBriefResponse(id=meeting_id, title="벤더 계약 회의"),
            )
        ]
    )

    response = await api_client.get("/api/v1/suggestions")

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["suggestedTask"] == "Renew vendor contract"
    assert data[0]["confidenceScore"] == 0.85
    assert data[0]["meeting"]["title"] == "벤더 계약 회의"


# ===== GET /suggestions/meetings/{meeting_id} =====


@pytest.mark.asyncio
async def test_list_meeting_suggestions_api(api_client, mock_suggestion_service):
    meeting_id = uuid4()
    mock_suggestion_service.list_meeting_suggestions = AsyncMock(
        return_value=[make_suggestion(meeting_id), make_suggestion(meeting_id)]
    )

    response = await api_client.get(f"/api/v1/suggestions/meetings/{meeting_id}")

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 2
    assert data[0]["meetingId"] == str(meeting_id)
    assert "originalText" in data[0]


@pytest.mark.asyncio
async def test_list_meeting_suggestions_api_forbidden(api_client, mock_suggestion_service):
    mock_suggestion_service.list_meeting_suggestions = AsyncMock(
        side_effect=ForbiddenError("MEETING_ACCESS_DENIED")
    )

    response = await api_client.get(f"/api/v1/suggestions/meetings/{uuid4()}")

    assert response.status_code == 403
    assert response.json()["detail"]["error"] == "FORBIDDEN"


# ===== POST process / reprocess =====


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path",
    [
        "/api/v1/suggestions/meetings/{meeting_id}/process",
        "/api/v1/meetings/{meeting_id}/process",
        "/api/v1/meetings/{meeting_id}/reprocess",
    ],
)
async def test_process_meeting_api(api_client, mock_suggestion_service, mock_user, path):
    """세 경로 모두 같은 처리 연산을 호출"""
    meeting_id = uuid4()
    mock_suggestion_service.process_meeting = AsyncMock(
        return_value=[make_suggestion(meeting_id) for _ in range(3)]
    )

    response = await api_client.post(path.format(meeting_id=meeting_id))

    assert response.status_code == 201
    assert len(response.json()) == 3
    mock_suggestion_service.process_meeting.assert_awaited_once_with(meeting_id, mock_user.id)


@pytest.mark.asyncio
async def test_process_meeting_api_not_found(api_client, mock_suggestion_service):
    mock_suggestion_service.process_meeting = AsyncMock(
        side_effect=NotFoundError("MEETING_NOT_FOUND")
    )

    response = await api_client.post(f"/api/v1/meetings/{uuid4()}/process")

    assert response.status_code == 404
    assert response.json()["detail"]["error"] == "NOT_FOUND"


# ===== POST /suggestions/{id}/approve =====


@pytest.mark.asyncio
async def test_approve_suggestion_api(api_client, mock_suggestion_service, mock_user):
    suggestion_id = uuid4()
    now = datetime.now(timezone.utc)
    mock_suggestion_service.approve_suggestion = AsyncMock(
        return_value=TaskResponse(
            id=uuid4(),
            project_id=uuid4(),
            meeting_id=uuid4(),
            title="Renew vendor contract",
            description="vendor contract renewal",
            status="TODO",
            priority="HIGH",
            estimated_hours=2.0,
            assigned_to=mock_user.id,
            due_date=now,
            created_by=mock_user.id,
            created_at=now,
        )
    )

    response = await api_client.post(
        f"/api/v1/suggestions/{suggestion_id}/approve",
        json={"priority": "HIGH", "estimatedHours": 2},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "Renew vendor contract"
    assert data["estimatedHours"] == 2.0
    assert data["assignedTo"] == str(mock_user.id)

    args = mock_suggestion_service.approve_suggestion.call_args.args
    assert args[0] == suggestion_id
    assert args[2].priority.value == "HIGH"
    assert args[2].estimated_hours == 2


@pytest.mark.asyncio
async def test_approve_suggestion_api_conflict(api_client, mock_suggestion_service):
    mock_suggestion_service.approve_suggestion = AsyncMock(
        side_effect=ConflictError("SUGGESTION_ALREADY_REVIEWED")
    )

    response = await api_client.post(f"/api/v1/suggestions/{uuid4()}/approve", json={})

    assert response.status_code == 409
    assert response.json()["detail"]["error"] == "CONFLICT"


@pytest.mark.asyncio
async def test_approve_suggestion_api_invalid_hours(api_client, mock_suggestion_service):
    """estimatedHours는 양수"""
    response = await api_client.post(
        f"/api/v1/suggestions/{uuid4()}/approve", json={"estimatedHours": 0}
    )

    assert response.status_code == 422
    mock_suggestion_service.approve_suggestion.assert_not_called()


# ===== POST /suggestions/{id}/reject =====


@pytest.mark.asyncio
async def test_reject_suggestion_api(api_client, mock_suggestion_service, mock_user):
    suggestion_id = uuid4()
    mock_suggestion_service.reject_suggestion = AsyncMock(
        return_value=RejectSuggestionResponse(message="Suggestion rejected successfully")
    )

    response = await api_client.post(
        f"/api/v1/suggestions/{suggestion_id}/reject", json={"reason": "Duplicate"}
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Suggestion rejected successfully"
    mock_suggestion_service.reject_suggestion.assert_awaited_once_with(
        suggestion_id, mock_user.id, "Duplicate"
    )


@pytest.mark.asyncio
async def test_reject_suggestion_api_reason_required(api_client, mock_suggestion_service):
    mock_suggestion_service.reject_suggestion = AsyncMock(
        side_effect=ValidationError("REJECTION_REASON_REQUIRED")
    )

    response = await api_client.post(
        f"/api/v1/suggestions/{uuid4()}/reject", json={"reason": "  "}
    )

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "VALIDATION_ERROR"


# ===== 인증 =====


@pytest.mark.asyncio
async def test_suggestions_api_requires_auth():
    """토큰 없이 요청하면 거부"""
    from app.main import app

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/api/v1/suggestions")

    assert response.status_code in (401, 403)


# ===== 전체 흐름 (실제 DB) =====


@pytest.mark.asyncio
async def test_suggestion_flow_end_to_end(async_client: AsyncClient, test_meeting, test_user):
    """처리 → 목록 → 승인 → 거절 → 대기 목록"""
    headers = {"Authorization": f"Bearer {create_access_token(str(test_user.id))}"}

    response = await async_client.post(
        f"/api/v1/meetings/{test_meeting.id}/process", headers=headers
    )
    assert response.status_code == 201
    created = response.json()
    assert len(created) == 3

    response = await async_client.post(
        f"/api/v1/suggestions/{created[0]['id']}/approve", json={}, headers=headers
    )
    assert response.status_code == 201
    assert response.json()["title"] == created[0]["suggestedTask"]

    response = await async_client.post(
        f"/api/v1/suggestions/{created[1]['id']}/reject",
        json={"reason": "Not needed"},
        headers=headers,
    )
    assert response.status_code == 200

    response = await async_client.post(
        f"/api/v1/suggestions/{created[0]['id']}/approve", json={}, headers=headers
    )
    assert response.status_code == 409

    response = await async_client.get("/api/v1/suggestions", headers=headers)
    assert response.status_code == 200
    pending = response.json()
    assert [p["id"] for p in pending] == [created[2]["id"]]


@pytest.mark.asyncio
async def test_suggestion_flow_forbidden_for_other_user(
    async_client: AsyncClient, test_meeting, test_user2
):
    headers = {"Authorization": f"Bearer {create_access_token(str(test_user2.id))}"}

    response = await async_client.post(
        f"/api/v1/meetings/{test_meeting.id}/process", headers=headers
    )

    assert response.status_code == 403
    assert response.json()["detail"]["error"] == "FORBIDDEN"
