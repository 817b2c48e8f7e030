"""서비스 에러 타입 단위 테스트"""

import pytest

from app.api.dependencies import SERVICE_ERROR_MAPPING
from app.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ServiceError,
    ValidationError,
)


@pytest.mark.parametrize(
    ("error_class", "code", "status_code"),
    [
        (NotFoundError, "MEETING_NOT_FOUND", 404),
        (NotFoundError, "SUGGESTION_NOT_FOUND", 404),
        (ForbiddenError, "MEETING_ACCESS_DENIED", 403),
        (ForbiddenError, "SUGGESTION_ACCESS_DENIED", 403),
        (ValidationError, "REJECTION_REASON_REQUIRED", 400),
        (ConflictError, "SUGGESTION_ALREADY_REVIEWED", 409),
    ],
)
def test_service_error_codes_are_mapped(error_class, code, status_code):
    """모든 서비스 에러 코드는 HTTP 상태로 매핑됨"""
    error = error_class(code)

    assert isinstance(error, ServiceError)
    assert isinstance(error, ValueError)
    assert error.code == code
    assert str(error) == code
    assert SERVICE_ERROR_MAPPING[str(error)][0] == status_code


def test_handle_service_error_body_matches_error_response():
    """HTTPException detail은 ErrorResponse.detail 형태"""
    from fastapi import HTTPException

    from app.api.dependencies import handle_service_error
    from app.schemas.common import ErrorResponse

    with pytest.raises(HTTPException) as exc_info:
        handle_service_error(ConflictError("SUGGESTION_ALREADY_REVIEWED"))

    body = ErrorResponse.model_validate({"detail": exc_info.value.detail})
    assert exc_info.value.status_code == 409
    assert body.detail.error == "CONFLICT"
    assert body.detail.message == "Suggestion has already been reviewed"


def test_handle_service_error_unknown_code():
    from fastapi import HTTPException

    from app.api.dependencies import handle_service_error

    with pytest.raises(HTTPException) as exc_info:
        handle_service_error(ValueError("SOMETHING_ELSE"), "Invalid request")

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == {"error": "VALIDATION_ERROR", "message": "Invalid request"}
