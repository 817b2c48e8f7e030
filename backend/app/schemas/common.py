"""공통 에러 스키마

서비스 에러는 HTTPException(detail={"error": ..., "message": ...})로 변환되므로
응답 본문은 {"detail": {"error": ..., "message": ...}} 형태입니다.
"""

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """에러 코드와 메시지"""

    error: str
    message: str


class ErrorResponse(BaseModel):
    """에러 응답 (OpenAPI 문서용)"""

    detail: ErrorDetail
