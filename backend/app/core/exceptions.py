"""서비스 레이어 에러 타입

모든 에러는 ValueError를 상속하고 에러 코드를 메시지로 전달합니다.
API 레이어의 handle_service_error가 str(error)로 HTTP 응답을 매핑합니다.
"""


class ServiceError(ValueError):
    """서비스 레이어 기본 에러 (str(error) == 에러 코드)"""

    def __init__(self, code: str):
        self.code = code
        super().__init__(code)


class NotFoundError(ServiceError):
    """대상 회의/제안이 존재하지 않음"""


class ForbiddenError(ServiceError):
    """회의 작성자가 아닌 사용자의 접근"""


class ValidationError(ServiceError):
    """입력값 검증 실패 (예: 거절 사유 누락)"""


class ConflictError(ServiceError):
    """이미 검토가 끝난 제안에 대한 상태 전이 요청"""
