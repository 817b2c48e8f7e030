"""회의록 → 태스크 제안 Oracle 연동

- oracle_client: 외부 추론 엔드포인트 호출 및 fallback 처리
- response_parser: Oracle 응답 문서 해석 및 정규화
- fallback: Oracle 사용 불가 시 결정적 제안 세트
"""

from app.infrastructure.suggestion.fallback import build_fallback_suggestions
from app.infrastructure.suggestion.oracle_client import (
    OracleConfig,
    OracleResult,
    SuggestionOracleClient,
)

__all__ = [
    "OracleConfig",
    "OracleResult",
    "SuggestionOracleClient",
    "build_fallback_suggestions",
]
