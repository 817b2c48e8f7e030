"""Oracle 응답 해석 및 정규화

외부 시스템 응답 형태를 통제할 수 없으므로 여러 형태를 허용합니다.
1. chat-completion 응답에서 첫 번째 choice의 message content(JSON 문자열) 추출
2. JSON 문서 형태 판별: 배열 → 알려진 래퍼 키 순서대로 → 인식 불가(빈 목록)
3. 항목별 누락 필드 보정 및 confidenceScore 범위 보정
"""

import json
import logging
import math
from enum import Enum
from typing import Any

from app.core.constants import (
    DEFAULT_CONFIDENCE_SCORE,
    DEFAULT_SUGGESTED_TASK,
    MAX_SUGGESTED_TASK_LENGTH,
    ORIGINAL_TEXT_FALLBACK_LENGTH,
)
from app.schemas.suggestion import SuggestionDraft

logger = logging.getLogger(__name__)

# 제안 배열을 담을 수 있는 래퍼 키 (우선순위 순)
SUGGESTION_WRAPPER_KEYS = ("suggestions", "tasks", "items")


class OracleResponseError(ValueError):
    """chat-completion 응답 구조가 예상과 다름"""


class ResponseShape(str, Enum):
    """Oracle JSON 문서 형태"""

    ARRAY = "array"
    WRAPPED = "wrapped"
    UNRECOGNIZED = "unrecognized"


def extract_message_content(data: Any) -> str:
    """chat-completion 응답에서 첫 번째 choice의 message content 추출

    content가 비어 있으면 빈 JSON 객체("{}")로 취급합니다.

    Raises:
        OracleResponseError: choices/message 구조가 없음
    """
    if not isinstance(data, dict):
        raise OracleResponseError("response body is not a JSON object")

    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        raise OracleResponseError("response has no choices")

    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    if not isinstance(message, dict):
        raise OracleResponseError("first choice has no message")

    content = message.get("content")
    if not content:
        return "{}"
    if not isinstance(content, str):
        raise OracleResponseError("message content is not a string")
    return content


def strip_code_fence(text: str) -> str:
    """```json ... ``` 블록으로 감싼 응답에서 JSON 본문만 추출"""
    if "```json" in text:
        return text.split("```json")[1].split("```")[0].strip()
    if "```" in text:
        return text.split("```")[1].split("```")[0].strip()
    return text.strip()


def decode_suggestion_items(document: Any) -> tuple[ResponseShape, list[Any]]:
    """JSON 문서에서 제안 배열 추출

    Returns:
        (문서 형태, 제안 항목 목록). 인식할 수 없는 형태는 빈 목록.
    """
    if isinstance(document, list):
        return ResponseShape.ARRAY, document

    if isinstance(document, dict):
        for key in SUGGESTION_WRAPPER_KEYS:
            value = document.get(key)
            if isinstance(value, list):
                return ResponseShape.WRAPPED, value

    return ResponseShape.UNRECOGNIZED, []


def normalize_confidence(value: Any) -> float:
    """confidenceScore를 [0.0, 1.0]으로 보정 (숫자가 아니면 기본값)"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_CONFIDENCE_SCORE
    if math.isnan(value):
        return DEFAULT_CONFIDENCE_SCORE
    return max(0.0, min(1.0, float(value)))


def normalize_suggestion(item: dict[str, Any], notes: str) -> SuggestionDraft:
    """항목 하나를 SuggestionDraft로 정규화"""
    original_text = item.get("originalText")
    suggested_task = item.get("suggestedTask")
    description = item.get("suggestedDescription")

    return SuggestionDraft(
        original_text=(
            original_text
            if isinstance(original_text, str) and original_text
            else notes[:ORIGINAL_TEXT_FALLBACK_LENGTH]
        ),
        suggested_task=(
            suggested_task[:MAX_SUGGESTED_TASK_LENGTH]
            if isinstance(suggested_task, str) and suggested_task
            else DEFAULT_SUGGESTED_TASK
        ),
        suggested_description=description if isinstance(description, str) else None,
        confidence_score=normalize_confidence(item.get("confidenceScore")),
    )


def normalize_suggestions(items: list[Any], notes: str) -> list[SuggestionDraft]:
    """제안 목록 정규화 (객체가 아닌 항목은 건너뜀)"""
    drafts = []
    for item in items:
        if not isinstance(item, dict):
            logger.debug(f"Skipping non-object suggestion item: {item!r}")
            continue
        drafts.append(normalize_suggestion(item, notes))
    return drafts


def parse_oracle_content(content: str, notes: str) -> list[SuggestionDraft]:
    """message content(JSON 문자열)를 정규화된 제안 목록으로 변환

    Raises:
        json.JSONDecodeError: content가 JSON이 아님
    """
    document = json.loads(strip_code_fence(content))
    shape, items = decode_suggestion_items(document)

    if shape == ResponseShape.UNRECOGNIZED:
        logger.warning("Oracle response shape not recognized, treating as empty")

    return normalize_suggestions(items, notes)
