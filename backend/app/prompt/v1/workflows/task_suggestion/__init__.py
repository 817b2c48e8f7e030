"""회의록 → 태스크 제안 추출 프롬프트"""

from .extraction import (
    DUPLICATE_DETECTION_INSTRUCTION,
    MIN_SUGGESTION_COUNT,
    RESPONSE_FORMAT_EXAMPLE,
    SUGGESTION_SYSTEM_PROMPT,
    VERSION,
    build_suggestion_prompts,
    build_system_prompt,
    build_user_prompt,
)

__all__ = [
    "DUPLICATE_DETECTION_INSTRUCTION",
    "MIN_SUGGESTION_COUNT",
    "RESPONSE_FORMAT_EXAMPLE",
    "SUGGESTION_SYSTEM_PROMPT",
    "VERSION",
    "build_suggestion_prompts",
    "build_system_prompt",
    "build_user_prompt",
]
