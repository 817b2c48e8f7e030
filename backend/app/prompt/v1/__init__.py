"""Prompt v1 패키지

Version 1.0 프롬프트 모음.
워크플로우별로 구조화되어 있습니다.

패키지 구조:
    - workflows/: 데이터 처리 워크플로우 프롬프트
        - task_suggestion/: 회의록 → 태스크 제안 추출
"""

from . import workflows

__all__ = ["workflows"]
