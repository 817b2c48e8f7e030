"""Workflows 프롬프트

데이터 처리 워크플로우에서 사용하는 프롬프트 모음.
- task_suggestion/: 회의록에서 태스크 제안 추출 (기존 태스크 중복 방지 포함)
"""

from . import task_suggestion

__all__ = ["task_suggestion"]
