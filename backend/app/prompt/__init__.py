"""Prompt 패키지

프롬프트 버전 관리를 위한 패키지.
각 버전은 하위 폴더에서 관리됩니다.

사용 예시:
    from app.prompt.v1.workflows.task_suggestion import build_suggestion_prompts
"""
