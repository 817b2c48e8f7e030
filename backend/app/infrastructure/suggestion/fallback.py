"""Oracle 사용 불가 시 반환하는 결정적 제안 세트

Oracle이 미설정이거나 호출/파싱에 실패해도 저장, 검토, 태스크 생성
흐름이 동일하게 동작하도록 항상 같은 형태의 제안 3개를 반환합니다.
"""

from app.schemas.suggestion import SuggestionDraft

# (회의록 구간 시작, 구간 끝, 구간이 비었을 때 대체 문구, 제목, 설명, 신뢰도)
FALLBACK_TEMPLATES: list[tuple[int, int, str, str, str, float]] = [
    (
        0,
        100,
        "Meeting discussion about project planning",
        "Create project plan document based on meeting discussion",
        "Develop a comprehensive project plan document that outlines key phases, "
        "deliverables, milestones, and resource allocation.",
        0.85,
    ),
    (
        100,
        200,
        "Follow-up actions needed",
        "Schedule follow-up meeting to review progress",
        "Organize a follow-up meeting with relevant stakeholders to review the "
        "current progress of tasks.",
        0.78,
    ),
    (
        200,
        300,
        "Communication and documentation tasks",
        "Send meeting summary email to all participants",
        "Draft and send a concise summary email of the meeting outcomes, "
        "decisions made, and assigned action items.",
        0.92,
    ),
]


def build_fallback_suggestions(notes: str) -> list[SuggestionDraft]:
    """회의록 고정 구간(0-100, 100-200, 200-300)에서 제안 3개 생성"""
    notes = notes or ""
    return [
        SuggestionDraft(
            original_text=notes[start:end] or placeholder,
            suggested_task=title,
            suggested_description=description,
            confidence_score=confidence,
        )
        for start, end, placeholder, title, description, confidence in FALLBACK_TEMPLATES
    ]
