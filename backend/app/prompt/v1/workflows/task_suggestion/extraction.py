"""태스크 제안 추출 프롬프트

Version: 1.0.0
Description: 회의록에서 실행 가능한 태스크 제안을 추출하는 프롬프트.
    기존 태스크 목록이 주어지면 의미 기준 중복 제거 지침과 목록을 추가합니다.
Changelog:
    1.0.0: 초기 버전
"""

from collections.abc import Sequence

from app.schemas.task import ExistingTaskSummary

VERSION = "1.0.0"

# 기존 태스크 컨텍스트가 없을 때 요청하는 최소 제안 수
MIN_SUGGESTION_COUNT = 3

# =============================================================================
# System 프롬프트
# =============================================================================

SUGGESTION_SYSTEM_PROMPT = """You are an intelligent task extraction and refinement assistant. Your role is to:
1. Extract actionable tasks from meeting notes
2. Transform vague, broad, or incomplete mentions into specific, actionable tasks
3. Fill in missing details based on context and common business practices
4. Break down high-level goals into concrete, executable steps

CRITICAL INSTRUCTIONS:
- When you encounter vague mentions like "work on X", "handle Y", "look into Z", transform them into specific actions
- Add missing details: WHO should do it, WHAT specifically needs to be done, WHEN it's needed (if mentioned), and WHY it matters
- Break down broad tasks into 2-4 smaller, specific sub-tasks that can be completed independently
- Make every task title start with an action verb (Create, Review, Update, Schedule, Prepare, Design, Implement, etc.)
- Ensure tasks are SMART: Specific, Measurable, Achievable, Relevant, Time-bound (where context allows)

Return a JSON object with a "suggestions" array, each containing:
- originalText: The exact excerpt from notes that led to this suggestion (quote directly)
- suggestedTask: A concise, specific, actionable task title (8-12 words, action verb first)
- suggestedDescription: A detailed, intelligent description (2-4 sentences) that explains WHAT needs to be done, WHY it's important, and HOW to approach it.
- confidenceScore: 0.0-1.0 indicating confidence this is a clear, actionable task"""

# 기존 태스크가 있을 때 System 프롬프트에 덧붙이는 지침
DUPLICATE_DETECTION_INSTRUCTION = """

DUPLICATE DETECTION:
When comparing with existing tasks, understand SEMANTIC MEANING and INTENT, not just word matching.
Do not suggest a task whose purpose duplicates an existing task, even if it is worded differently.
Only suggest tasks that are genuinely new with unique goals, not variations of existing ones."""

RESPONSE_FORMAT_EXAMPLE = (
    '{"suggestions": [{"originalText": "[exact quote]", "suggestedTask": "[refined task]", '
    '"suggestedDescription": "[intelligent description]", "confidenceScore": 0.8}, ...]}'
)

# =============================================================================
# User 프롬프트
# =============================================================================

USER_PROMPT_TEMPLATE = """Extract and refine actionable tasks from these meeting notes:

{notes}

Return a JSON object with a "suggestions" array containing at least {min_count} refined task suggestions.
Format: {response_format}"""

USER_PROMPT_WITH_EXISTING_TASKS_TEMPLATE = """EXISTING TASKS (already created - DO NOT duplicate these in intent or purpose):

{existing_tasks}

MEETING NOTES:
{notes}

Return a JSON object with a "suggestions" array containing ONLY new, detailed, actionable tasks that are not covered by existing tasks.
Format: {response_format}"""


def _format_existing_tasks(existing_tasks: Sequence[ExistingTaskSummary]) -> str:
    """기존 태스크를 번호 목록으로 변환"""
    lines = []
    for index, task in enumerate(existing_tasks, start=1):
        entry = f'{index}. "{task.title}"'
        if task.description:
            entry += f"\n   Purpose: {task.description}"
        lines.append(entry)
    return "\n\n".join(lines)


def build_system_prompt(has_existing_tasks: bool) -> str:
    """System 프롬프트 생성"""
    if has_existing_tasks:
        return SUGGESTION_SYSTEM_PROMPT + DUPLICATE_DETECTION_INSTRUCTION
    return SUGGESTION_SYSTEM_PROMPT


def build_user_prompt(
    notes: str, existing_tasks: Sequence[ExistingTaskSummary] | None = None
) -> str:
    """User 프롬프트 생성"""
    if existing_tasks:
        return USER_PROMPT_WITH_EXISTING_TASKS_TEMPLATE.format(
            existing_tasks=_format_existing_tasks(existing_tasks),
            notes=notes,
            response_format=RESPONSE_FORMAT_EXAMPLE,
        )
    return USER_PROMPT_TEMPLATE.format(
        notes=notes,
        min_count=MIN_SUGGESTION_COUNT,
        response_format=RESPONSE_FORMAT_EXAMPLE,
    )


def build_suggestion_prompts(
    notes: str, existing_tasks: Sequence[ExistingTaskSummary] | None = None
) -> tuple[str, str]:
    """(system, user) 프롬프트 쌍 생성

    입력만으로 결정되는 순수 함수입니다. 빈 회의록도 그대로 전달합니다.

    Args:
        notes: 회의록 원문
        existing_tasks: 같은 프로젝트의 기존 태스크 요약 (없으면 None 또는 빈 목록)

    Returns:
        (system_prompt, user_prompt)
    """
    has_existing_tasks = bool(existing_tasks)
    return (
        build_system_prompt(has_existing_tasks),
        build_user_prompt(notes, existing_tasks),
    )
